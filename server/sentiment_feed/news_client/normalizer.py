"""
CryptoCompare Payload Normalizer

Transforms entries of the CryptoCompare news payload into RawNewsItem.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sentiment_feed.models.news import RawNewsItem

logger = logging.getLogger(__name__)


def _parse_published_on(value: Any) -> Optional[datetime]:
    """Convert unix seconds to an aware UTC datetime, None if unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def normalize_item(data: Any) -> Optional[RawNewsItem]:
    """
    Convert one payload entry to a RawNewsItem.

    Returns None for entries that are not objects or have no title.
    """
    if not isinstance(data, dict):
        return None

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        logger.debug("Dropping news entry without title", extra={"id": data.get("id")})
        return None

    url = data.get("url")
    source = data.get("source")
    return RawNewsItem(
        title=title,
        url=url if isinstance(url, str) else "",
        published_at=_parse_published_on(data.get("published_on")),
        source=source if isinstance(source, str) else "",
    )


def normalize_batch(entries: list[Any], limit: int) -> list[RawNewsItem]:
    """
    Take the first *limit* entries and normalize them.

    The cut is applied before normalization, so a dropped entry is not
    replaced by a later one.
    """
    items: list[RawNewsItem] = []
    for entry in entries[:limit]:
        item = normalize_item(entry)
        if item is not None:
            items.append(item)
    return items
