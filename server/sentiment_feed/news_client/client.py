"""
CryptoCompare News Client

Fetches the latest market headlines from the public CryptoCompare news API.
"""
from __future__ import annotations

import asyncio
import logging

import aiohttp

from sentiment_feed.core.types import SourceUnavailable
from sentiment_feed.models.news import RawNewsItem
from sentiment_feed.news_client.normalizer import normalize_batch

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://min-api.cryptocompare.com/data/v2/news/?lang=EN"
DEFAULT_BATCH_SIZE = 5
PAYLOAD_FIELD = "Data"


class CryptoCompareNewsClient:
    """
    One-shot HTTP client for the CryptoCompare news endpoint.

    Use as an async context manager, or pass in a session you own:

        async with CryptoCompareNewsClient() as client:
            items = await client.fetch_latest()
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        batch_size: int = DEFAULT_BATCH_SIZE,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.url = url
        self.batch_size = batch_size
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> CryptoCompareNewsClient:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def fetch_latest(self) -> list[RawNewsItem]:
        """
        Fetch the newest headlines, bounded to batch_size.

        Raises:
            SourceUnavailable: On network or HTTP failure, an undecodable
                body, or a payload without a list under "Data".
        """
        if self._session is None:
            raise RuntimeError("Use async context manager: async with client:")

        logger.info("Fetching latest news", extra={"url": self.url})

        try:
            async with self._session.get(self.url) as resp:
                resp.raise_for_status()
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SourceUnavailable(f"News request failed: {e}", url=self.url) from e
        except ValueError as e:
            raise SourceUnavailable(f"News payload is not valid JSON: {e}", url=self.url) from e

        entries = data.get(PAYLOAD_FIELD) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise SourceUnavailable(
                f"News payload has no '{PAYLOAD_FIELD}' list",
                url=self.url,
                context={"message": data.get("Message") if isinstance(data, dict) else None},
            )

        items = normalize_batch(entries, self.batch_size)
        logger.info(f"Retrieved {len(entries)} entries, kept {len(items)}")
        return items
