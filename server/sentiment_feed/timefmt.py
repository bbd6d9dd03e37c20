"""
Timestamp helpers

Parsing, ISO serialization, and the coarse relative-age label shown next to
each analyzed headline ("Just Now", "5m ago", "3h ago", "2d ago").
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional, Union

from sentiment_feed.core.types import MalformedTimestamp

MINUTE = 60
HOUR = 3600
DAY = 86400

TimestampLike = Union[str, datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: TimestampLike) -> datetime:
    """
    Parse an ISO 8601 timestamp (or pass a datetime through) as aware UTC.

    Naive values are assumed to be UTC. A trailing 'Z' is accepted.

    Raises:
        MalformedTimestamp: If the value is empty or not parseable.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise MalformedTimestamp("Timestamp is empty or not a string", value=value)
        ts = value.strip()
        if ts.endswith("Z"):
            ts = ts[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(ts)
        except ValueError as e:
            raise MalformedTimestamp(f"Invalid timestamp format: {value}", value=value) from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Serialize as UTC ISO 8601 with millisecond precision and a 'Z' suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_published_time(
    value: TimestampLike,
    now: Optional[datetime] = None,
) -> str:
    """
    Convert a past instant into a coarse relative-age label.

    Thresholds are strict and evaluated in order; each count is floored.
    Future instants fall into "Just Now".

    Args:
        value: ISO 8601 string or datetime.
        now: Reference instant, defaults to the current UTC time.

    Raises:
        MalformedTimestamp: If value cannot be parsed.
    """
    past = parse_timestamp(value)
    reference = parse_timestamp(now) if now is not None else utc_now()

    diff = math.floor((reference - past).total_seconds())

    if diff < MINUTE:
        return "Just Now"
    if diff < HOUR:
        return f"{diff // MINUTE}m ago"
    if diff < DAY:
        return f"{diff // HOUR}h ago"
    return f"{diff // DAY}d ago"
