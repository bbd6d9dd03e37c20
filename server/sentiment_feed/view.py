"""
Text rendering of the intelligence stream for the terminal.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sentiment_feed.core.types import MalformedTimestamp
from sentiment_feed.models.news import AnalyzedNewsRecord
from sentiment_feed.orchestrator import IntelligenceFeed
from sentiment_feed.timefmt import format_published_time

LOADING_TEXT = "SYNCHRONIZING_STREAM..."
HEADER = "LIVE INTELLIGENCE STREAM"
RULE = "─" * 60


def render_record(record: AnalyzedNewsRecord, now: Optional[datetime] = None) -> str:
    analysis = record.analysis
    marker = "+" if analysis.is_bullish else "-"
    label = analysis.label or "UNKNOWN"
    try:
        age = format_published_time(record.created_at, now=now)
    except MalformedTimestamp:
        age = ""

    lines = [
        f"[{marker}] {label}  {age}".rstrip(),
        record.title,
        f'  "{analysis.summary or ""}"',
        f"  {record.url}",
    ]
    return "\n".join(lines)


def render_stream(feed: IntelligenceFeed, now: Optional[datetime] = None) -> str:
    """Render the feed's current state. Shows only the loading text until loaded."""
    if feed.loading:
        return LOADING_TEXT
    blocks = [HEADER, RULE]
    for record in feed.news_list:
        blocks.append(render_record(record, now=now))
        blocks.append(RULE)
    return "\n".join(blocks)
