"""
In-Memory News Store

List-backed implementation of the NewsStore protocol for local development
and tests. Same ordering and failure contract as RedisNewsStore, without a
network hop.
"""
from __future__ import annotations

import logging
import uuid

from sentiment_feed.models.news import AnalyzedNewsRecord

logger = logging.getLogger(__name__)


class InMemoryNewsStore:
    """Dev stub satisfying NewsStore."""

    def __init__(self) -> None:
        self._docs: list[tuple[str, AnalyzedNewsRecord]] = []

    def seed(self, records: list[AnalyzedNewsRecord]) -> None:
        """Pre-load records for local development."""
        for record in records:
            self._docs.append((uuid.uuid4().hex, record))
        logger.info(f"Seeded {len(records)} records")

    async def fetch_recent(self, limit: int) -> list[AnalyzedNewsRecord]:
        if limit <= 0:
            return []
        ordered = sorted(self._docs, key=lambda d: d[1].created_at, reverse=True)
        return [record for _, record in ordered[:limit]]

    async def append(self, record: AnalyzedNewsRecord) -> str:
        doc_id = uuid.uuid4().hex
        self._docs.append((doc_id, record))
        return doc_id

    def __len__(self) -> int:
        return len(self._docs)
