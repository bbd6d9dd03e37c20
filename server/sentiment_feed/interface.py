"""
Gateway Protocol Definitions

Interfaces the cache-fill orchestrator depends on. The Redis store, the
CryptoCompare client and the Groq analyzer satisfy them in production;
the in-memory store and mock_feed collaborators satisfy them offline.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from sentiment_feed.models.news import AnalyzedNewsRecord, RawNewsItem, SentimentAnalysis


@runtime_checkable
class NewsStore(Protocol):
    """Append-only collection of analyzed news, newest first."""

    async def fetch_recent(self, limit: int) -> list[AnalyzedNewsRecord]:
        """
        Return up to *limit* records ordered by created_at descending.

        Raises StoreUnavailable if the backend cannot be reached.
        """
        ...

    async def append(self, record: AnalyzedNewsRecord) -> str:
        """
        Persist one record and return the store-generated document id.

        Raises StoreWriteError on failure.
        """
        ...


@runtime_checkable
class NewsSource(Protocol):
    """Third-party feed of raw market headlines."""

    async def fetch_latest(self) -> list[RawNewsItem]:
        """
        Return a bounded batch of the latest headlines.

        Raises SourceUnavailable on network failure or a malformed payload.
        """
        ...


@runtime_checkable
class SentimentScorer(Protocol):
    """Scores one headline at a time."""

    async def analyze(self, title: str) -> SentimentAnalysis:
        """
        Return the model's sentiment for *title*.

        Raises AnalysisError on network or API failure.
        """
        ...
