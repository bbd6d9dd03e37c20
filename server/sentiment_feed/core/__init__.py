"""
Sentiment Feed Core

Exception taxonomy shared by the gateways and the orchestrator.
"""
from sentiment_feed.core.types import (
    AnalysisError,
    MalformedTimestamp,
    SentimentFeedError,
    SourceUnavailable,
    StoreUnavailable,
    StoreWriteError,
)

__all__ = [
    "AnalysisError",
    "MalformedTimestamp",
    "SentimentFeedError",
    "SourceUnavailable",
    "StoreUnavailable",
    "StoreWriteError",
]
