"""
Sentiment Feed Data Models

Frozen dataclasses for raw headlines, model output, and stored records.
"""
from sentiment_feed.models.news import (
    AnalyzedNewsRecord,
    RawNewsItem,
    SentimentAnalysis,
    SentimentLabel,
)

__all__ = [
    "AnalyzedNewsRecord",
    "RawNewsItem",
    "SentimentAnalysis",
    "SentimentLabel",
]
