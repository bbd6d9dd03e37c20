"""
News Data Models

Data structures for news items at each pipeline stage: raw items from the
external feed, the model's sentiment payload, and the persisted record.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from sentiment_feed.timefmt import parse_timestamp, to_iso


class SentimentLabel(str, Enum):
    """Known sentiment labels. The model is free to return anything else."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["SentimentLabel"]:
        """Normalize free-form label text, returning None if unrecognised."""
        if not value:
            return None
        upper = value.strip().upper()
        for member in cls:
            if member.value == upper:
                return member
        matches = [member for member in cls if member.value in upper]
        if len(matches) == 1:
            return matches[0]
        return None


@dataclass(frozen=True)
class RawNewsItem:
    """A headline from the external news feed. Never persisted."""

    title: str
    url: str
    published_at: Optional[datetime] = None
    source: str = ""

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("title must be non-empty string")
        if self.published_at is not None and self.published_at.tzinfo is None:
            raise ValueError("published_at must be timezone-aware")


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class SentimentAnalysis:
    """
    Sentiment payload returned by the language model.

    Every field may be absent: the model output is only checked for JSON
    parseability, so consumers must handle None for score, label and summary.
    """

    score: Optional[float] = None
    label: Optional[str] = None
    summary: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.score is None and self.label is None and self.summary is None

    @property
    def normalized_label(self) -> Optional[SentimentLabel]:
        return SentimentLabel.from_string(self.label)

    @property
    def is_bullish(self) -> bool:
        """Only an exact BULLISH label counts; everything else is negative style."""
        return self.label == SentimentLabel.BULLISH.value

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.score is not None:
            d["score"] = self.score
        if self.label is not None:
            d["label"] = self.label
        if self.summary is not None:
            d["summary"] = self.summary
        return d

    @classmethod
    def from_dict(cls, d: Any) -> SentimentAnalysis:
        """Build from parsed model JSON. Missing or mistyped fields become None."""
        if not isinstance(d, dict):
            return cls()
        return cls(
            score=_as_float(d.get("score")),
            label=_as_text(d.get("label")),
            summary=_as_text(d.get("summary")),
        )


@dataclass(frozen=True)
class AnalyzedNewsRecord:
    """
    A headline together with its sentiment analysis.

    Written once to the store and never updated. The document shape uses
    camelCase ``createdAt`` to match records already in the collection.
    """

    title: str
    url: str
    analysis: SentimentAnalysis
    created_at: datetime

    def __post_init__(self) -> None:
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")

    @property
    def created_at_iso(self) -> str:
        return to_iso(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "analysis": self.analysis.to_dict(),
            "createdAt": self.created_at_iso,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AnalyzedNewsRecord:
        return cls(
            title=d.get("title", ""),
            url=d.get("url", ""),
            analysis=SentimentAnalysis.from_dict(d.get("analysis")),
            created_at=parse_timestamp(d["createdAt"]),
        )
