"""
Sentiment Analyzer

Scores one headline per call via Groq. The model output is parsed
leniently: anything that is not a JSON object yields an empty analysis
instead of an error.
"""
from __future__ import annotations

import json
import logging

from agents.groq_client import GroqClient
from agents.prompts import PROMPT_VERSION, build_sentiment_prompt
from sentiment_feed.models.news import SentimentAnalysis

logger = logging.getLogger(__name__)


def parse_analysis(raw: str | None) -> SentimentAnalysis:
    """Parse model content into a SentimentAnalysis, empty on any parse failure."""
    if not raw:
        return SentimentAnalysis()
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Groq returned invalid JSON, using empty analysis: {raw[:80]!r}")
        return SentimentAnalysis()
    return SentimentAnalysis.from_dict(parsed)


class SentimentAnalyzer:
    """Satisfies SentimentScorer on top of a GroqClient."""

    prompt_version = PROMPT_VERSION

    def __init__(self, groq: GroqClient) -> None:
        self._groq = groq

    async def analyze(self, title: str) -> SentimentAnalysis:
        """
        Score a single headline.

        Raises AnalysisError if the Groq request fails.
        """
        raw = await self._groq.complete_json(build_sentiment_prompt(title))
        analysis = parse_analysis(raw)
        if analysis.is_empty:
            logger.info(f"Empty analysis for: {title[:60]}")
        else:
            logger.info(f"[{analysis.label}] score={analysis.score} {title[:50]}")
        return analysis
