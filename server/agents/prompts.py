"""
Groq Prompt Templates

Versioned prompt for headline sentiment scoring.
"""
from __future__ import annotations

PROMPT_VERSION = "v1"

OUTPUT_EXAMPLE = (
    '{"score": 0.8, "label": "BULLISH", '
    '"summary": "One professional English sentence summary"}'
)


def build_sentiment_prompt(title: str) -> str:
    """
    Build the single user message for one headline.

    The headline may be in any language; the reply must be English.
    """
    return (
        f'Analyze this crypto news: "{title}".\n'
        "STRICT REQUIREMENT: REPLY IN ENGLISH, even if the headline is in "
        "another language.\n"
        "Score is a float from 0.0 (very bearish) to 1.0 (very bullish). "
        "Label is BULLISH or BEARISH.\n"
        f"Return ONLY JSON: {OUTPUT_EXAMPLE}"
    )
