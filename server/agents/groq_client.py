"""
Groq API Client

Thin async wrapper around the Groq Python SDK. Sends one JSON-mode chat
completion per call and returns the raw message content. Makes a single
attempt: no retries, no backoff.
"""
from __future__ import annotations

import logging
import time

from groq import APIError, APIStatusError, AsyncGroq

from sentiment_feed.core.types import AnalysisError

logger = logging.getLogger(__name__)

MODEL = "llama-3.1-8b-instant"


class GroqClient:
    """
    Async Groq chat-completion client.

    Construct once per run and pass it to the analyzer. An empty api_key is
    accepted here; the service rejects it on the first request.
    """

    def __init__(self, api_key: str = "", model: str = MODEL) -> None:
        self.model = model
        self._client = AsyncGroq(api_key=api_key)

    async def complete_json(self, user_prompt: str) -> str:
        """
        Send a single user message in JSON mode and return the content text.

        Returns an empty string when the completion has no content.
        Raises AnalysisError on any API or network failure.
        """
        messages = [{"role": "user", "content": user_prompt}]

        t0 = time.monotonic()
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
                stream=False,
            )
        except APIStatusError as e:
            raise AnalysisError(
                f"Groq API error {e.status_code}: {e}",
                model=self.model,
                status_code=e.status_code,
            ) from e
        except APIError as e:
            raise AnalysisError(f"Groq request failed: {e}", model=self.model) from e

        elapsed_ms = (time.monotonic() - t0) * 1000
        logger.debug(f"Groq completion in {elapsed_ms:.0f}ms")

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        await self._client.close()
