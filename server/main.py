"""
sentinex — sentiment intelligence feed

Runs one cache-fill pass and prints the intelligence stream:
  - store hit: cached analyses from Redis, no external calls
  - store miss: CryptoCompare headlines → Groq sentiment → Redis → stream

Usage:
    cd server
    python main.py                  # live: Redis + CryptoCompare + Groq
    python main.py --mock           # mock headlines + mock analyzer + in-memory store
    python main.py --memory-store   # live news + Groq, nothing persisted
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from contextlib import AsyncExitStack

from dotenv import load_dotenv

load_dotenv(".env")

from sentiment_feed.config import Settings, load_settings  # noqa: E402
from sentiment_feed.core.types import StoreUnavailable  # noqa: E402
from sentiment_feed.orchestrator import CacheFillOrchestrator, IntelligenceFeed  # noqa: E402
from sentiment_feed.view import render_stream  # noqa: E402

logger = logging.getLogger("sentinex")


async def run(
    settings: Settings,
    *,
    use_mock: bool = False,
    use_memory_store: bool = False,
) -> IntelligenceFeed:
    async with AsyncExitStack() as stack:
        # ── Store ──────────────────────────────────────────────────
        if use_mock or use_memory_store:
            from sentiment_feed.store import InMemoryNewsStore
            store = InMemoryNewsStore()
            logger.info("Using in-memory store — nothing will be persisted")
        else:
            from sentiment_feed.store import RedisNewsStore
            store = RedisNewsStore(
                redis_url=settings.store.redis_url,
                collection=settings.store.collection,
            )
            try:
                await stack.enter_async_context(store)
            except StoreUnavailable as e:
                # Reads will fail inside the orchestrator and yield an empty stream
                logger.error(f"News store unavailable: {e}")

        # ── News source + analyzer ─────────────────────────────────
        if use_mock:
            from mock_feed import MockAnalyzer, MockNewsSource
            source = MockNewsSource(batch_size=settings.news_source.batch_size)
            analyzer = MockAnalyzer()
            logger.info("Mock mode — canned headlines, random sentiment")
        else:
            from agents.groq_client import GroqClient
            from agents.sentiment import SentimentAnalyzer
            from sentiment_feed.news_client import CryptoCompareNewsClient

            source = await stack.enter_async_context(
                CryptoCompareNewsClient(
                    url=settings.news_source.url,
                    batch_size=settings.news_source.batch_size,
                )
            )
            if not settings.groq.has_api_key:
                logger.warning("GROQ_API_KEY is not set — analysis requests will be rejected")
            groq = GroqClient(api_key=settings.groq.api_key, model=settings.groq.model)
            stack.push_async_callback(groq.close)
            analyzer = SentimentAnalyzer(groq)

        orchestrator = CacheFillOrchestrator(
            store,
            source,
            analyzer,
            page_size=settings.store.page_size,
        )
        feed = IntelligenceFeed(orchestrator)

        print(render_stream(feed))
        result = await feed.load()
        logger.info(
            f"Loaded {len(feed.news_list)} item(s) from {result.origin.value}"
            + (f", skipped {len(result.skipped)}" if result.skipped else "")
        )
        print(render_stream(feed))
        return feed


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="sentinex sentiment feed")
    parser.add_argument("--mock", action="store_true", help="Use mock headlines and analyzer")
    parser.add_argument("--memory-store", action="store_true", help="Use an in-memory store instead of Redis")
    args = parser.parse_args()

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s — %(message)s",
    )
    asyncio.run(run(settings, use_mock=args.mock, use_memory_store=args.memory_store))
