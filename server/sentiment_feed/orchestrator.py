"""
Cache-Fill Orchestrator

One pass per page load:

    INIT -> STORE_CHECK -> RENDER_FROM_STORE                       -> DONE
                        -> FETCH_RAW -> ANALYZE_LOOP -> RENDER_FROM_FRESH -> DONE
    (any pipeline-level exception)      -> ERROR                   -> DONE

A store hit short-circuits all external calls. On a miss, headlines are
analyzed strictly one after another; a failed item is recorded and skipped
without aborting the batch.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from sentiment_feed.interface import NewsSource, NewsStore, SentimentScorer
from sentiment_feed.models.news import AnalyzedNewsRecord, RawNewsItem
from sentiment_feed.timefmt import utc_now

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

Clock = Callable[[], datetime]


class FillState(str, Enum):
    INIT = "init"
    STORE_CHECK = "store_check"
    RENDER_FROM_STORE = "render_from_store"
    FETCH_RAW = "fetch_raw"
    ANALYZE_LOOP = "analyze_loop"
    RENDER_FROM_FRESH = "render_from_fresh"
    ERROR = "error"
    DONE = "done"


class FillOrigin(str, Enum):
    """Where the display list came from."""

    STORE = "store"
    FRESH = "fresh"
    ERROR = "error"


@dataclass(frozen=True)
class ItemOutcome:
    """Result of processing one raw headline: a record or a failure reason."""

    item: RawNewsItem
    record: Optional[AnalyzedNewsRecord] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class FillResult:
    records: list[AnalyzedNewsRecord] = field(default_factory=list)
    outcomes: list[ItemOutcome] = field(default_factory=list)
    origin: FillOrigin = FillOrigin.FRESH
    error: Optional[Exception] = None

    @property
    def skipped(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.ok]


class CacheFillOrchestrator:
    """
    Read-through cache fill over explicitly supplied gateways.

    The orchestrator owns error containment: run() never raises.
    """

    def __init__(
        self,
        store: NewsStore,
        source: NewsSource,
        analyzer: SentimentScorer,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Clock = utc_now,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._store = store
        self._source = source
        self._analyzer = analyzer
        self._page_size = page_size
        self._clock = clock
        self._state = FillState.INIT

    @property
    def state(self) -> FillState:
        return self._state

    def _transition(self, state: FillState) -> None:
        logger.debug(f"Cache fill {self._state.value} -> {state.value}")
        self._state = state

    async def run(self) -> FillResult:
        """Execute one cache-fill pass and return the display list."""
        self._state = FillState.INIT
        result = FillResult()

        try:
            self._transition(FillState.STORE_CHECK)
            cached = await self._store.fetch_recent(self._page_size)

            if cached:
                self._transition(FillState.RENDER_FROM_STORE)
                logger.info(f"Serving {len(cached)} cached analyses from store")
                result.records = list(cached)
                result.origin = FillOrigin.STORE
                return result

            self._transition(FillState.FETCH_RAW)
            raw_items = await self._source.fetch_latest()
            logger.info(f"Store empty — analyzing {len(raw_items)} fresh headlines")

            self._transition(FillState.ANALYZE_LOOP)
            for item in raw_items:
                outcome = await self._process_item(item)
                result.outcomes.append(outcome)
                if outcome.record is not None:
                    result.records.append(outcome.record)

            self._transition(FillState.RENDER_FROM_FRESH)
            result.origin = FillOrigin.FRESH
            if result.skipped:
                logger.warning(
                    f"Cache fill skipped {len(result.skipped)} of "
                    f"{len(result.outcomes)} headlines"
                )
            return result

        except Exception as e:
            self._transition(FillState.ERROR)
            logger.error(f"Cache fill failed: {e}", exc_info=True)
            result.origin = FillOrigin.ERROR
            result.error = e
            return result

        finally:
            self._transition(FillState.DONE)

    async def _process_item(self, item: RawNewsItem) -> ItemOutcome:
        """Analyze and persist one headline. Failures become outcomes."""
        try:
            analysis = await self._analyzer.analyze(item.title)
            record = AnalyzedNewsRecord(
                title=item.title,
                url=item.url,
                analysis=analysis,
                created_at=self._clock(),
            )
            await self._store.append(record)
        except Exception as e:
            logger.error(
                f"Skipping headline: {e}",
                extra={"title": item.title[:80]},
            )
            return ItemOutcome(item=item, reason=f"{type(e).__name__}: {e}")

        return ItemOutcome(item=item, record=record)


class IntelligenceFeed:
    """
    Page-instance view model: the list the presentation shell renders plus
    its loading flag. The pipeline runs at most once per instance.
    """

    def __init__(self, orchestrator: CacheFillOrchestrator) -> None:
        self._orchestrator = orchestrator
        self.news_list: list[AnalyzedNewsRecord] = []
        self.loading = True
        self.result: Optional[FillResult] = None
        self._task: Optional[asyncio.Task[FillResult]] = None

    async def load(self) -> FillResult:
        """Run the pipeline on first call; concurrent and later callers share that run."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._load_once())
        return await self._task

    async def _load_once(self) -> FillResult:
        records: list[AnalyzedNewsRecord] = []
        try:
            self.result = await self._orchestrator.run()
            records = self.result.records
        finally:
            self.news_list = records
            self.loading = False
        return self.result
