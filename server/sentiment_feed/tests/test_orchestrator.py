"""
Tests for sentiment_feed.orchestrator

Gateways are the in-memory store plus AsyncMock source/analyzer.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from sentiment_feed.core.types import (
    AnalysisError,
    SourceUnavailable,
    StoreUnavailable,
    StoreWriteError,
)
from sentiment_feed.models.news import AnalyzedNewsRecord, RawNewsItem, SentimentAnalysis
from sentiment_feed.orchestrator import (
    CacheFillOrchestrator,
    FillOrigin,
    FillState,
    IntelligenceFeed,
)
from sentiment_feed.store.memory import InMemoryNewsStore

BASE = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _raw(i: int) -> RawNewsItem:
    return RawNewsItem(title=f"Headline {i}", url=f"https://x/{i}")


def _analysis(i: int) -> SentimentAnalysis:
    return SentimentAnalysis(score=0.1 * i, label="BULLISH", summary=f"Summary {i}")


def _stored(i: int) -> AnalyzedNewsRecord:
    return AnalyzedNewsRecord(
        title=f"Stored {i}",
        url=f"https://s/{i}",
        analysis=_analysis(i),
        created_at=BASE - timedelta(hours=i),
    )


class _TickingClock:
    """Returns BASE, BASE+1s, BASE+2s, ... on successive calls."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> datetime:
        t = BASE + timedelta(seconds=self.calls)
        self.calls += 1
        return t


def _source(items=None, exc=None) -> MagicMock:
    source = MagicMock()
    source.fetch_latest = AsyncMock(return_value=items or [], side_effect=exc)
    return source


def _analyzer(side_effect) -> MagicMock:
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(side_effect=side_effect)
    return analyzer


def _orchestrator(store, source, analyzer, **kwargs) -> CacheFillOrchestrator:
    kwargs.setdefault("clock", _TickingClock())
    return CacheFillOrchestrator(store, source, analyzer, **kwargs)


# ── Store hit ─────────────────────────────────────────────────────────────────

async def test_store_hit_returns_records_without_external_calls():
    store = InMemoryNewsStore()
    seeded = [_stored(i) for i in range(4)]
    store.seed(seeded)
    source = _source([_raw(0)])
    analyzer = _analyzer([_analysis(0)])
    orch = _orchestrator(store, source, analyzer)

    result = await orch.run()

    assert result.records == seeded
    assert result.origin is FillOrigin.STORE
    assert result.outcomes == []
    source.fetch_latest.assert_not_called()
    analyzer.analyze.assert_not_called()
    assert len(store) == 4
    assert orch.state is FillState.DONE


async def test_store_is_queried_with_page_size():
    store = MagicMock()
    store.fetch_recent = AsyncMock(return_value=[_stored(0)])
    orch = _orchestrator(store, _source(), _analyzer([]))

    await orch.run()

    store.fetch_recent.assert_called_once_with(10)


def test_non_positive_page_size_raises():
    with pytest.raises(ValueError, match="positive"):
        CacheFillOrchestrator(InMemoryNewsStore(), _source(), _analyzer([]), page_size=0)


# ── Store miss ────────────────────────────────────────────────────────────────

async def test_store_miss_analyzes_and_persists_each_item():
    store = InMemoryNewsStore()
    items = [_raw(i) for i in range(5)]
    analyzer = _analyzer([_analysis(i) for i in range(5)])
    orch = _orchestrator(store, _source(items), analyzer)

    result = await orch.run()

    assert result.origin is FillOrigin.FRESH
    assert [r.title for r in result.records] == [i.title for i in items]
    assert [r.analysis for r in result.records] == [_analysis(i) for i in range(5)]
    assert len(store) == 5
    assert all(o.ok for o in result.outcomes)
    created = [r.created_at for r in result.records]
    assert created == sorted(created)
    assert [c.args[0] for c in analyzer.analyze.call_args_list] == [i.title for i in items]


async def test_analyzer_failure_skips_only_that_item():
    store = InMemoryNewsStore()
    items = [_raw(i) for i in range(3)]
    analyzer = _analyzer([_analysis(0), AnalysisError("Groq API error 500"), _analysis(2)])
    orch = _orchestrator(store, _source(items), analyzer)

    result = await orch.run()

    assert [r.title for r in result.records] == ["Headline 0", "Headline 2"]
    persisted = {r.title for r in await store.fetch_recent(10)}
    assert "Headline 1" not in persisted
    assert len(persisted) == 2
    [skipped] = result.skipped
    assert skipped.item == items[1]
    assert "AnalysisError" in skipped.reason
    assert [o.ok for o in result.outcomes] == [True, False, True]


async def test_store_write_failure_skips_item():
    store = MagicMock()
    store.fetch_recent = AsyncMock(return_value=[])
    store.append = AsyncMock(side_effect=["id0", StoreWriteError("READONLY"), "id2"])
    items = [_raw(i) for i in range(3)]
    orch = _orchestrator(store, _source(items), _analyzer([_analysis(i) for i in range(3)]))

    result = await orch.run()

    assert [r.title for r in result.records] == ["Headline 0", "Headline 2"]
    assert "StoreWriteError" in result.skipped[0].reason
    assert store.append.call_count == 3


async def test_all_items_failing_yields_empty_fresh_list():
    items = [_raw(i) for i in range(2)]
    orch = _orchestrator(
        InMemoryNewsStore(),
        _source(items),
        _analyzer([AnalysisError("down"), AnalysisError("down")]),
    )

    result = await orch.run()

    assert result.records == []
    assert result.origin is FillOrigin.FRESH
    assert len(result.skipped) == 2


async def test_empty_analysis_is_still_persisted():
    store = InMemoryNewsStore()
    orch = _orchestrator(store, _source([_raw(0)]), _analyzer([SentimentAnalysis()]))

    result = await orch.run()

    assert len(result.records) == 1
    assert result.records[0].analysis.is_empty
    assert len(store) == 1


async def test_analyzer_calls_are_sequential():
    in_flight = 0
    peak = 0

    async def slow_analyze(title):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return _analysis(0)

    analyzer = MagicMock()
    analyzer.analyze = slow_analyze
    orch = _orchestrator(InMemoryNewsStore(), _source([_raw(i) for i in range(4)]), analyzer)

    result = await orch.run()

    assert len(result.records) == 4
    assert peak == 1


# ── Pipeline-level failures ───────────────────────────────────────────────────

async def test_source_failure_yields_empty_list():
    analyzer = _analyzer([])
    orch = _orchestrator(
        InMemoryNewsStore(), _source(exc=SourceUnavailable("no Data")), analyzer
    )

    result = await orch.run()

    assert result.records == []
    assert result.origin is FillOrigin.ERROR
    assert isinstance(result.error, SourceUnavailable)
    analyzer.analyze.assert_not_called()
    assert orch.state is FillState.DONE


async def test_store_read_failure_yields_empty_list():
    store = MagicMock()
    store.fetch_recent = AsyncMock(side_effect=StoreUnavailable("refused"))
    source = _source([_raw(0)])
    orch = _orchestrator(store, source, _analyzer([]))

    result = await orch.run()

    assert result.records == []
    assert isinstance(result.error, StoreUnavailable)
    source.fetch_latest.assert_not_called()


async def test_unexpected_exception_is_absorbed():
    orch = _orchestrator(InMemoryNewsStore(), _source(exc=KeyError("Data")), _analyzer([]))

    result = await orch.run()

    assert result.origin is FillOrigin.ERROR
    assert isinstance(result.error, KeyError)


# ── IntelligenceFeed ──────────────────────────────────────────────────────────

async def test_feed_starts_loading_and_clears_flag():
    orch = _orchestrator(InMemoryNewsStore(), _source([_raw(0)]), _analyzer([_analysis(0)]))
    feed = IntelligenceFeed(orch)
    assert feed.loading is True
    assert feed.news_list == []

    await feed.load()

    assert feed.loading is False
    assert [r.title for r in feed.news_list] == ["Headline 0"]


async def test_feed_source_failure_is_empty_and_not_loading():
    orch = _orchestrator(
        InMemoryNewsStore(), _source(exc=SourceUnavailable("down")), _analyzer([])
    )
    feed = IntelligenceFeed(orch)

    await feed.load()

    assert feed.news_list == []
    assert feed.loading is False


async def test_feed_runs_pipeline_once():
    source = _source([_raw(0)])
    orch = _orchestrator(InMemoryNewsStore(), source, _analyzer([_analysis(0)]))
    feed = IntelligenceFeed(orch)

    first = await feed.load()
    second = await feed.load()

    assert first is second
    source.fetch_latest.assert_called_once()


async def test_concurrent_feed_loads_share_one_run():
    store = InMemoryNewsStore()
    source = _source([_raw(0)])

    async def slow_fetch():
        await asyncio.sleep(0.01)
        return [_raw(0)]

    source.fetch_latest.side_effect = slow_fetch
    feed = IntelligenceFeed(_orchestrator(store, source, _analyzer([_analysis(0)])))

    first, second = await asyncio.gather(feed.load(), feed.load())

    assert first is second
    assert source.fetch_latest.await_count == 1
    assert len(store) == 1
    assert feed.loading is False


async def test_feed_clears_loading_even_if_run_raises():
    orch = MagicMock()
    orch.run = AsyncMock(side_effect=RuntimeError("boom"))
    feed = IntelligenceFeed(orch)

    with pytest.raises(RuntimeError):
        await feed.load()

    assert feed.loading is False
    assert feed.news_list == []


# ── End-to-end ────────────────────────────────────────────────────────────────

async def test_btc_rallies_end_to_end():
    store = InMemoryNewsStore()
    source = _source([RawNewsItem(title="BTC rallies", url="https://x")])
    analyzer = _analyzer(
        [SentimentAnalysis(score=0.9, label="BULLISH", summary="BTC shows strength.")]
    )
    feed = IntelligenceFeed(CacheFillOrchestrator(store, source, analyzer))

    before = datetime.now(timezone.utc)
    await feed.load()
    after = datetime.now(timezone.utc)

    assert len(feed.news_list) == 1
    [persisted] = await store.fetch_recent(10)
    assert len(store) == 1
    assert persisted.title == "BTC rallies"
    assert persisted.url == "https://x"
    assert persisted.analysis == SentimentAnalysis(0.9, "BULLISH", "BTC shows strength.")
    assert before <= persisted.created_at <= after
    assert feed.news_list[0] == persisted
