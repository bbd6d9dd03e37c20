"""
Mock news source and analyzer for running without CryptoCompare / Groq.

The mock source returns a shuffled batch of realistic crypto headlines; the
mock analyzer returns random sentiment with simulated Groq latency.

Usage:
    python main.py --mock
"""
from __future__ import annotations

import asyncio
import random
from datetime import datetime, timezone

from sentiment_feed.models.news import RawNewsItem, SentimentAnalysis

HEADLINES: list[tuple[str, str]] = [
    # (headline, source)
    # ── Bitcoin ───────────────────────────────────────────────────
    ("Bitcoin reclaims $140K as spot ETF inflows hit weekly record", "CoinDesk"),
    ("BTC miners sell 12,000 coins as hashprice falls to yearly low", "The Block"),
    ("Bitcoin open interest tops $60B ahead of quarterly options expiry", "Decrypt"),
    ("MicroStrategy adds 9,200 BTC to treasury in latest purchase", "Bloomberg"),
    ("Bitcoin slides 6% after Fed minutes signal fewer rate cuts", "Reuters"),
    # ── Ethereum ──────────────────────────────────────────────────
    ("Ethereum gas fees fall to 2020 levels after Pectra upgrade", "CoinDesk"),
    ("ETH staking queue swells to 1.4M validators", "The Block"),
    ("Ethereum Foundation sells 35,000 ETH, community questions timing", "Decrypt"),
    # ── Altcoins ──────────────────────────────────────────────────
    ("Solana DEX volume overtakes Ethereum for third straight month", "Blockworks"),
    ("SNX surges 15% as Synthetix unveils perpetuals v4 roadmap", "CoinTelegraph"),
    ("XRP drops after court delays final ruling in SEC case", "Reuters"),
    # ── Regulation ────────────────────────────────────────────────
    ("SEC approves in-kind creations for spot crypto ETFs", "Bloomberg"),
    ("EU MiCA stablecoin rules force delisting of USDT on major exchanges", "FT"),
    ("US Treasury proposes new KYC rules for DeFi protocols", "Reuters"),
    # ── Security ──────────────────────────────────────────────────
    ("Cross-chain bridge exploited for $180M in wrapped ETH", "The Block"),
    ("Major exchange pauses withdrawals after hot wallet breach", "CoinTelegraph"),
]

MOCK_LABELS = ["BULLISH", "BEARISH"]

MOCK_SUMMARY = {
    "BULLISH": [
        "Strong inflows point to sustained buying pressure.",
        "The development is likely to lift market confidence.",
        "Positive catalyst for near-term price action.",
    ],
    "BEARISH": [
        "Selling pressure may weigh on prices in the short term.",
        "The news raises risk for holders and could dampen demand.",
        "Negative catalyst likely to pressure sentiment.",
    ],
}


class MockNewsSource:
    """Satisfies NewsSource with a random batch of canned headlines."""

    def __init__(self, batch_size: int = 5) -> None:
        self.batch_size = batch_size

    async def fetch_latest(self) -> list[RawNewsItem]:
        pool = random.sample(HEADLINES, k=min(self.batch_size, len(HEADLINES)))
        now = datetime.now(timezone.utc)
        return [
            RawNewsItem(
                title=headline,
                url=f"https://example.com/news/{i}",
                published_at=now,
                source=source,
            )
            for i, (headline, source) in enumerate(pool)
        ]


class MockAnalyzer:
    """
    Drop-in replacement for SentimentAnalyzer. Returns random sentiment
    with simulated Groq-like latency (150–400ms).
    """

    async def analyze(self, title: str) -> SentimentAnalysis:
        latency = random.uniform(150, 400)
        await asyncio.sleep(latency / 1000)

        label = random.choice(MOCK_LABELS)
        if label == "BULLISH":
            score = round(random.uniform(0.55, 0.95), 2)
        else:
            score = round(random.uniform(0.05, 0.45), 2)

        return SentimentAnalysis(
            score=score,
            label=label,
            summary=random.choice(MOCK_SUMMARY[label]),
        )
