"""
Candle sources.

A candle source supplies ordered bars per symbol on demand. The random-walk
source generates plausible bars for demos and tests.
"""

import random
import time
from typing import Protocol

from signaldeck.core.models import Bar

# Floor applied to the walking price
MIN_PRICE = 50.0


class CandleSource(Protocol):
    """Anything that can fetch ordered bars for a symbol."""

    async def fetch(self, symbol: str) -> list[Bar]: ...


class RandomWalkCandleSource:
    """
    Generates a random walk of bars with slight drift and volume bursts.

    Usage:
        source = RandomWalkCandleSource(count=100, seed=7)
        bars = await source.fetch("RELIANCE")
    """

    def __init__(
        self,
        count: int = 100,
        interval_seconds: int = 15 * 60,
        volatility: float = 0.03,
        seed: int | None = None,
        now_ms: int | None = None,
    ):
        """
        Args:
            count: Number of bars per fetch
            interval_seconds: Spacing between bars
            volatility: Approximate per-bar move range (0.03 = ~3%)
            seed: Seed for reproducible output
            now_ms: Timestamp of the last bar (defaults to current time)
        """
        self.count = count
        self.interval_seconds = interval_seconds
        self.volatility = volatility
        self.seed = seed
        self.now_ms = now_ms

    async def fetch(self, symbol: str) -> list[Bar]:
        rng = random.Random(f"{self.seed}:{symbol}") if self.seed is not None else random.Random()
        return self.generate(rng, initial_price=rng.random() * 2500 + 500)

    def generate(self, rng: random.Random, initial_price: float) -> list[Bar]:
        """Generate `count` bars starting at initial_price."""
        now = self.now_ms if self.now_ms is not None else int(time.time() * 1000)
        step_ms = self.interval_seconds * 1000
        vol = self.volatility

        bars: list[Bar] = []
        price = initial_price
        for i in range(self.count):
            open_ = round(price, 2)

            drift = (rng.random() - 0.49) * 0.005
            change_pct = (rng.random() - 0.5) * vol + drift
            close = round(open_ + open_ * change_pct, 2)

            high = round(max(open_, close, open_ + rng.random() * open_ * (vol / 2)), 2)
            low = round(min(open_, close, open_ - rng.random() * open_ * (vol / 2)), 2)

            volume = rng.random() * 500_000 + 100_000
            if abs(change_pct) > vol * 0.7:
                volume += rng.random() * 700_000

            bars.append(
                Bar(
                    time=now - (self.count - i - 1) * step_ms,
                    open=open_,
                    high=high,
                    low=low,
                    close=close,
                    volume=float(int(volume)),
                )
            )
            price = max(close, MIN_PRICE)

        return bars
