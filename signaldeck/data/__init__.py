"""Candle sources feeding the indicator engine."""

from signaldeck.data.sources import CandleSource, RandomWalkCandleSource

__all__ = ["CandleSource", "RandomWalkCandleSource"]
