"""
Core data models.

Contains the price bar consumed by every indicator and detector.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Bar:
    """A single OHLCV price bar, immutable once produced by a candle source."""

    time: int  # unix timestamp (ms)
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def is_up(self) -> bool:
        """True if the bar closed above its open."""
        return self.close > self.open

    @property
    def is_down(self) -> bool:
        """True if the bar closed below its open."""
        return self.close < self.open

    @property
    def body_size(self) -> float:
        """Size of the bar body (absolute)."""
        return abs(self.close - self.open)

    @property
    def range(self) -> float:
        """Distance from low to high."""
        return self.high - self.low

    @property
    def upper_shadow(self) -> float:
        """Size of the upper wick."""
        return self.high - max(self.open, self.close)

    @property
    def lower_shadow(self) -> float:
        """Size of the lower wick."""
        return min(self.open, self.close) - self.low

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Bar":
        """Create a bar from a dictionary."""
        return cls(
            time=int(data["time"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume", 0.0)),
        )
