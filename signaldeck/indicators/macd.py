"""
MACD Indicator - Moving Average Convergence Divergence.

Trend-following momentum indicator showing the relationship
between two exponential moving averages of price.
"""

from dataclasses import dataclass

from .moving_averages import ema_series


@dataclass
class MACDResult:
    """Result of MACD calculation."""

    macd_line: float  # Fast EMA - Slow EMA
    signal_line: float  # EMA of MACD line
    histogram: float  # MACD line - Signal line

    @property
    def is_bullish(self) -> bool:
        """True if MACD is above signal line."""
        return self.histogram > 0

    @property
    def is_bearish(self) -> bool:
        """True if MACD is below signal line."""
        return self.histogram < 0

    def rounded(self, decimals: int = 2) -> "MACDResult":
        """Copy rounded for display or prompt text."""
        return MACDResult(
            macd_line=round(self.macd_line, decimals),
            signal_line=round(self.signal_line, decimals),
            histogram=round(self.histogram, decimals),
        )


@dataclass
class MACDHistory:
    """
    Full MACD history aligned by bar index.

    Index i in every list corresponds to price i. The MACD line is None
    for the first slow - 1 entries, the signal line and histogram for the
    first slow + signal - 2 entries.
    """

    macd_line: list[float | None]
    signal_line: list[float | None]
    histogram: list[float | None]

    def latest(self) -> MACDResult | None:
        """Last MACD line, signal line and histogram, or None if undefined."""
        if not self.macd_line:
            return None
        current_macd = self.macd_line[-1]
        current_signal = self.signal_line[-1]
        if current_macd is None or current_signal is None:
            return None
        return MACDResult(
            macd_line=current_macd,
            signal_line=current_signal,
            histogram=current_macd - current_signal,
        )


def _left_pad(values: list[float], length: int) -> list[float | None]:
    """Left-pad values with None so the result is `length` long."""
    return [None] * (length - len(values)) + list(values)


def macd_history(
    prices: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDHistory:
    """
    Calculate MACD line, signal line and histogram for every price.

    Values keep full floating-point precision; rounding is left to the
    display layer.

    Args:
        prices: List of prices (most recent last)
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line EMA period (default 9)

    Returns:
        MACDHistory whose lists are all len(prices) long
    """
    length = len(prices)
    empty = MACDHistory(
        macd_line=[None] * length,
        signal_line=[None] * length,
        histogram=[None] * length,
    )

    if fast <= 0 or slow <= 0 or signal <= 0 or fast >= slow:
        return empty

    fast_ema = ema_series(prices, fast)
    slow_ema = ema_series(prices, slow)

    if not slow_ema:
        return empty

    # fast_ema starts slow - fast bars earlier, trim its head to line up
    offset = slow - fast
    aligned_fast_ema = fast_ema[offset:]

    macd_values = [f - s for f, s in zip(aligned_fast_ema, slow_ema, strict=True)]
    signal_values = ema_series(macd_values, signal)

    # Align MACD line with signal series
    signal_offset = signal - 1
    histogram_values = [
        m - s for m, s in zip(macd_values[signal_offset:], signal_values, strict=True)
    ] if signal_values else []

    return MACDHistory(
        macd_line=_left_pad(macd_values, length),
        signal_line=_left_pad(signal_values, length),
        histogram=_left_pad(histogram_values, length),
    )


def macd(
    prices: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult | None:
    """
    Calculate the latest MACD values.

    MACD Line = Fast EMA - Slow EMA
    Signal Line = EMA of MACD Line
    Histogram = MACD Line - Signal Line

    Args:
        prices: List of prices (most recent last)
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal line EMA period (default 9)

    Returns:
        MACDResult with macd_line, signal_line, and histogram,
        or None if fewer than slow + signal prices are available
    """
    if len(prices) < slow + signal or fast <= 0 or slow <= 0 or signal <= 0:
        return None

    if fast >= slow:
        return None  # Fast period must be less than slow

    return macd_history(prices, fast, slow, signal).latest()
