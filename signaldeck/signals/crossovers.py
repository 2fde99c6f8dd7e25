"""
MACD Crossover Detector - buy/sell markers from MACD and signal lines.

Marks a BULLISH crossover when the MACD line moves from at-or-below the
signal line to above it, and BEARISH for the mirror move.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class CrossoverDirection(Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"


@dataclass(frozen=True)
class CrossoverMark:
    """A MACD/signal crossover at a bar index."""

    index: int
    direction: CrossoverDirection
    price: float

    @property
    def is_bullish(self) -> bool:
        return self.direction is CrossoverDirection.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.direction is CrossoverDirection.BEARISH


def detect_crossovers(
    prices: Sequence[float],
    macd_line: Sequence[float | None],
    signal_line: Sequence[float | None],
) -> list[CrossoverMark]:
    """
    Detect MACD crossovers over index-aligned series.

    No mark is emitted unless both lines are defined at i - 1 and i.

    Args:
        prices: Close prices, used as the marker price
        macd_line: MACD line aligned with prices (None where undefined)
        signal_line: Signal line aligned with prices (None where undefined)

    Returns:
        Crossover marks ordered by index
    """
    marks: list[CrossoverMark] = []

    for i in range(1, min(len(prices), len(macd_line), len(signal_line))):
        prev_macd, curr_macd = macd_line[i - 1], macd_line[i]
        prev_signal, curr_signal = signal_line[i - 1], signal_line[i]

        if prev_macd is None or curr_macd is None or prev_signal is None or curr_signal is None:
            continue

        if prev_macd <= prev_signal and curr_macd > curr_signal:
            marks.append(CrossoverMark(i, CrossoverDirection.BULLISH, prices[i]))
        elif prev_macd >= prev_signal and curr_macd < curr_signal:
            marks.append(CrossoverMark(i, CrossoverDirection.BEARISH, prices[i]))

    return marks
