"""
Candlestick Pattern Detector - Doji, Engulfing and Hammer formations.

Rules are evaluated independently for every bar from index 2 onwards,
so one bar may carry more than one mark.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from signaldeck.core.models import Bar

# Body / range ratio below which a bar is a Doji
DOJI_BODY_RATIO = 0.08

# Hammer: lower shadow must exceed this multiple of the body...
HAMMER_LOWER_SHADOW_RATIO = 2.0
# ...and upper shadow must stay below this multiple
HAMMER_UPPER_SHADOW_RATIO = 0.5

# First bar index a pattern can be reported at
MIN_PATTERN_INDEX = 2


class PatternKind(Enum):
    DOJI = "Doji"
    BULLISH_ENGULFING = "Bullish Engulfing"
    BEARISH_ENGULFING = "Bearish Engulfing"
    HAMMER = "Hammer"


class Anchor(Enum):
    """Where the marker sits relative to the bar."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class PatternStyle:
    anchor: Anchor
    short: str
    color: str


PATTERN_STYLES: dict[PatternKind, PatternStyle] = {
    PatternKind.DOJI: PatternStyle(anchor=Anchor.TOP, short="D", color="gray"),
    PatternKind.BULLISH_ENGULFING: PatternStyle(anchor=Anchor.BOTTOM, short="BE", color="#22c55e"),
    PatternKind.BEARISH_ENGULFING: PatternStyle(anchor=Anchor.TOP, short="BE", color="#ef4444"),
    PatternKind.HAMMER: PatternStyle(anchor=Anchor.BOTTOM, short="H", color="#22c55e"),
}


@dataclass(frozen=True)
class PatternMark:
    """A detected candlestick pattern at a bar index."""

    index: int
    kind: PatternKind

    @property
    def anchor(self) -> Anchor:
        return PATTERN_STYLES[self.kind].anchor

    @property
    def short(self) -> str:
        return PATTERN_STYLES[self.kind].short

    @property
    def color(self) -> str:
        return PATTERN_STYLES[self.kind].color

    @property
    def name(self) -> str:
        return self.kind.value


def is_doji(bar: Bar) -> bool:
    """Body is tiny relative to the range. Zero-range bars never match."""
    bar_range = bar.range
    return bar_range > 0 and bar.body_size / bar_range < DOJI_BODY_RATIO


def is_bullish_engulfing(prev: Bar, bar: Bar) -> bool:
    """
    Up bar whose body fully covers the previous down bar's body.

    Opening exactly at the previous close still counts.
    """
    return (
        prev.is_down
        and bar.is_up
        and bar.open <= prev.close
        and bar.close > prev.open
    )


def is_bearish_engulfing(prev: Bar, bar: Bar) -> bool:
    """Down bar whose body fully covers the previous up bar's body."""
    return (
        prev.is_up
        and bar.is_down
        and bar.open > prev.close
        and bar.close < prev.open
    )


def is_hammer(before_prev: Bar, prev: Bar, bar: Bar) -> bool:
    """
    Long lower shadow, small upper shadow, after a two-bar decline.

    The trend check only compares the previous close against the close
    two bars back.
    """
    body = bar.body_size
    if body <= 0:
        return False

    is_down_trend = prev.close < before_prev.close
    return (
        is_down_trend
        and bar.lower_shadow > body * HAMMER_LOWER_SHADOW_RATIO
        and bar.upper_shadow < body * HAMMER_UPPER_SHADOW_RATIO
    )


def detect_patterns(bars: Sequence[Bar]) -> list[PatternMark]:
    """
    Scan bars for candlestick patterns.

    Args:
        bars: Price bars (most recent last); not modified

    Returns:
        Pattern marks ordered by bar index, then rule order
        (Doji, Bullish Engulfing, Bearish Engulfing, Hammer)
    """
    marks: list[PatternMark] = []
    if len(bars) <= MIN_PATTERN_INDEX:
        return marks

    for i in range(MIN_PATTERN_INDEX, len(bars)):
        bar = bars[i]
        prev = bars[i - 1]

        if is_doji(bar):
            marks.append(PatternMark(index=i, kind=PatternKind.DOJI))
        if is_bullish_engulfing(prev, bar):
            marks.append(PatternMark(index=i, kind=PatternKind.BULLISH_ENGULFING))
        if is_bearish_engulfing(prev, bar):
            marks.append(PatternMark(index=i, kind=PatternKind.BEARISH_ENGULFING))
        if is_hammer(bars[i - 2], prev, bar):
            marks.append(PatternMark(index=i, kind=PatternKind.HAMMER))

    return marks
