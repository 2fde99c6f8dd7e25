#!/usr/bin/env python3
"""
Unit tests for the signals module.

Run with:
    python -m pytest tests/test_signals.py -v
"""

import math
import sys
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from signaldeck.core.config import IndicatorConfig
from signaldeck.core.models import Bar
from signaldeck.signals import (
    Anchor,
    CrossoverDirection,
    IndicatorEngine,
    PatternKind,
    compute,
    detect_crossovers,
    detect_patterns,
)


def bar(open_: float, high: float, low: float, close: float, t: int = 0, volume: float = 1000.0) -> Bar:
    return Bar(time=t, open=open_, high=high, low=low, close=close, volume=volume)


def make_bars(prices: list[float], volume: float = 1000.0) -> list[Bar]:
    """Helper to create bars from a list of close prices."""
    bars = []
    prev = prices[0]
    for i, price in enumerate(prices):
        bars.append(
            Bar(
                time=i * 60_000,
                open=prev,
                high=max(prev, price) + 1.0,
                low=min(prev, price) - 1.0,
                close=price,
                volume=volume,
            )
        )
        prev = price
    return bars


def wave_prices(count: int) -> list[float]:
    return [100.0 + 10.0 * math.sin(i / 5) for i in range(count)]


class TestPatternDetector:
    """Tests for candlestick pattern detection."""

    def test_bullish_engulfing(self):
        """Test up bar engulfing a down bar is marked at the bottom."""
        bars = [
            bar(105.0, 106.0, 99.0, 100.0),
            bar(100.0, 101.0, 89.0, 90.0),
            bar(90.0, 111.0, 89.0, 110.0),
        ]
        marks = detect_patterns(bars)
        assert len(marks) == 1
        assert marks[0].index == 2
        assert marks[0].kind == PatternKind.BULLISH_ENGULFING
        assert marks[0].anchor == Anchor.BOTTOM

    def test_bearish_engulfing(self):
        """Test down bar engulfing an up bar is marked at the top."""
        bars = [
            bar(96.0, 97.0, 94.0, 95.0),
            bar(90.0, 101.0, 89.0, 100.0),
            bar(101.0, 102.0, 87.0, 88.0),
        ]
        marks = detect_patterns(bars)
        assert [(m.index, m.kind) for m in marks] == [(2, PatternKind.BEARISH_ENGULFING)]
        assert marks[0].anchor == Anchor.TOP
        assert marks[0].color == "#ef4444"

    def test_bearish_engulfing_open_at_prev_close(self):
        """Test a down bar opening exactly at the previous close is not engulfing."""
        bars = [
            bar(100.0, 101.0, 99.0, 100.0),
            bar(90.0, 101.0, 89.0, 100.0),
            bar(100.0, 101.0, 79.0, 80.0),
        ]
        assert not any(m.kind == PatternKind.BEARISH_ENGULFING for m in detect_patterns(bars))

    def test_engulfing_requires_body_cover(self):
        """Test an up bar that does not close above the prior open is not engulfing."""
        bars = [
            bar(105.0, 106.0, 99.0, 100.0),
            bar(100.0, 101.0, 89.0, 90.0),
            bar(89.0, 99.0, 88.0, 98.0),
        ]
        assert not any(m.kind == PatternKind.BULLISH_ENGULFING for m in detect_patterns(bars))

    def test_doji(self):
        """Test a tiny body relative to the range is a Doji."""
        bars = [
            bar(100.0, 101.0, 99.0, 100.0),
            bar(100.0, 101.0, 99.0, 100.0),
            bar(100.0, 105.0, 95.0, 100.5),
        ]
        marks = detect_patterns(bars)
        assert [(m.index, m.kind) for m in marks] == [(2, PatternKind.DOJI)]
        assert marks[0].anchor == Anchor.TOP
        assert marks[0].short == "D"

    def test_zero_range_bar_never_matches(self):
        """Test a bar with high == low matches nothing."""
        bars = [
            bar(100.0, 101.0, 99.0, 100.0),
            bar(100.0, 101.0, 99.0, 100.0),
            bar(100.0, 100.0, 100.0, 100.0),
        ]
        assert detect_patterns(bars) == []

    def test_hammer(self):
        """Test a long lower shadow after a two-bar decline is a Hammer."""
        bars = [
            bar(111.0, 112.0, 109.0, 110.0),
            bar(108.0, 109.0, 104.0, 105.0),
            bar(100.0, 101.2, 96.0, 101.0),
        ]
        marks = detect_patterns(bars)
        assert [(m.index, m.kind) for m in marks] == [(2, PatternKind.HAMMER)]
        assert marks[0].anchor == Anchor.BOTTOM

    def test_hammer_requires_downtrend(self):
        """Test the same shape after a rise is not a Hammer."""
        bars = [
            bar(99.0, 101.0, 98.0, 100.0),
            bar(100.0, 106.0, 99.0, 105.0),
            bar(100.0, 101.2, 96.0, 101.0),
        ]
        assert not any(m.kind == PatternKind.HAMMER for m in detect_patterns(bars))

    def test_patterns_not_exclusive(self):
        """Test one bar can be both a Doji and a Hammer."""
        bars = [
            bar(111.0, 112.0, 109.0, 110.0),
            bar(103.0, 104.0, 101.0, 102.0),
            bar(100.0, 100.5, 95.0, 100.4),
        ]
        marks = detect_patterns(bars)
        assert [(m.index, m.kind) for m in marks] == [
            (2, PatternKind.DOJI),
            (2, PatternKind.HAMMER),
        ]

    def test_too_few_bars(self):
        """Test fewer than three bars yields no marks."""
        assert detect_patterns([]) == []
        assert detect_patterns([bar(100.0, 105.0, 95.0, 100.0)] * 2) == []

    def test_first_two_bars_never_marked(self):
        """Test marks only reference index 2 onwards and input is untouched."""
        doji = bar(100.0, 105.0, 95.0, 100.1)
        bars = [doji] * 6
        snapshot = list(bars)
        marks = detect_patterns(bars)
        assert [m.index for m in marks] == [2, 3, 4, 5]
        assert bars == snapshot


class TestCrossovers:
    """Tests for MACD crossover markers."""

    def test_bullish_and_bearish(self):
        """Test both crossover directions with the marker price."""
        prices = [1.0, 2.0, 3.0, 4.0]
        macd_line = [None, -1.0, 1.0, 0.5]
        signal_line = [None, 0.0, 0.0, 1.0]
        marks = detect_crossovers(prices, macd_line, signal_line)
        assert [(m.index, m.direction, m.price) for m in marks] == [
            (2, CrossoverDirection.BULLISH, 3.0),
            (3, CrossoverDirection.BEARISH, 4.0),
        ]

    def test_touch_then_cross(self):
        """Test a cross from equality counts."""
        marks = detect_crossovers([10.0, 11.0], [0.0, 1.0], [0.0, 0.0])
        assert len(marks) == 1
        assert marks[0].is_bullish

    def test_no_cross_while_above(self):
        """Test no marker while the MACD line stays above the signal."""
        assert detect_crossovers([1.0, 2.0, 3.0], [2.0, 3.0, 4.0], [1.0, 1.0, 1.0]) == []

    def test_requires_defined_values(self):
        """Test undefined neighbours suppress the marker."""
        assert detect_crossovers([1.0, 2.0], [None, 1.0], [0.0, 0.0]) == []
        assert detect_crossovers([1.0, 2.0], [-1.0, 1.0], [0.0, None]) == []


class TestIndicatorEngine:
    """Tests for the indicator façade."""

    def test_history_gate(self):
        """Test fewer than 35 bars gives an empty history but latest RSI."""
        bars = make_bars([100.0 + (i % 4) for i in range(34)])
        result = compute(bars)
        assert result.history.is_empty
        assert result.history.macd_line == []
        assert result.history.patterns == []
        assert result.history.crossovers == []
        assert result.latest_rsi is not None
        assert result.latest_macd is None
        assert result.histogram_text == "N/A"

    def test_latest_values_not_available(self):
        """Test very short input degrades to "not available"."""
        result = compute(make_bars([100.0, 101.0, 102.0]))
        assert result.latest_rsi is None
        assert result.latest_macd is None
        assert result.rsi_text == "N/A"

    def test_full_history_lengths(self):
        """Test every series matches the bar count once the gate is met."""
        bars = make_bars(wave_prices(60))
        history = compute(bars).history
        for series in (
            history.rsi,
            history.macd_line,
            history.signal_line,
            history.histogram,
            history.volume_sma,
            history.volume_marks,
        ):
            assert len(series) == 60
        assert all(v is None for v in history.rsi[:14])
        assert history.volume_sma[18] is None
        assert history.volume_sma[19] is not None

    def test_latest_values_rounded(self):
        """Test latest values are rounded to two decimals."""
        result = compute(make_bars(wave_prices(80)))
        assert result.latest_rsi == round(result.latest_rsi, 2)
        macd = result.latest_macd
        assert macd.histogram == round(macd.histogram, 2)
        assert macd.macd_line == round(macd.macd_line, 2)

    def test_latest_values_read_from_history(self, monkeypatch):
        """Test each kernel runs once and latest values are the history's last entries."""
        from signaldeck.signals import engine as engine_module

        calls: list[int] = []
        real_macd_history = engine_module.macd_history
        real_rsi_series = engine_module.rsi_series

        def counting_macd_history(*args, **kwargs):
            calls.append(1)
            return real_macd_history(*args, **kwargs)

        def counting_rsi_series(*args, **kwargs):
            calls.append(2)
            return real_rsi_series(*args, **kwargs)

        monkeypatch.setattr(engine_module, "macd_history", counting_macd_history)
        monkeypatch.setattr(engine_module, "rsi_series", counting_rsi_series)

        result = compute(make_bars(wave_prices(80)))
        assert sorted(calls) == [1, 2]

        history = result.history
        assert result.latest_rsi == round(history.rsi[-1], 2)
        assert result.latest_macd.macd_line == round(history.macd_line[-1], 2)
        assert result.latest_macd.signal_line == round(history.signal_line[-1], 2)
        assert result.latest_macd.histogram == round(history.histogram[-1], 2)

    def test_history_keeps_precision(self):
        """Test the history is not rounded."""
        history = compute(make_bars(wave_prices(80))).history
        defined = [v for v in history.macd_line if v is not None]
        assert any(v != round(v, 2) for v in defined)

    def test_crossovers_from_wave(self):
        """Test a price wave produces both crossover directions."""
        history = compute(make_bars(wave_prices(150))).history
        assert history.buy_signals
        assert history.sell_signals
        assert all(c.index >= 34 for c in history.crossovers)

    def test_volume_spike_in_history(self):
        """Test the façade tags volume spikes."""
        bars = make_bars(wave_prices(40))
        bars[30] = Bar(
            time=bars[30].time,
            open=bars[30].open,
            high=bars[30].high,
            low=bars[30].low,
            close=bars[30].close,
            volume=10_000.0,
        )
        history = compute(bars).history
        assert [m.index for m in history.anomalous_volume] == [30]

    def test_deterministic(self):
        """Test identical input gives identical output."""
        bars = make_bars(wave_prices(100))
        engine = IndicatorEngine()
        assert engine.compute(bars) == engine.compute(bars)
        assert compute(bars) == compute(list(bars))

    def test_custom_config(self):
        """Test the history gate and periods follow the configuration."""
        config = IndicatorConfig(rsi_period=5, macd_fast=3, macd_slow=6, macd_signal=3, min_history_bars=10)
        result = IndicatorEngine(config).compute(make_bars(wave_prices(12)))
        assert not result.history.is_empty
        assert all(v is None for v in result.history.rsi[:5])
        assert result.history.rsi[5] is not None
        assert result.latest_macd is not None


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
