"""
Indicator Engine - computes every derived dataset for a bar sequence.

Produces the latest RSI/MACD values used in signal prompt text and the
full index-aligned history consumed by the chart layer. Computation is
synchronous, stateless and deterministic for identical input.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from signaldeck.core.config import DEFAULT_INDICATOR_CONFIG, IndicatorConfig
from signaldeck.core.models import Bar
from signaldeck.indicators.macd import MACDHistory, MACDResult, macd_history
from signaldeck.indicators.rsi import rsi_series
from signaldeck.indicators.volume import VolumeMark, tag_volume_anomalies, volume_sma

from .crossovers import CrossoverMark, detect_crossovers
from .patterns import PatternMark, detect_patterns

logger = logging.getLogger(__name__)


@dataclass
class IndicatorHistory:
    """
    Full indicator history aligned by bar index.

    Every series is either empty (not enough bars) or exactly as long as
    the input, with None for entries inside the lookback period.
    """

    rsi: list[float | None] = field(default_factory=list)
    macd_line: list[float | None] = field(default_factory=list)
    signal_line: list[float | None] = field(default_factory=list)
    histogram: list[float | None] = field(default_factory=list)
    volume_sma: list[float | None] = field(default_factory=list)
    volume_marks: list[VolumeMark] = field(default_factory=list)
    patterns: list[PatternMark] = field(default_factory=list)
    crossovers: list[CrossoverMark] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rsi

    @property
    def buy_signals(self) -> list[CrossoverMark]:
        return [c for c in self.crossovers if c.is_bullish]

    @property
    def sell_signals(self) -> list[CrossoverMark]:
        return [c for c in self.crossovers if c.is_bearish]

    @property
    def anomalous_volume(self) -> list[VolumeMark]:
        return [m for m in self.volume_marks if m.is_anomalous]


@dataclass
class IndicatorResult:
    """Latest display values plus the full history."""

    latest_rsi: float | None  # rounded; None means "not available"
    latest_macd: MACDResult | None  # rounded; None means "not available"
    history: IndicatorHistory

    @property
    def rsi_text(self) -> str:
        return "N/A" if self.latest_rsi is None else f"{self.latest_rsi}"

    @property
    def histogram_text(self) -> str:
        return "N/A" if self.latest_macd is None else f"{self.latest_macd.histogram}"


class IndicatorEngine:
    """
    Orchestrates the indicator kernels over a bar sequence.

    Holds configuration only; no state is carried between calls. Each
    kernel runs once per `compute`; the latest values are read from the
    last entries of the series the history is built from.
    """

    def __init__(self, config: IndicatorConfig | None = None) -> None:
        self.config = config or DEFAULT_INDICATOR_CONFIG

    def latest_rsi(self, bars: Sequence[Bar]) -> float | None:
        """Latest RSI rounded for display, or None below the RSI lookback."""
        return self._display_rsi(rsi_series([b.close for b in bars], self.config.rsi_period))

    def latest_macd(self, bars: Sequence[Bar]) -> MACDResult | None:
        """Latest MACD rounded for display, or None below slow + signal bars."""
        prices = [b.close for b in bars]
        return self._display_macd(self._macd_history(prices), len(prices))

    def history(self, bars: Sequence[Bar]) -> IndicatorHistory:
        """
        Compute the full index-aligned history.

        Returns an empty history when fewer than `min_history_bars` bars
        are supplied.
        """
        prices = [b.close for b in bars]
        return self._history(
            bars, prices, rsi_series(prices, self.config.rsi_period), self._macd_history(prices)
        )

    def compute(self, bars: Sequence[Bar]) -> IndicatorResult:
        """Compute latest values and full history for the given bars."""
        prices = [b.close for b in bars]
        rsi_values = rsi_series(prices, self.config.rsi_period)
        macd_hist = self._macd_history(prices)

        result = IndicatorResult(
            latest_rsi=self._display_rsi(rsi_values),
            latest_macd=self._display_macd(macd_hist, len(prices)),
            history=self._history(bars, prices, rsi_values, macd_hist),
        )
        logger.debug(
            f"Indicators for {len(bars)} bars: RSI={result.rsi_text} "
            f"MACD hist={result.histogram_text} "
            f"patterns={len(result.history.patterns)} "
            f"crossovers={len(result.history.crossovers)}"
        )
        return result

    def _macd_history(self, prices: list[float]) -> MACDHistory:
        cfg = self.config
        return macd_history(prices, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal)

    def _display_rsi(self, rsi_values: list[float | None]) -> float | None:
        # rsi_series is all None until len > period
        value = rsi_values[-1] if rsi_values else None
        if value is None:
            return None
        return round(value, self.config.display_decimals)

    def _display_macd(self, macd_hist: MACDHistory, bar_count: int) -> MACDResult | None:
        cfg = self.config
        if bar_count < cfg.macd_slow + cfg.macd_signal:
            return None
        latest = macd_hist.latest()
        if latest is None:
            return None
        return latest.rounded(cfg.display_decimals)

    def _history(
        self,
        bars: Sequence[Bar],
        prices: list[float],
        rsi_values: list[float | None],
        macd_hist: MACDHistory,
    ) -> IndicatorHistory:
        cfg = self.config
        if len(bars) < cfg.min_history_bars:
            return IndicatorHistory()

        return IndicatorHistory(
            rsi=rsi_values,
            macd_line=macd_hist.macd_line,
            signal_line=macd_hist.signal_line,
            histogram=macd_hist.histogram,
            volume_sma=volume_sma(bars, cfg.volume_sma_period),
            volume_marks=tag_volume_anomalies(
                bars, cfg.volume_sma_period, cfg.volume_spike_multiplier
            ),
            patterns=detect_patterns(bars),
            crossovers=detect_crossovers(prices, macd_hist.macd_line, macd_hist.signal_line),
        )


def compute(bars: Sequence[Bar], config: IndicatorConfig | None = None) -> IndicatorResult:
    """Compute indicators for bars with the given (or default) configuration."""
    return IndicatorEngine(config).compute(bars)
