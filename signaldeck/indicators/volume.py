"""
Volume Anomaly Indicator - flags bars with unusually heavy volume.

A bar is anomalous when its volume exceeds a multiple of the trailing
simple moving average of volume at the same index.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from signaldeck.core.models import Bar

from .moving_averages import sma_series

# Marker radius used by the chart for anomalous bars (0 hides the marker)
SPIKE_MARKER_RADIUS = 2.5


@dataclass(frozen=True)
class VolumeMark:
    """Volume anomaly state for a single bar."""

    index: int
    volume: float
    average: float | None
    is_anomalous: bool

    @property
    def radius(self) -> float:
        """Chart marker radius for this bar."""
        return SPIKE_MARKER_RADIUS if self.is_anomalous else 0.0


def volume_sma(bars: Sequence[Bar], period: int = 20) -> list[float | None]:
    """Trailing SMA of volume, aligned with bars."""
    return sma_series([b.volume for b in bars], period)


def tag_volume_anomalies(
    bars: Sequence[Bar],
    period: int = 20,
    multiplier: float = 1.75,
) -> list[VolumeMark]:
    """
    Tag every bar with its volume anomaly state.

    Bars before the lookback period is satisfied are never anomalous.

    Args:
        bars: Price bars (most recent last)
        period: Trailing SMA window for volume (default 20)
        multiplier: Spike threshold as a multiple of the average (default 1.75)

    Returns:
        One VolumeMark per bar
    """
    averages = volume_sma(bars, period)

    marks: list[VolumeMark] = []
    for i, (bar, average) in enumerate(zip(bars, averages, strict=True)):
        is_anomalous = average is not None and bar.volume > average * multiplier
        marks.append(
            VolumeMark(index=i, volume=bar.volume, average=average, is_anomalous=is_anomalous)
        )
    return marks
