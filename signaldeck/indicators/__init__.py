"""
Technical Indicators Module - Pure math functions for market analysis.

All functions are stateless and operate on price/bar data.
Insufficient lookback is reported as None, never as an exception.
"""

from .macd import MACDHistory, MACDResult, macd, macd_history
from .moving_averages import ema, ema_series, sma, sma_series
from .rsi import rsi, rsi_series
from .volume import SPIKE_MARKER_RADIUS, VolumeMark, tag_volume_anomalies, volume_sma

__all__ = [
    # Moving Averages
    "sma",
    "sma_series",
    "ema",
    "ema_series",
    # RSI
    "rsi",
    "rsi_series",
    # MACD
    "macd",
    "macd_history",
    "MACDResult",
    "MACDHistory",
    # Volume
    "volume_sma",
    "tag_volume_anomalies",
    "VolumeMark",
    "SPIKE_MARKER_RADIUS",
]
