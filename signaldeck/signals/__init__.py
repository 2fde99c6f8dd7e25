"""
Signals Module - Pattern and crossover detectors built on the indicators.

The engine combines the indicator kernels and detectors into a single
result for display and for the analysis prompt.
"""

from .crossovers import CrossoverDirection, CrossoverMark, detect_crossovers
from .engine import IndicatorEngine, IndicatorHistory, IndicatorResult, compute
from .patterns import PATTERN_STYLES, Anchor, PatternKind, PatternMark, detect_patterns

__all__ = [
    "Anchor",
    "CrossoverDirection",
    "CrossoverMark",
    "IndicatorEngine",
    "IndicatorHistory",
    "IndicatorResult",
    "PATTERN_STYLES",
    "PatternKind",
    "PatternMark",
    "compute",
    "detect_crossovers",
    "detect_patterns",
]
