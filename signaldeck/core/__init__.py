"""
Core models and configuration.

Modules:
- models: Price bar data class
- config: Indicator, scheduler and analysis-service settings
"""

from signaldeck.core.config import (
    DEFAULT_INDICATOR_CONFIG,
    DEFAULT_SCHEDULER_CONFIG,
    AnalysisServiceConfig,
    IndicatorConfig,
    SchedulerConfig,
)
from signaldeck.core.models import Bar

__all__ = [
    "AnalysisServiceConfig",
    "Bar",
    "DEFAULT_INDICATOR_CONFIG",
    "DEFAULT_SCHEDULER_CONFIG",
    "IndicatorConfig",
    "SchedulerConfig",
]
