"""
Indicator, scheduler and analysis-service configuration.

Centralizes the lookback periods, thresholds and pacing constants.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class IndicatorConfig:
    """Configuration for the indicator engine.

    Defaults match the conventional chart settings (RSI 14, MACD 12/26/9,
    20-bar volume average).
    """

    # =========================================================
    # Oscillators
    # =========================================================

    rsi_period: int = 14

    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # =========================================================
    # Volume Anomalies
    # =========================================================

    # Trailing window for the volume average
    volume_sma_period: int = 20

    # A bar is anomalous when volume > multiplier * trailing average
    volume_spike_multiplier: float = 1.75

    # =========================================================
    # Full History
    # =========================================================

    # Below this many bars the full-history path returns empty series
    min_history_bars: int = 35

    # Decimal places for values shown to users or sent in prompts
    display_decimals: int = 2


@dataclass
class SchedulerConfig:
    """Pacing for the outbound analysis request lane."""

    # Seconds between request starts (~7.4 requests per minute)
    min_interval_seconds: float = 8.1


@dataclass
class AnalysisServiceConfig:
    """Connection settings for the external analysis service."""

    api_key: str
    api_url: str = "https://api.signaldeck.dev/v1/analyze"
    model: str = "gemini-2.5-flash"
    timeout: float = 60.0
    min_interval_seconds: float = SchedulerConfig.min_interval_seconds

    @classmethod
    def from_env(cls, env_path: str | None = None) -> "AnalysisServiceConfig":
        """
        Create configuration from environment variables.

        Looks for:
        - SIGNALDECK_API_KEY (required)
        - SIGNALDECK_API_URL, SIGNALDECK_MODEL (optional)
        - SIGNALDECK_TIMEOUT, SIGNALDECK_MIN_INTERVAL (optional, seconds)
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        api_key = os.getenv("SIGNALDECK_API_KEY")
        if not api_key:
            raise ValueError(
                "SIGNALDECK_API_KEY not found in environment. "
                "Set it in .env or export it."
            )

        defaults = cls(api_key=api_key)
        try:
            timeout = float(os.getenv("SIGNALDECK_TIMEOUT", defaults.timeout))
            min_interval = float(
                os.getenv("SIGNALDECK_MIN_INTERVAL", defaults.min_interval_seconds)
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}") from e

        if min_interval < 0:
            raise ValueError(f"SIGNALDECK_MIN_INTERVAL must be >= 0, got: {min_interval}")

        return cls(
            api_key=api_key,
            api_url=os.getenv("SIGNALDECK_API_URL", defaults.api_url),
            model=os.getenv("SIGNALDECK_MODEL", defaults.model),
            timeout=timeout,
            min_interval_seconds=min_interval,
        )


# Default configuration instances
DEFAULT_INDICATOR_CONFIG = IndicatorConfig()
DEFAULT_SCHEDULER_CONFIG = SchedulerConfig()
