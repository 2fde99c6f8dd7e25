"""Display helpers for signals and indicators."""

from signaldeck.ui.styles import SIGNAL_STYLES, SignalStyle, build_indicator_table, render_signal

__all__ = ["SIGNAL_STYLES", "SignalStyle", "build_indicator_table", "render_signal"]
