"""
Display styles for signals and indicator summaries.

Maps each signal type to its color and label, and renders an indicator
summary as a Rich table.
"""

from dataclasses import dataclass

from rich.table import Table
from rich.text import Text

from signaldeck.ai.models import SignalType, TradingSignal
from signaldeck.signals.engine import IndicatorResult


@dataclass(frozen=True)
class SignalStyle:
    color: str
    label: str
    icon: str


SIGNAL_STYLES: dict[SignalType, SignalStyle] = {
    SignalType.BUY: SignalStyle(color="#22c55e", label="BUY", icon="🟢"),
    SignalType.SELL: SignalStyle(color="#ef4444", label="SELL", icon="🔴"),
    SignalType.HOLD: SignalStyle(color="#eab308", label="HOLD", icon="⚪"),
}

# RSI zones
RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0


def render_signal(signal: TradingSignal) -> str:
    """Rich markup for a signal badge followed by its reason."""
    style = SIGNAL_STYLES[signal.type]
    return f"{style.icon} [bold {style.color}]{style.label}[/bold {style.color}] {signal.reason}"


def _rsi_text(value: float | None) -> Text:
    if value is None:
        return Text("N/A", style="dim")
    if value >= RSI_OVERBOUGHT:
        return Text(f"{value:.2f}", style="#ef4444")
    if value <= RSI_OVERSOLD:
        return Text(f"{value:.2f}", style="#22c55e")
    return Text(f"{value:.2f}")


def _signed_text(value: float | None) -> Text:
    if value is None:
        return Text("N/A", style="dim")
    color = "#22c55e" if value > 0 else "#ef4444" if value < 0 else "white"
    return Text(f"{value:+.2f}", style=color)


def build_indicator_table(symbol: str, result: IndicatorResult) -> Table:
    """
    Build a one-row summary table of the latest indicators for a symbol.

    Columns: symbol, RSI, MACD line, signal line, histogram, pattern count,
    and the latest crossover direction.
    """
    table = Table(title=f"{symbol} indicators", expand=False, show_lines=False)
    table.add_column("Symbol", style="bold")
    table.add_column("RSI", justify="right")
    table.add_column("MACD", justify="right")
    table.add_column("Signal", justify="right")
    table.add_column("Hist", justify="right")
    table.add_column("Patterns", justify="right")
    table.add_column("Last Cross")

    macd = result.latest_macd
    history = result.history
    last_cross = history.crossovers[-1].direction.value if history.crossovers else "-"

    table.add_row(
        symbol,
        _rsi_text(result.latest_rsi),
        _signed_text(macd.macd_line if macd else None),
        _signed_text(macd.signal_line if macd else None),
        _signed_text(macd.histogram if macd else None),
        str(len(history.patterns)),
        last_cross,
    )
    return table
