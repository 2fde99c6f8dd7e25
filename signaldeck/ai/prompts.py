"""
Prompt templates for signals, chat, market sentiment and market news.

The technical snapshot uses display-rounded indicator values; missing
values are written as N/A.
"""

from collections.abc import Mapping, Sequence

from signaldeck.ai.models import SignalType
from signaldeck.core.models import Bar
from signaldeck.indicators.macd import MACDResult

SIGNAL_PROMPT = """You are an expert AI financial analyst. Your analysis must be heavily weighted towards the impact of recent, real-world news.

**Stock:** {symbol}

**Technical Snapshot (for context only):**
- Recent Closing Prices: A sequence ending in {last_close}
- Current {rsi_period}-period RSI: {rsi}
- Current MACD ({fast}, {slow}, {signal}) Histogram: {histogram}

**Primary Analysis Instructions:**
1. **News First:** Find the most impactful and recent news (2-3 articles) for {symbol}. Prioritize earnings and guidance, major product news, regulatory changes, mergers and partnerships, and macroeconomic events that directly affect this stock.
2. **Synthesize and Decide:** Base the signal primarily on the sentiment and implications of the news. Use the technical snapshot as secondary confirmation. Strongly positive news with bullish MACD momentum is a strong BUY; negative news against bullish technicals may be a HOLD, with the conflict explained.
3. **Explain Your Reasoning:** In 'reason', explain how the headlines support the signal and whether the technicals agree.

**Output Format:**
Your response MUST be a single, valid JSON object and nothing else. No explanatory text or markdown wrappers.

{{
  "type": "BUY" | "SELL" | "HOLD",
  "reason": "A 2-3 sentence explanation, focusing on how the latest news impacts the stock, with a brief mention of technical confirmation or contradiction.",
  "news": [
    {{ "title": "The full, recent news headline", "uri": "The direct URL to the news article" }}
  ]
}}"""


def format_signal_prompt(
    symbol: str,
    bars: Sequence[Bar],
    rsi: float | None,
    macd: MACDResult | None,
    rsi_period: int = 14,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> str:
    """
    Build the signal-generation prompt for a symbol.

    Args:
        symbol: Ticker symbol
        bars: Recent bars (most recent last)
        rsi: Latest RSI (already rounded) or None
        macd: Latest MACD (already rounded) or None

    Returns:
        Prompt text
    """
    last_close = f"{bars[-1].close:.2f}" if bars else "N/A"
    return SIGNAL_PROMPT.format(
        symbol=symbol,
        last_close=last_close,
        rsi_period=rsi_period,
        rsi=rsi if rsi is not None else "N/A",
        fast=fast,
        slow=slow,
        signal=signal,
        histogram=macd.histogram if macd is not None else "N/A",
    )


CHAT_SYSTEM_PROMPT = """You are a helpful and concise AI financial analyst.
Your purpose is to answer user questions about the stock: {symbol}.
You have the following real-time technical data. Use it to inform your answers. Do not mention that you have this data unless it's relevant to the user's question.
- Current Price: {price}
- {rsi_period}-period RSI: {rsi}
- MACD ({fast}, {slow}, {signal}) -- MACD Line: {macd_line}, Signal Line: {signal_line}, Histogram: {histogram}

Keep your answers brief and to the point."""


MARKET_SENTIMENT_PROMPT = """You are an expert AI financial market analyst.
Based on the following list of real-time trading signals for key stocks, provide a concise, one or two-sentence summary of the overall market sentiment.
Do not just list the counts of BUY/SELL signals. Instead, synthesize the information into a coherent narrative. For example, mention if a particular sector seems strong or weak if you can infer it.

Signals: {signal_summary}"""

# Returned without calling the service when there are no signals yet
AWAITING_SENTIMENT = "Awaiting sufficient data to determine market sentiment."


MARKET_NEWS_PROMPT = """You are a financial news aggregator. Find the 4 most important, recent news headlines related to the stock market.
The response should only contain the news articles found by the search tool."""


def format_chat_system_prompt(
    symbol: str,
    bars: Sequence[Bar],
    rsi: float | None,
    macd: MACDResult | None,
    rsi_period: int = 14,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> str:
    """Build the system instruction for a chat about one symbol."""

    def value(v: float | None) -> str:
        return "N/A" if v is None else f"{v}"

    return CHAT_SYSTEM_PROMPT.format(
        symbol=symbol,
        price=f"{bars[-1].close:.2f}" if bars else "N/A",
        rsi_period=rsi_period,
        rsi=value(rsi),
        fast=fast,
        slow=slow,
        signal=signal,
        macd_line=value(macd.macd_line if macd else None),
        signal_line=value(macd.signal_line if macd else None),
        histogram=value(macd.histogram if macd else None),
    )


def format_sentiment_summary(signals: Mapping[str, SignalType]) -> str:
    """Join signals as "SYM: TYPE, SYM: TYPE" in mapping order."""
    return ", ".join(f"{symbol}: {signal_type.value}" for symbol, signal_type in signals.items())


def format_market_sentiment_prompt(signals: Mapping[str, SignalType]) -> str:
    return MARKET_SENTIMENT_PROMPT.format(signal_summary=format_sentiment_summary(signals))
