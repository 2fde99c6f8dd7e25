"""HTTP client for the external analysis service.

Every call goes through a RequestScheduler so the service's request
cadence is never exceeded, however many callers ask at once. Clients
share the process-wide lane unless given their own scheduler.
"""

import logging
import time
from collections.abc import Mapping, Sequence

import httpx

from signaldeck.ai.errors import AnalysisError, classify_error
from signaldeck.ai.models import (
    AIMetrics,
    ChatMessage,
    NewsItem,
    SignalType,
    TradingSignal,
    news_from_grounding,
    parse_signal_response,
)
from signaldeck.ai.prompts import (
    AWAITING_SENTIMENT,
    MARKET_NEWS_PROMPT,
    format_chat_system_prompt,
    format_market_sentiment_prompt,
    format_signal_prompt,
)
from signaldeck.ai.request_scheduler import RequestScheduler, default_scheduler
from signaldeck.core.config import AnalysisServiceConfig
from signaldeck.core.models import Bar
from signaldeck.signals.engine import IndicatorEngine

logger = logging.getLogger(__name__)

SEARCH_TOOLS = ("search",)


class AnalysisClient:
    """Client for the rate-limited analysis service."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.signaldeck.dev/v1/analyze",
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        scheduler: RequestScheduler | None = None,
        engine: IndicatorEngine | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.scheduler = scheduler or default_scheduler()
        self.engine = engine or IndicatorEngine()
        self.metrics = AIMetrics(model_name=model)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: AnalysisServiceConfig,
        scheduler: RequestScheduler | None = None,
        engine: IndicatorEngine | None = None,
    ) -> "AnalysisClient":
        """Create a client (and its scheduler, unless given) from configuration."""
        return cls(
            api_key=config.api_key,
            api_url=config.api_url,
            model=config.model,
            timeout=config.timeout,
            scheduler=scheduler or RequestScheduler(config.min_interval_seconds),
            engine=engine,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, payload: dict) -> tuple[str, list[dict]]:
        client = await self._get_client()
        response = await client.post(self.api_url, json={"model": self.model, **payload})
        response.raise_for_status()
        data = response.json()
        return data.get("text", ""), data.get("grounding") or []

    async def _send(self, payload: dict, context: str) -> tuple[str, list[dict], float]:
        async def call() -> tuple[str, list[dict], float]:
            start_time = time.time()
            text, grounding = await self._post(payload)
            return text, grounding, (time.time() - start_time) * 1000

        try:
            text, grounding, response_time_ms = await self.scheduler.submit(call)
        except Exception as e:
            self.metrics.record_failure()
            raise classify_error(e, context)

        self.metrics.record_call(response_time_ms)
        logger.debug(f"Analysis response for {context} in {response_time_ms:.0f}ms")
        return text, grounding, response_time_ms

    async def analyze(
        self,
        prompt: str,
        context: str = "analyze",
        tools: Sequence[str] = SEARCH_TOOLS,
    ) -> tuple[str, list[dict], float]:
        """
        Send a prompt through the request lane.

        Args:
            prompt: Prompt text
            context: Description of the call, used in error logs
            tools: Service-side tools to enable (web search by default)

        Returns:
            Tuple of (response_text, grounding_references, response_time_ms)

        Raises:
            AnalysisError: On any service or network failure
        """
        payload: dict = {"prompt": prompt}
        if tools:
            payload["tools"] = list(tools)
        return await self._send(payload, context)

    async def get_signal(self, symbol: str, bars: Sequence[Bar]) -> TradingSignal:
        """
        Request a BUY/SELL/HOLD signal for a symbol.

        Args:
            symbol: Ticker symbol
            bars: Recent bars (most recent last)

        Returns:
            Parsed TradingSignal

        Raises:
            AnalysisError: On service failure or an unusable reply
        """
        cfg = self.engine.config
        result = self.engine.compute(bars)
        prompt = format_signal_prompt(
            symbol,
            bars,
            rsi=result.latest_rsi,
            macd=result.latest_macd,
            rsi_period=cfg.rsi_period,
            fast=cfg.macd_fast,
            slow=cfg.macd_slow,
            signal=cfg.macd_signal,
        )

        text, grounding, _ = await self.analyze(prompt, context=f"get_signal for {symbol}")

        try:
            signal = parse_signal_response(text, grounding)
        except Exception as e:
            raise classify_error(e, f"get_signal for {symbol}")

        logger.info(f"Signal: {symbol} - {signal.type.value} ({len(signal.news)} news refs)")
        return signal

    async def get_chat_response(
        self,
        symbol: str,
        bars: Sequence[Bar],
        history: Sequence[ChatMessage],
    ) -> str:
        """
        Answer the latest chat turn about a symbol.

        The system instruction carries the latest price, RSI and MACD so
        answers can refer to current technicals.

        Args:
            symbol: Ticker symbol the conversation is about
            bars: Recent bars (most recent last)
            history: Conversation so far, oldest first, ending with the user turn

        Returns:
            Reply text
        """
        cfg = self.engine.config
        result = self.engine.compute(bars)
        system = format_chat_system_prompt(
            symbol,
            bars,
            rsi=result.latest_rsi,
            macd=result.latest_macd,
            rsi_period=cfg.rsi_period,
            fast=cfg.macd_fast,
            slow=cfg.macd_slow,
            signal=cfg.macd_signal,
        )
        payload = {"system": system, "messages": [m.to_dict() for m in history]}

        text, _, _ = await self._send(payload, context=f"get_chat_response for {symbol}")
        return text

    async def get_market_sentiment(self, signals: Mapping[str, SignalType]) -> str:
        """
        Summarize overall market sentiment from per-symbol signals.

        Returns a fixed "awaiting data" message without calling the
        service when there are no signals.
        """
        if not signals:
            return AWAITING_SENTIMENT

        prompt = format_market_sentiment_prompt(signals)
        text, _, _ = await self.analyze(prompt, context="get_market_sentiment", tools=())
        return text

    async def get_market_news(self) -> list[NewsItem]:
        """
        Fetch recent market headlines.

        Only search-grounded references are returned; the reply text is
        never parsed for headlines.

        Raises:
            AnalysisError: On service failure or when no grounded news comes back
        """
        _, grounding, _ = await self.analyze(MARKET_NEWS_PROMPT, context="get_market_news")

        news = news_from_grounding(grounding)
        if not news:
            logger.error("Error in get_market_news: no grounded references in reply")
            raise AnalysisError("Could not retrieve verifiable news from search tool.")

        logger.info(f"Market news: {len(news)} headlines")
        return news
