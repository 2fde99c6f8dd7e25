"""AI module: rate-limited access to the external analysis service."""

from signaldeck.ai.client import AnalysisClient
from signaldeck.ai.errors import AnalysisError, ErrorKind, classify_error
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
    format_chat_system_prompt,
    format_market_sentiment_prompt,
    format_signal_prompt,
)
from signaldeck.ai.request_scheduler import (
    RequestScheduler,
    ScheduledTask,
    TaskState,
    default_scheduler,
    schedule_api_call,
)

__all__ = [
    "AIMetrics",
    "AWAITING_SENTIMENT",
    "AnalysisClient",
    "AnalysisError",
    "ChatMessage",
    "ErrorKind",
    "NewsItem",
    "RequestScheduler",
    "ScheduledTask",
    "SignalType",
    "TaskState",
    "TradingSignal",
    "classify_error",
    "default_scheduler",
    "format_chat_system_prompt",
    "format_market_sentiment_prompt",
    "format_signal_prompt",
    "news_from_grounding",
    "parse_signal_response",
    "schedule_api_call",
]
