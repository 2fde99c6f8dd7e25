"""Data models for analysis-service responses and metrics."""

import json
import time
from dataclasses import dataclass, field
from enum import Enum

from signaldeck.ai.errors import AnalysisError, ErrorKind


class SignalType(Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class NewsItem:
    """A news reference backing a signal."""

    title: str
    uri: str

    def to_dict(self) -> dict:
        return {"title": self.title, "uri": self.uri}


@dataclass
class TradingSignal:
    """A BUY/SELL/HOLD call with its reasoning and supporting news."""

    type: SignalType
    reason: str
    news: list[NewsItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "reason": self.reason,
            "news": [n.to_dict() for n in self.news],
        }


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a chat; role is "user" or "model"."""

    role: str
    text: str

    def to_dict(self) -> dict:
        return {"role": self.role, "text": self.text}


@dataclass
class AIMetrics:
    """Tracks analysis-service usage for the session."""

    total_calls: int = 0
    failed_calls: int = 0
    total_response_time_ms: float = 0
    model_name: str = ""
    session_start: float = field(default_factory=time.time)

    @property
    def avg_response_time_ms(self) -> float:
        """Average response time across successful calls."""
        if self.total_calls == 0:
            return 0
        return self.total_response_time_ms / self.total_calls

    def record_call(self, response_time_ms: float) -> None:
        """Record a successful call."""
        self.total_calls += 1
        self.total_response_time_ms += response_time_ms

    def record_failure(self) -> None:
        self.failed_calls += 1

    def reset_session(self) -> None:
        """Reset session stats."""
        self.total_calls = 0
        self.failed_calls = 0
        self.total_response_time_ms = 0
        self.session_start = time.time()


def strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` or ``` ... ``` wrapper around model output."""
    stripped = text.strip()
    if stripped.startswith("```json"):
        stripped = stripped[7:]
    elif stripped.startswith("```"):
        stripped = stripped[3:]
    else:
        return stripped

    if stripped.endswith("```"):
        stripped = stripped[:-3]
    return stripped.strip()


def news_from_grounding(items: list) -> list[NewsItem]:
    """Keep the references that carry both a title and a uri."""
    news = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = item.get("title")
        uri = item.get("uri")
        if title and uri:
            news.append(NewsItem(title=str(title), uri=str(uri)))
    return news


def parse_signal_response(text: str, grounding: list[dict] | None = None) -> TradingSignal:
    """
    Parse a model reply into a TradingSignal.

    Grounding references from the service replace the model-written news
    list when at least one complete (title and uri) reference is present.

    Args:
        text: Raw model output, optionally wrapped in a markdown code fence
        grounding: Search references returned alongside the reply

    Returns:
        Parsed TradingSignal

    Raises:
        AnalysisError: If the reply is not JSON or lacks type/reason/news
    """
    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise AnalysisError(str(e), ErrorKind.INVALID_RESPONSE) from e

    if (
        not isinstance(data, dict)
        or not data.get("type")
        or not data.get("reason")
        or not isinstance(data.get("news"), list)
    ):
        raise AnalysisError("Invalid JSON structure received from AI.")

    try:
        signal_type = SignalType(str(data["type"]).upper())
    except ValueError as e:
        raise AnalysisError(f"Unknown signal type: {data['type']}") from e

    news = news_from_grounding(grounding or []) or news_from_grounding(data["news"])

    return TradingSignal(type=signal_type, reason=str(data["reason"]), news=news)
