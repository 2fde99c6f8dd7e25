"""Analysis-service error classification and user-facing messages."""

import logging
from enum import Enum

import httpx

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    RATE_LIMITED = "RATE_LIMITED"
    NETWORK = "NETWORK"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNKNOWN = "UNKNOWN"


USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_CREDENTIAL: "Invalid API Key. Please ensure it is set correctly.",
    ErrorKind.RATE_LIMITED: "API rate limit reached. Please wait and try again.",
    ErrorKind.NETWORK: "Network error. Please check your internet connection.",
    ErrorKind.INVALID_RESPONSE: "AI returned an invalid response format. Please try refreshing.",
    ErrorKind.UNKNOWN: "An unexpected error occurred with the AI service.",
}


class AnalysisError(Exception):
    """Failure talking to the analysis service, with a message fit for users."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNKNOWN):
        super().__init__(message)
        self.kind = kind
        self.user_message = USER_MESSAGES[kind]

    def __repr__(self) -> str:
        return f"AnalysisError(kind={self.kind.value}, message={str(self)!r})"


def _kind_for(exc: Exception) -> ErrorKind:
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status in (401, 403):
            return ErrorKind.INVALID_CREDENTIAL
        if status == 429:
            return ErrorKind.RATE_LIMITED

    message = str(exc).lower()
    if "api key not valid" in message or "invalid api key" in message:
        return ErrorKind.INVALID_CREDENTIAL
    if "429" in message or "resource_exhausted" in message:
        return ErrorKind.RATE_LIMITED
    if isinstance(exc, (httpx.TransportError, ConnectionError, TimeoutError)):
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN


def classify_error(exc: Exception, context: str) -> AnalysisError:
    """
    Map any exception from the analysis path to an AnalysisError.

    Args:
        exc: The original exception
        context: Short description of the failed call, for the log

    Returns:
        AnalysisError (the same object if exc already is one)
    """
    if isinstance(exc, AnalysisError):
        return exc

    kind = _kind_for(exc)
    logger.error(f"Error in {context}: {exc}")
    error = AnalysisError(str(exc) or exc.__class__.__name__, kind)
    error.__cause__ = exc
    return error
