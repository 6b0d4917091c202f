"""
Application service: translate a failed chat turn into an HTTP status and a
short, user-safe message.

Rules are evaluated top to bottom and the first match wins, so precedence is
the order of ERROR_RULES. Quote lookup failures never reach this module; the
quote provider absorbs them.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ir_assistant.domain.errors import CompletionError

INVALID_CREDENTIALS_MESSAGE = "Invalid API key. Please check your GROQ_API_KEY setting."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later"
INVALID_REQUEST_MESSAGE = "Invalid request to AI service"
MODEL_NOT_FOUND_MESSAGE = "AI model not found. Please check the model name."
NETWORK_MESSAGE = "Network error. Please check your internet connection"
GENERIC_MESSAGE = "Failed to get response from AI"


@dataclass(frozen=True)
class ErrorOutcome:
    status_code: int
    message: str


@dataclass(frozen=True)
class ErrorRule:
    matches: Callable[[Exception], bool]
    status_code: int
    render: Callable[[Exception], str]


def _status(exc: Exception) -> Optional[int]:
    if isinstance(exc, CompletionError):
        return exc.status_code
    return None


def _detail(exc: Exception) -> Optional[str]:
    if isinstance(exc, CompletionError):
        return exc.detail or None
    return None


def _status_is(code: int) -> Callable[[Exception], bool]:
    return lambda exc: _status(exc) == code


def _fixed(message: str) -> Callable[[Exception], str]:
    return lambda _exc: message


ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(_status_is(401), 401, _fixed(INVALID_CREDENTIALS_MESSAGE)),
    ErrorRule(_status_is(429), 429, _fixed(RATE_LIMIT_MESSAGE)),
    ErrorRule(_status_is(400), 400, lambda exc: _detail(exc) or INVALID_REQUEST_MESSAGE),
    ErrorRule(_status_is(404), 404, _fixed(MODEL_NOT_FOUND_MESSAGE)),
    ErrorRule(
        lambda exc: isinstance(exc, CompletionError) and exc.unreachable,
        503,
        _fixed(NETWORK_MESSAGE),
    ),
    ErrorRule(lambda exc: _detail(exc) is not None, 500, lambda exc: _detail(exc)),
)


def map_error(exc: Exception) -> ErrorOutcome:
    """Return the outcome of the first rule in ERROR_RULES matching *exc*."""
    for rule in ERROR_RULES:
        if rule.matches(exc):
            return ErrorOutcome(status_code=rule.status_code, message=rule.render(exc))
    return ErrorOutcome(status_code=500, message=GENERIC_MESSAGE)
