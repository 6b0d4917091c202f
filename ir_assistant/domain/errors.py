"""Exception hierarchy shared by every layer of the assistant."""

from typing import Optional


class AssistantError(Exception):
    """Base exception for all assistant-specific errors."""


class ConfigError(AssistantError):
    """Raised when environment configuration is invalid or missing."""


class InvalidChatRequestError(AssistantError, ValueError):
    """Raised when an inbound chat request fails validation."""


class CompletionError(AssistantError):
    """Raised when the completion backend fails to produce an answer.

    Attributes:
        status_code: HTTP status returned by the backend, if any.
        detail:      Error message supplied by the backend, if any.
        unreachable: True when the backend host could not be resolved or
                     refused the connection.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
        unreachable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.unreachable = unreachable


class EmptyCompletionError(CompletionError):
    """Raised when the backend answered successfully but without content."""
