"""Application-level exception types.

Every error raised by the limiter, the document submitter or the HTTP layer
derives from ``AppError`` so handlers can log and render them uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    http_status: int
    url: str
    limit: int
    window_seconds: float
    error_type: str


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is the message.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class InvalidConfigurationError(ValidationAppError, ValueError):
    """Raised synchronously when a limiter is built with invalid settings.

    Also a ``ValueError`` so plain Python callers can catch it without
    knowing about the application error hierarchy.
    """


class DownstreamCallFailedError(AppError):
    """Raised by the document submitter when the downstream call fails."""


class InterruptedWaitError(AppError):
    """Raised by ``acquire`` when a blocked wait is interrupted externally."""
