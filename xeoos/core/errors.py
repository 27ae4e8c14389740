"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. The ``code`` of each
error doubles as the key into the localized message catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    field: str
    http_status: int
    retry_after: float
    service: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable (English) fallback message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input validation fails (400)."""


class AuthenticationAppError(AppError):
    """Raised when the caller is not authenticated (401)."""


class ForbiddenAppError(AppError):
    """Raised when the caller may not act on a resource (403)."""


class NotFoundAppError(AppError):
    """Raised when a referenced resource does not exist (404)."""


class TokenExpiredAppError(AppError):
    """Raised when a refresh token has expired (410)."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when the caller exceeded the request budget (429).

    Attributes:
        headers: Throttling headers (Retry-After, X-RateLimit-*) for the response.
    """

    headers: dict[str, str] | None = None


class ExternalServiceAppError(AppError):
    """Raised when a third-party service call fails (502)."""
