# src/core/errors.py - v1
"""Error taxonomy shared by every layer.

All errors surfaced to callers derive from AppError and carry a stable
ErrorCode plus an HTTP-style status code for the outer surface.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    AI_SERVICE_ERROR = "AI_SERVICE_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 500,
        details: Any = None,
        fallback: Any = None,
        is_operational: bool = True,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.fallback = fallback
        self.is_operational = is_operational
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable error body for the outer surface."""
        body: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        if self.fallback is not None:
            body["fallback"] = self.fallback
        return body


class ValidationError(AppError):
    """Malformed or missing task inputs. Never retried."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(ErrorCode.VALIDATION_ERROR, message, 400, details=details)


class RateLimitExceeded(AppError):
    """Request quota exhausted for an IP address or user."""

    def __init__(self, retry_after_seconds: int | None = None) -> None:
        self.retry_after_seconds = retry_after_seconds
        if retry_after_seconds:
            message = (
                f"Too many requests. Please try again in {retry_after_seconds} seconds"
            )
        else:
            message = "Too many requests. Please try again later"
        super().__init__(
            ErrorCode.RATE_LIMIT_EXCEEDED,
            message,
            429,
            details={"retryAfter": retry_after_seconds},
        )


class GenerationUnavailable(AppError):
    """No live result could be produced.

    ``fallback`` holds a previously generated value when one exists; callers
    may present it as a stale result together with ``message`` as a warning.
    """

    def __init__(self, message: str, fallback: str | None = None) -> None:
        super().__init__(ErrorCode.AI_SERVICE_ERROR, message, 503, fallback=fallback)

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not None


class ProviderError(AppError):
    """Non-success response or unusable body from a generation provider."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.provider_status = status_code
        super().__init__(ErrorCode.PROVIDER_ERROR, message, 502)
