# src/ratelimit/models.py - v1
"""Rate-limit domain models: RateLimitEntry, RateLimitDecision."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RateLimitEntry(BaseModel):
    """Counter for one key in one fixed window."""

    count: int = Field(default=0, ge=0)
    reset_at_ms: int


class RateLimitDecision(BaseModel):
    """Outcome of a single limiter check plus response metadata."""

    allowed: bool
    limit: int
    remaining: int
    reset_at_ms: int
    retry_after_seconds: int | None = None

    def headers(self) -> dict[str, str]:
        """Response headers for the outer surface."""
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at_ms),
        }
        if self.retry_after_seconds is not None:
            headers["Retry-After"] = str(self.retry_after_seconds)
        return headers
