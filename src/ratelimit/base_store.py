# src/ratelimit/base_store.py - v1
"""Abstract storage for fixed-window rate-limit counters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from talentgen.ratelimit.models import RateLimitEntry


class BaseRateLimitStore(ABC):
    """Counter storage shared by RateLimiter instances.

    The counting logic lives in the store so a shared backend can apply
    it atomically; the limiter only interprets the returned entry.
    """

    @abstractmethod
    async def hit(self, key: str, window_ms: int, now_ms: int) -> RateLimitEntry:
        """Count one request for key and return the updated entry.

        A new window starting at ``now_ms`` is opened when the key has no
        entry or its window has ended.
        """

    @abstractmethod
    async def reset(self, key: str) -> None:
        """Forget the counter for key."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
