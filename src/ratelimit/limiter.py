# src/ratelimit/limiter.py - v1
"""Fixed-window rate limiting at the request boundary.

Two limiters run per inbound request: one keyed by network address and
one keyed by authenticated user (skipped for anonymous requests). The
address limiter is checked first and short-circuits the user limiter.

Windows are fixed, not sliding: a counter resets entirely when its window
ends, so a burst straddling a boundary can admit close to twice the
nominal rate.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from talentgen.core.errors import RateLimitExceeded
from talentgen.ratelimit.base_store import BaseRateLimitStore
from talentgen.ratelimit.models import RateLimitDecision

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """One fixed-window limiter over a counter store."""

    def __init__(
        self,
        store: BaseRateLimitStore,
        window_ms: int = 60_000,
        max_requests: int = 100,
        clock_ms: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        self._store = store
        self._window_ms = window_ms
        self._max_requests = max_requests
        self._clock_ms = clock_ms

    @property
    def store(self) -> BaseRateLimitStore:
        return self._store

    async def check(
        self,
        key: str,
        window_ms: int | None = None,
        max_requests: int | None = None,
    ) -> RateLimitDecision:
        """Count a request for key and decide whether it is admitted.

        Rejected requests still count toward the window.
        """
        window = window_ms or self._window_ms
        limit = max_requests or self._max_requests
        now = self._clock_ms()

        entry = await self._store.hit(key, window, now)

        if entry.count > limit:
            retry_after = max(1, math.ceil((entry.reset_at_ms - now) / 1000))
            return RateLimitDecision(
                allowed=False,
                limit=limit,
                remaining=0,
                reset_at_ms=entry.reset_at_ms,
                retry_after_seconds=retry_after,
            )

        return RateLimitDecision(
            allowed=True,
            limit=limit,
            remaining=limit - entry.count,
            reset_at_ms=entry.reset_at_ms,
        )

    async def reset(self, key: str) -> None:
        await self._store.reset(key)


class RequestRateLimiter:
    """Address limiter followed by an optional per-user limiter."""

    def __init__(self, ip_limiter: RateLimiter, user_limiter: RateLimiter | None = None) -> None:
        self._ip_limiter = ip_limiter
        self._user_limiter = user_limiter

    async def enforce(
        self, ip: str | None, user_id: str | None = None
    ) -> RateLimitDecision:
        """Admit or reject one inbound request.

        Returns:
            Decision of the last limiter consulted (its metadata is what the
            caller should surface).

        Raises:
            RateLimitExceeded: If either limiter rejects the request.
        """
        ip_key = ip or "unknown"
        decision = await self._ip_limiter.check(ip_key)
        if not decision.allowed:
            logger.info("Rate limit exceeded for address %s", ip_key)
            raise RateLimitExceeded(decision.retry_after_seconds)

        if self._user_limiter is None or not user_id:
            return decision

        user_key = f"user:{user_id}"
        decision = await self._user_limiter.check(user_key)
        if not decision.allowed:
            logger.info("Rate limit exceeded for %s", user_key)
            raise RateLimitExceeded(decision.retry_after_seconds)
        return decision

    async def close(self) -> None:
        await self._ip_limiter.store.close()
        if self._user_limiter is not None:
            await self._user_limiter.store.close()
