# src/ratelimit/redis_store.py - v1
"""Redis-backed rate-limit store (RATE_LIMIT_BACKEND=redis).

Requires 'redis' package: pip install redis.
Counters are shared by every process pointing at the same Redis, which
gives one global limit per key. The key's PEXPIRE is the window, so
Redis performs the garbage collection.
"""

from __future__ import annotations

import logging
from typing import Any

from talentgen.ratelimit.base_store import BaseRateLimitStore
from talentgen.ratelimit.models import RateLimitEntry

logger = logging.getLogger(__name__)

_KEY_PREFIX = "talentgen:ratelimit:"


class RedisRateLimitStore(BaseRateLimitStore):
    """INCR + PEXPIRE fixed-window counters."""

    def __init__(self, redis_url: str, namespace: str = "default", client: Any = None) -> None:
        if client is None:
            try:
                import redis.asyncio as aioredis
            except ImportError as e:
                raise ImportError(
                    "redis package required: pip install redis"
                ) from e
            client = aioredis.Redis.from_url(redis_url, decode_responses=True)
        self._client = client
        self._prefix = f"{_KEY_PREFIX}{namespace}:"

    async def hit(self, key: str, window_ms: int, now_ms: int) -> RateLimitEntry:
        redis_key = f"{self._prefix}{key}"
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.incr(redis_key)
            pipe.pttl(redis_key)
            count, ttl_ms = await pipe.execute()

        # -1: counter created by this INCR (or expiry lost); start the window.
        if ttl_ms is None or ttl_ms < 0:
            await self._client.pexpire(redis_key, window_ms)
            ttl_ms = window_ms

        return RateLimitEntry(count=int(count), reset_at_ms=now_ms + int(ttl_ms))

    async def reset(self, key: str) -> None:
        await self._client.delete(f"{self._prefix}{key}")

    async def close(self) -> None:
        await self._client.aclose()
