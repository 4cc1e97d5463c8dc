# src/cache/redis_store.py - v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments: every process sees
the same primary and fallback slots.
"""

from __future__ import annotations

import logging
from typing import Any

from talentgen.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

_KEY_PREFIX = "talentgen:cache:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store using the asyncio client."""

    def __init__(self, redis_url: str, client: Any = None) -> None:
        if client is None:
            try:
                import redis.asyncio as aioredis
            except ImportError as e:
                raise ImportError(
                    "redis package required: pip install redis"
                ) from e
            client = aioredis.Redis.from_url(redis_url, decode_responses=True)
        self._client = client

    async def get(self, key: str) -> str | None:
        value = await self._client.get(f"{_KEY_PREFIX}{key}")
        if value is None:
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        if ttl_seconds is None:
            await self._client.set(f"{_KEY_PREFIX}{key}", value)
        else:
            await self._client.set(f"{_KEY_PREFIX}{key}", value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._client.delete(f"{_KEY_PREFIX}{key}")

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
