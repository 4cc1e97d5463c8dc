# src/cache/result_cache.py - v1
"""Primary + fallback slot cache over any BaseCacheStore.

The primary slot expires by TTL. The fallback slot under ``<key>:fallback``
has no TTL and is only overwritten by a new successful generation; it is
read only when the live path is exhausted. Backend errors propagate.
"""

from __future__ import annotations

import logging

from talentgen.cache.base_cache_store import BaseCacheStore
from talentgen.cache.fingerprint import fallback_key

logger = logging.getLogger(__name__)


class ResultCache:
    """Read/write helper pairing each primary entry with a durable fallback."""

    def __init__(self, store: BaseCacheStore) -> None:
        self._store = store

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    async def get(self, key: str) -> str | None:
        """Live primary value, or None. Empty values count as misses."""
        value = await self._store.get(key)
        return value or None

    async def get_fallback(self, key: str) -> str | None:
        """Durable fallback value for a primary key, or None."""
        value = await self._store.get(fallback_key(key))
        return value or None

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write the primary slot with TTL and refresh the fallback slot."""
        await self._store.set(key, value, ttl_seconds)
        await self._store.set(fallback_key(key), value, None)
        logger.debug("Cached result under %s (ttl=%ds)", key, ttl_seconds)

    async def close(self) -> None:
        await self._store.close()
