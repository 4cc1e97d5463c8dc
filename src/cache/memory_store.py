# src/cache/memory_store.py - v1
"""Process-local in-memory cache store (default CACHE_BACKEND=memory).

Entries live in a dict of key -> (value, expires_at). Expired entries are
dropped on read and swept opportunistically on a small fraction of writes.
Not shared between processes.
"""

from __future__ import annotations

import random
import time
from typing import Callable

from talentgen.cache.base_cache_store import BaseCacheStore


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store with per-entry expiry."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        gc_probability: float = 0.01,
    ) -> None:
        self._clock = clock
        self._gc_probability = gc_probability
        self._entries: dict[str, tuple[str, float | None]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        if random.random() < self._gc_probability:  # noqa: S311
            self.cleanup()
        expires_at = None if ttl_seconds is None else self._clock() + ttl_seconds
        self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def cleanup(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = self._clock()
        expired = [
            k for k, (_, expires_at) in self._entries.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
