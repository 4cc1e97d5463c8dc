# src/ratelimit/memory_store.py - v1
"""In-process rate-limit store (default RATE_LIMIT_BACKEND=memory).

Each process enforces its own independent limit. Expired entries are
garbage-collected opportunistically on a small fraction of hits.
"""

from __future__ import annotations

import random

from talentgen.ratelimit.base_store import BaseRateLimitStore
from talentgen.ratelimit.models import RateLimitEntry


class MemoryRateLimitStore(BaseRateLimitStore):
    """Dict-backed fixed-window counters."""

    def __init__(self, gc_probability: float = 0.01) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._gc_probability = gc_probability

    async def hit(self, key: str, window_ms: int, now_ms: int) -> RateLimitEntry:
        if random.random() < self._gc_probability:  # noqa: S311
            self.cleanup(now_ms)

        entry = self._entries.get(key)
        if entry is None or now_ms >= entry.reset_at_ms:
            entry = RateLimitEntry(count=0, reset_at_ms=now_ms + window_ms)
        entry = entry.model_copy(update={"count": entry.count + 1})
        self._entries[key] = entry
        return entry

    async def reset(self, key: str) -> None:
        self._entries.pop(key, None)

    def cleanup(self, now_ms: int) -> int:
        """Drop entries whose window has ended. Returns how many were removed."""
        expired = [k for k, e in self._entries.items() if now_ms >= e.reset_at_ms]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
