# src/cache/base_cache_store.py - v1
"""Abstract key/value cache store with TTL."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends.

    Values are raw strings. A ``ttl_seconds`` of None stores the value
    without expiry.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the live value for key, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store value under key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key if present."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
