# src/ratelimit/store_factory.py - v1
"""Factory for rate-limit stores and the per-request limiter pair."""

from __future__ import annotations

from talentgen.config.settings import Settings
from talentgen.ratelimit.base_store import BaseRateLimitStore
from talentgen.ratelimit.limiter import RateLimiter, RequestRateLimiter


def create_rate_limit_store(
    settings: Settings | None = None, namespace: str = "default"
) -> BaseRateLimitStore:
    """Instantiate the configured rate-limit backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.
        namespace: Keeps the address and user counters apart in a shared backend.
    """
    backend = "memory" if settings is None else settings.rate_limit_backend

    if backend == "memory":
        from talentgen.ratelimit.memory_store import MemoryRateLimitStore
        return MemoryRateLimitStore()

    if backend == "redis":
        from talentgen.ratelimit.redis_store import RedisRateLimitStore
        if settings is None or not settings.rate_limit_redis_url:
            raise ValueError(
                "RATE_LIMIT_REDIS_URL must be set when RATE_LIMIT_BACKEND=redis"
            )
        return RedisRateLimitStore(
            redis_url=settings.rate_limit_redis_url, namespace=namespace
        )

    raise ValueError(f"Unsupported rate limit backend: {backend!r}")


def create_request_limiter(settings: Settings | None = None) -> RequestRateLimiter:
    """Build the address + user limiter pair with independent stores."""
    settings = settings or Settings()
    ip_limiter = RateLimiter(
        create_rate_limit_store(settings, namespace="ip"),
        window_ms=settings.rate_limit_window_ms,
        max_requests=settings.rate_limit_max_requests,
    )
    user_limiter = None
    if settings.rate_limit_by_user:
        user_limiter = RateLimiter(
            create_rate_limit_store(settings, namespace="user"),
            window_ms=settings.rate_limit_window_ms,
            max_requests=settings.rate_limit_max_requests,
        )
    return RequestRateLimiter(ip_limiter, user_limiter)
