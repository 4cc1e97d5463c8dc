# src/generation/caller.py - v1
"""Resilient text generation: cache -> circuit breaker -> retry -> fallback.

Usage:
    caller = ResilientCaller(provider, ResultCache(store), CircuitBreaker())
    text = await caller.generate(request)

Algorithm:
  1. A live primary cache entry short-circuits everything (no breaker check).
  2. An open breaker fails fast, escaping through the fallback slot if any.
  3. Otherwise the provider is tried up to the retry budget with
     exponential backoff; each attempt is bounded by a timeout.
  4. The first success closes the breaker and refreshes both cache slots.
  5. Exhaustion counts one breaker failure, then escapes through the
     fallback slot; with no fallback the caller gets a bare
     GenerationUnavailable carrying the configured message.

Concurrent calls for the same key are not coalesced: both may reach the
provider and the later write simply overwrites an equivalent value.
"""

from __future__ import annotations

import asyncio
import logging

from talentgen.cache.fingerprint import compute_cache_key
from talentgen.cache.result_cache import ResultCache
from talentgen.config.settings import DEFAULT_UNAVAILABLE_MESSAGE
from talentgen.core.errors import GenerationUnavailable, ProviderError
from talentgen.core.models import GenerationRequest
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.circuit_breaker import CircuitBreaker
from talentgen.llm.retry import (
    DEFAULT_RETRY_POLICY,
    RetryCancelled,
    RetryExhausted,
    RetryPolicy,
    SleepFunc,
    with_retry,
)

logger = logging.getLogger(__name__)

STALE_RESULT_MESSAGE = "AI service temporarily unavailable. Using cached result."


class ResilientCaller:
    """Single entry point for text generation used by every task."""

    def __init__(
        self,
        provider: BaseTextProvider,
        cache: ResultCache,
        breaker: CircuitBreaker,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        timeout_s: float | None = 30.0,
        unavailable_message: str = DEFAULT_UNAVAILABLE_MESSAGE,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._breaker = breaker
        self._retry_policy = retry_policy
        self._timeout_s = timeout_s
        self._unavailable_message = unavailable_message
        self._sleep = sleep

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def provider(self) -> BaseTextProvider:
        return self._provider

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def generate(
        self,
        request: GenerationRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Produce text for a request.

        Raises:
            GenerationUnavailable: No live result; ``fallback`` is set when a
                previously generated value exists.
            RetryCancelled: ``cancel_event`` was set between attempts.
        """
        key = compute_cache_key(request)

        cached = await self._read_cache(key)
        if cached is not None:
            logger.info("Cache hit for %s", request.task.value)
            return cached

        if not self._breaker.allow_request():
            logger.warning(
                "Circuit breaker open, failing fast for %s", request.task.value
            )
            raise await self._unavailable(key, request)

        try:
            text = await with_retry(
                self._call_provider,
                request,
                policy=self._retry_policy,
                operation=f"generate:{request.task.value}",
                sleep=self._sleep,
                cancel_event=cancel_event,
            )
        except RetryExhausted as exc:
            self._breaker.record_failure()
            logger.error(
                "Generation failed for %s after %d attempts (breaker %s): %s",
                request.task.value,
                exc.attempts,
                self._breaker.phase.value,
                exc.last_error,
            )
            raise await self._unavailable(key, request) from exc
        except (RetryCancelled, asyncio.CancelledError):
            self._breaker.release_probe()
            raise

        self._breaker.record_success()
        await self._write_cache(key, text, request.cache_ttl_s)
        return text

    async def _call_provider(self, request: GenerationRequest) -> str:
        call = self._provider.complete(
            request.system_prompt,
            request.user_prompt,
            model=request.params.model,
            temperature=request.params.temperature,
            seed=request.params.seed,
        )
        if self._timeout_s:
            response = await asyncio.wait_for(call, timeout=self._timeout_s)
        else:
            response = await call

        if not response.content.strip():
            raise ProviderError(f"{self._provider.provider_name} returned an empty response")
        return response.content

    async def _unavailable(
        self, key: str, request: GenerationRequest
    ) -> GenerationUnavailable:
        fallback = await self._read_fallback(key)
        if fallback is not None:
            logger.warning("Using previously generated result as fallback for %s", key)
            return GenerationUnavailable(STALE_RESULT_MESSAGE, fallback=fallback)
        return GenerationUnavailable(request.fallback_message or self._unavailable_message)

    # Cache backend failures degrade to a miss / skipped write on the text path.

    async def _read_cache(self, key: str) -> str | None:
        try:
            return await self._cache.get(key)
        except Exception as exc:
            logger.error("Cache read failed for %s: %s", key, exc)
            return None

    async def _read_fallback(self, key: str) -> str | None:
        try:
            return await self._cache.get_fallback(key)
        except Exception as exc:
            logger.error("Fallback read failed for %s: %s", key, exc)
            return None

    async def _write_cache(self, key: str, value: str, ttl_s: int) -> None:
        try:
            await self._cache.put(key, value, ttl_s)
        except Exception as exc:
            logger.error("Cache write failed for %s: %s", key, exc)
