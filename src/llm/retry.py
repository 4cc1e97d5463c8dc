# src/llm/retry.py - v2
"""Bounded retry with exponential backoff.

Every failure is retried until the attempt budget is spent; the error
type is classified for logging only. Delays between attempts follow
``base_delay_s * backoff_factor ** n`` (1s, 2s, 4s with the defaults).
Cancellation is cooperative: the cancel event is checked before each
attempt, an in-flight attempt is never interrupted.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class RetryExhausted(Exception):
    """All attempts failed."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        self.error_type = classify_error(last_error)
        super().__init__(
            f"'{operation}' failed after {attempts} attempts "
            f"({self.error_type}): {last_error}"
        )


class RetryCancelled(Exception):
    """The caller cancelled the retry sequence between attempts."""

    def __init__(self, operation: str, attempts: int):
        self.operation = operation
        self.attempts = attempts
        super().__init__(f"'{operation}' cancelled after {attempts} attempts")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff schedule."""

    max_attempts: int = 3
    base_delay_s: float = 1.0
    backoff_factor: float = 2.0
    jitter: bool = False

    def delay_for(self, attempt: int) -> float:
        """Delay after the given failed attempt (0-based)."""
        delay = self.base_delay_s * (self.backoff_factor ** attempt)
        if self.jitter:
            delay *= 0.5 + random.random()  # noqa: S311
        return delay


DEFAULT_RETRY_POLICY = RetryPolicy()


def classify_error(error: BaseException) -> str:
    """Classify an exception into an error type for logs."""
    msg = str(error).lower()
    name = type(error).__name__.lower()

    if "timeout" in name or "timeout" in msg or "timed out" in msg:
        return "timeout"
    if "429" in msg or "rate" in msg:
        return "rate_limit"
    if any(c in msg for c in ("500", "502", "503", "504", "server")):
        return "server_error"
    if "connect" in name or "connect" in msg:
        return "network"
    return "unknown"


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    policy: RetryPolicy | None = None,
    operation: str = "provider_call",
    sleep: SleepFunc = asyncio.sleep,
    cancel_event: asyncio.Event | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Raises:
        RetryExhausted: If every attempt failed.
        RetryCancelled: If ``cancel_event`` was set before an attempt.
    """
    policy = policy or DEFAULT_RETRY_POLICY
    attempts = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise RetryCancelled(operation, attempts)
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            attempts += 1
            if attempts >= policy.max_attempts:
                raise RetryExhausted(operation, attempts, e) from e

            delay = policy.delay_for(attempts - 1)
            logger.warning(
                "'%s' %s (attempt %d/%d), retrying in %.1fs: %s",
                operation, classify_error(e), attempts, policy.max_attempts, delay, e,
            )
            await sleep(delay)
