# src/llm/circuit_breaker.py - v1
"""Circuit breaker shared by every call to the text provider.

States:
  CLOSED    calls proceed; failures are counted.
  OPEN      calls fail fast until ``cooldown_s`` has passed since the
            last failure.
  HALF_OPEN entered exactly when the cooldown elapses; a single probe
            call is let through. Success closes the breaker, failure
            re-opens it and restarts the cooldown.

One instance is owned by the service and injected where needed; it is
never a module-level singleton. A threading lock guards each
read-modify-write so the instance stays consistent when driven from
several threads. Under asyncio the lock is never held across an await.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from talentgen.core.models import CircuitBreakerState, CircuitPhase

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Consecutive-failure circuit breaker with a time-based cooldown."""

    def __init__(
        self,
        failure_threshold: int = 5,
        cooldown_s: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        self._threshold = failure_threshold
        self._cooldown_s = cooldown_s
        self._clock = clock
        self._lock = threading.Lock()
        self._failures = 0
        self._last_failure_at: float | None = None
        self._phase = CircuitPhase.CLOSED
        self._probe_in_flight = False

    @property
    def failure_threshold(self) -> int:
        return self._threshold

    @property
    def cooldown_s(self) -> float:
        return self._cooldown_s

    @property
    def phase(self) -> CircuitPhase:
        with self._lock:
            return self._current_phase()

    @property
    def consecutive_failures(self) -> int:
        return self._failures

    def snapshot(self) -> CircuitBreakerState:
        with self._lock:
            return CircuitBreakerState(
                consecutive_failures=self._failures,
                last_failure_at=self._last_failure_at,
                phase=self._current_phase(),
            )

    def allow_request(self) -> bool:
        """Whether a provider call may proceed right now.

        In HALF_OPEN only one probe is admitted until it reports back.
        """
        with self._lock:
            phase = self._current_phase()
            if phase is CircuitPhase.CLOSED:
                return True
            if phase is CircuitPhase.OPEN:
                return False
            if self._probe_in_flight:
                return False
            self._probe_in_flight = True
            logger.info("Circuit breaker half-open, admitting probe call")
            return True

    def record_success(self) -> None:
        with self._lock:
            if self._phase is not CircuitPhase.CLOSED:
                logger.info("Circuit breaker closed after successful call")
            self._failures = 0
            self._phase = CircuitPhase.CLOSED
            self._probe_in_flight = False

    def record_failure(self) -> None:
        with self._lock:
            phase = self._current_phase()
            self._failures += 1
            self._last_failure_at = self._clock()
            self._probe_in_flight = False
            if phase is CircuitPhase.HALF_OPEN or self._failures >= self._threshold:
                if phase is not CircuitPhase.OPEN:
                    logger.warning(
                        "Circuit breaker opened after %d consecutive failures "
                        "(cooldown %.0fs)",
                        self._failures, self._cooldown_s,
                    )
                self._phase = CircuitPhase.OPEN

    def release_probe(self) -> None:
        """Give back a half-open probe slot whose call never completed."""
        with self._lock:
            self._probe_in_flight = False

    def reset(self) -> None:
        with self._lock:
            self._failures = 0
            self._last_failure_at = None
            self._phase = CircuitPhase.CLOSED
            self._probe_in_flight = False

    def _current_phase(self) -> CircuitPhase:
        # Caller holds the lock.
        if (
            self._phase is CircuitPhase.OPEN
            and self._last_failure_at is not None
            and self._clock() - self._last_failure_at >= self._cooldown_s
        ):
            self._phase = CircuitPhase.HALF_OPEN
            self._probe_in_flight = False
        return self._phase
