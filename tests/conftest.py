# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides sample job/candidate records, a scripted mock text provider,
fake clocks and a recording sleep so no test waits in real time.
No external dependencies: all I/O is mocked or in-memory.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from talentgen.cache.memory_store import MemoryCacheStore
from talentgen.cache.result_cache import ResultCache
from talentgen.core.models import (
    Application,
    CandidateProfile,
    Education,
    Experience,
    JobData,
)
from talentgen.generation.caller import ResilientCaller
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.circuit_breaker import CircuitBreaker
from talentgen.llm.models import ProviderResponse


# === HELPERS ===


class FakeClock:
    """Manually advanced clock usable as a seconds or milliseconds source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeClockMs:
    """Integer millisecond clock for rate limiters."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_response(content: str) -> ProviderResponse:
    return ProviderResponse(content=content, model="openai", provider="mock")


def make_provider(*outcomes: Any) -> AsyncMock:
    """Mock BaseTextProvider whose complete() yields outcomes in order.

    A string outcome becomes a ProviderResponse, an exception instance is
    raised. With a single string outcome every call returns it.
    """
    provider = AsyncMock(spec=BaseTextProvider)
    provider.provider_name = "mock"
    if len(outcomes) == 1 and isinstance(outcomes[0], str):
        provider.complete.return_value = make_response(outcomes[0])
    else:
        provider.complete.side_effect = [
            make_response(o) if isinstance(o, str) else o for o in outcomes
        ]
    return provider


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_job() -> JobData:
    """Senior backend job with requirements."""
    return JobData(
        title="Senior Backend Engineer",
        level="senior",
        location="Berlin",
        type="full-time",
        remote=True,
        description="Build and operate the matching platform APIs.",
        requirements=["Python", "PostgreSQL", "AWS", "Kubernetes", "Redis", "gRPC"],
    )


@pytest.fixture
def sample_candidate() -> CandidateProfile:
    """Candidate with two roles and one degree."""
    return CandidateProfile(
        name="Alex Doe",
        location="Hamburg",
        skills=["Python", "FastAPI", "PostgreSQL"],
        experience=[
            Experience(
                company="Acme",
                title="Backend Engineer",
                description="Built payment APIs",
            ),
            Experience(company="Initech", title="Junior Developer"),
        ],
        education=[
            Education(
                institution="TU Berlin", degree="BSc", field="Computer Science"
            )
        ],
    )


@pytest.fixture
def sample_applications(sample_candidate: CandidateProfile) -> list[Application]:
    """Three applications with distinct skill sets."""
    second = sample_candidate.model_copy(update={"name": "Sam Roe", "skills": ["Go", "AWS"]})
    third = sample_candidate.model_copy(update={"name": "Kim Poe", "skills": ["Java"]})
    return [
        Application(candidate_profile=sample_candidate, cover_letter="Hello"),
        Application(candidate_profile=second),
        Application(candidate_profile=third),
    ]


@pytest.fixture
def job_payload() -> dict[str, Any]:
    """Job as a camelCase mapping, the shape the platform sends."""
    return {
        "title": "Data Engineer",
        "level": "mid",
        "requirements": ["SQL", "Airflow"],
        "compensation": {"min": 60000, "max": 80000, "currency": "EUR"},
    }


@pytest.fixture
def candidate_payload() -> dict[str, Any]:
    return {
        "skills": ["SQL", "dbt"],
        "experience": [{"company": "Globex", "title": "Analyst"}],
        "education": [],
    }


# === FIXTURES: Resilience plumbing ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clock_ms() -> FakeClockMs:
    return FakeClockMs()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock, gc_probability=0.0)


@pytest.fixture
def breaker(clock: FakeClock) -> CircuitBreaker:
    return CircuitBreaker(failure_threshold=5, cooldown_s=60, clock=clock)


@pytest.fixture
def make_caller(memory_store, breaker, recording_sleep):
    """Factory building a ResilientCaller around a given provider."""

    def _make(provider: BaseTextProvider, **kwargs: Any) -> ResilientCaller:
        kwargs.setdefault("sleep", recording_sleep)
        kwargs.setdefault("timeout_s", None)
        return ResilientCaller(provider, ResultCache(memory_store), breaker, **kwargs)

    return _make


@pytest.fixture
def scripted_provider():
    """The make_provider factory, for tests that need a scripted provider."""
    return make_provider
