# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types: all imports come from core.models.
Input records accept both camelCase (as supplied by the platform's
JSON payloads) and snake_case field names.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# === TASKS ===


class TaskType(str, Enum):
    """The six text-generation tasks served by the orchestration layer."""

    FIT_SUMMARY = "fit-summary"
    COVER_LETTER = "cover-letter"
    RESUME_IMPROVEMENT = "resume-bullet-improvement"
    JOB_DESCRIPTION = "job-description-generation"
    CANDIDATE_RANKING = "candidate-ranking"
    SCREENING_QUESTIONS = "screening-questions"


# === INPUT RECORDS ===


class _InputRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Compensation(_InputRecord):
    min: float | None = None
    max: float | None = None
    currency: str = "USD"


class JobData(_InputRecord):
    """Job attributes interpolated into prompts."""

    title: str = Field(min_length=1)
    level: str
    location: str = ""
    type: str = ""
    remote: bool = False
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    compensation: Compensation | None = None
    benefits: list[str] = Field(default_factory=list)


class Experience(_InputRecord):
    company: str
    title: str
    description: str = ""


class Education(_InputRecord):
    institution: str
    degree: str
    field: str


class CandidateProfile(_InputRecord):
    name: str | None = None
    location: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)


class Application(_InputRecord):
    """One candidate's application as supplied for ranking."""

    candidate_profile: CandidateProfile
    resume_data: dict[str, Any] | None = None
    cover_letter: str | None = None


# === GENERATION ===


class GenerationParams(BaseModel):
    """Provider parameters. Part of the cache identity."""

    model_config = ConfigDict(frozen=True)

    model: str = "openai"
    temperature: float = 0.7
    seed: int = 42


class GenerationRequest(BaseModel):
    """Fully resolved text-generation request. Constructed fresh per call."""

    model_config = ConfigDict(frozen=True)

    task: TaskType
    system_prompt: str
    user_prompt: str
    params: GenerationParams = Field(default_factory=GenerationParams)
    cache_ttl_s: int = 3600
    fallback_message: str | None = None

    def cache_identity(self) -> dict[str, Any]:
        """Fields that determine the output. TTL and fallback message are excluded."""
        return {
            "task": self.task.value,
            "system": self.system_prompt,
            "prompt": self.user_prompt,
            "model": self.params.model,
            "temperature": self.params.temperature,
            "seed": self.params.seed,
        }


class ImageOptions(BaseModel):
    """Image provider options encoded into the URL query string."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=1200, gt=0)
    height: int = Field(default=630, gt=0)
    seed: int = 42
    no_logo: bool = True


# === CIRCUIT BREAKER ===


class CircuitPhase(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitBreakerState(BaseModel):
    """Point-in-time snapshot of the shared breaker."""

    consecutive_failures: int = Field(default=0, ge=0)
    last_failure_at: float | None = None
    phase: CircuitPhase = CircuitPhase.CLOSED


# === RANKING ===


class RankingResult(BaseModel):
    """Score record for one input candidate.

    ``candidate_index`` is the candidate's position in the caller's input
    list and is the only valid way to re-associate a result with a candidate.
    """

    model_config = ConfigDict(frozen=True)

    candidate_index: int = Field(ge=0)
    score: int = Field(ge=0, le=100)
    rationale: str
    strength: str
    concern: str


class _RankingOutcomeBase(BaseModel):
    """Results in presentation order: score descending, then candidate index."""

    results: list[RankingResult] = Field(default_factory=list)

    def by_candidate_index(self) -> dict[int, RankingResult]:
        return {r.candidate_index: r for r in self.results}

    def result_for(self, candidate_index: int) -> RankingResult:
        """Look up the result for one input candidate.

        Raises:
            KeyError: If no result carries that index.
        """
        for result in self.results:
            if result.candidate_index == candidate_index:
                return result
        raise KeyError(candidate_index)

    @property
    def ordered_indices(self) -> list[int]:
        return [r.candidate_index for r in self.results]


class StructuredRanking(_RankingOutcomeBase):
    """Provider output parsed cleanly as a structured array."""

    kind: Literal["structured"] = "structured"


class HeuristicRanking(_RankingOutcomeBase):
    """Provider output recovered from free text; ``warnings`` lists what was defaulted."""

    kind: Literal["heuristic"] = "heuristic"
    warnings: list[str] = Field(default_factory=list)


RankingOutcome = Annotated[
    Union[StructuredRanking, HeuristicRanking], Field(discriminator="kind")
]
