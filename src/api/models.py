# src/api/models.py - v1
"""API-level result models: GenerationResult, RankingReport, Shortlist."""

from __future__ import annotations

from pydantic import BaseModel, Field

from talentgen.core.models import RankingOutcome, RankingResult


class GenerationResult(BaseModel):
    """Text returned by a task.

    ``stale`` is set when the live path failed and a previously generated
    value was returned instead; ``warning`` then explains why.
    """

    text: str
    stale: bool = False
    warning: str | None = None


class RankingReport(BaseModel):
    """Parsed candidate ranking plus the staleness of its source text."""

    outcome: RankingOutcome
    stale: bool = False
    warning: str | None = None

    @property
    def results(self) -> list[RankingResult]:
        return self.outcome.results

    @property
    def is_degraded(self) -> bool:
        """True when the ranking was recovered heuristically."""
        return self.outcome.kind == "heuristic"


class ShortlistEntry(BaseModel):
    """One ranked candidate with tailored screening questions."""

    candidate_index: int = Field(ge=0)
    ranking: RankingResult
    questions: list[str] = Field(default_factory=list)
    stale: bool = False


class Shortlist(BaseModel):
    """Entries in authoritative ranking order."""

    report: RankingReport
    entries: list[ShortlistEntry] = Field(default_factory=list)
