# src/api/facade.py - v1
"""Public API facade: single entry point for generation tasks.

Usage:
    from talentgen.api.facade import create_service

    service = create_service()
    await service.check_rate_limit(ip="203.0.113.7", user_id="u-42")
    result = await service.fit_summary(job, candidate)
    await service.aclose()

Inputs may be the typed models from ``talentgen.core.models`` or plain
mappings with camelCase or snake_case keys. Malformed inputs raise
ValidationError before any generation attempt.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from talentgen.api.models import GenerationResult, RankingReport, Shortlist, ShortlistEntry
from talentgen.cache.base_cache_store import BaseCacheStore
from talentgen.cache.cache_factory import create_cache_store
from talentgen.cache.result_cache import ResultCache
from talentgen.config.settings import Settings, load_settings
from talentgen.core.errors import AppError, GenerationUnavailable, ValidationError
from talentgen.core.models import (
    Application,
    CandidateProfile,
    GenerationParams,
    ImageOptions,
    JobData,
    TaskType,
)
from talentgen.generation.caller import ResilientCaller
from talentgen.generation.image import ImageGenerator
from talentgen.generation.ranking_parser import parse_ranking
from talentgen.generation.screening import SCREENING_PLACEHOLDER, parse_screening_questions
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.circuit_breaker import CircuitBreaker
from talentgen.llm.client_factory import create_text_provider
from talentgen.llm.retry import RetryPolicy, SleepFunc
from talentgen.logging.context import set_request_context, set_task_context
from talentgen.prompts.builder import DEFAULT_TEXT_TTL_S, build_prompt
from talentgen.ratelimit.limiter import RequestRateLimiter
from talentgen.ratelimit.models import RateLimitDecision
from talentgen.ratelimit.store_factory import create_request_limiter

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class GenerationService:
    """Typed task operations over one shared caller, breaker and cache."""

    def __init__(
        self,
        caller: ResilientCaller,
        image_generator: ImageGenerator,
        rate_limiter: RequestRateLimiter | None = None,
        params: GenerationParams | None = None,
        text_ttl_s: int = DEFAULT_TEXT_TTL_S,
        image_seed: int = 42,
    ) -> None:
        self._caller = caller
        self._images = image_generator
        self._rate_limiter = rate_limiter
        self._params = params or GenerationParams()
        self._text_ttl_s = text_ttl_s
        self._image_seed = image_seed

    @property
    def caller(self) -> ResilientCaller:
        return self._caller

    @property
    def breaker(self) -> CircuitBreaker:
        return self._caller.breaker

    # --- request boundary ---

    async def check_rate_limit(
        self, ip: str | None, user_id: str | None = None
    ) -> RateLimitDecision | None:
        """Count one inbound request against the address and user limiters.

        Returns:
            Decision metadata for response headers, or None when no limiter
            is configured.

        Raises:
            RateLimitExceeded: If either limiter rejects the request.
        """
        set_request_context(caller=f"user:{user_id}" if user_id else ip)
        if self._rate_limiter is None:
            return None
        return await self._rate_limiter.enforce(ip, user_id)

    # --- text tasks ---

    async def fit_summary(
        self, job: Any, candidate: Any, *, seed: int | None = None
    ) -> GenerationResult:
        return await self._run(
            TaskType.FIT_SUMMARY,
            seed,
            job=_coerce(JobData, job, "job"),
            candidate=_coerce(CandidateProfile, candidate, "candidate"),
        )

    async def cover_letter(
        self, job: Any, candidate: Any, *, seed: int | None = None
    ) -> GenerationResult:
        return await self._run(
            TaskType.COVER_LETTER,
            seed,
            job=_coerce(JobData, job, "job"),
            candidate=_coerce(CandidateProfile, candidate, "candidate"),
        )

    async def improve_resume_bullets(
        self, bullets: Any, *, seed: int | None = None
    ) -> GenerationResult:
        return await self._run(
            TaskType.RESUME_IMPROVEMENT, seed, bullets=_require_bullets(bullets)
        )

    async def generate_job_description(
        self, notes: Any, *, seed: int | None = None
    ) -> GenerationResult:
        return await self._run(
            TaskType.JOB_DESCRIPTION, seed, notes=_require_text(notes, "notes")
        )

    async def screening_questions(
        self, job: Any, candidate: Any, *, seed: int | None = None
    ) -> GenerationResult:
        return await self._run(
            TaskType.SCREENING_QUESTIONS,
            seed,
            job=_coerce(JobData, job, "job"),
            candidate=_coerce(CandidateProfile, candidate, "candidate"),
        )

    async def rank_candidates(
        self, job: Any, applications: Any, *, seed: int | None = None
    ) -> RankingReport:
        """Rank applications for a job.

        The outcome always holds exactly one result per application; a
        degraded parse is reported as a HeuristicRanking, never an error.
        """
        job_data = _coerce(JobData, job, "job")
        apps = _coerce_applications(applications)
        result = await self._run(
            TaskType.CANDIDATE_RANKING, seed, job=job_data, applications=apps
        )
        outcome = parse_ranking(result.text, len(apps))
        return RankingReport(outcome=outcome, stale=result.stale, warning=result.warning)

    async def run_task(
        self, task: TaskType | str, *, seed: int | None = None, **inputs: Any
    ) -> GenerationResult:
        """Dispatch a task by name with raw inputs (used by the CLI).

        Candidate ranking returns the provider text unparsed here; use
        rank_candidates() for the typed outcome.
        """
        try:
            task = TaskType(task)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown task {task!r}", details=[t.value for t in TaskType]
            ) from exc

        if task is TaskType.FIT_SUMMARY:
            return await self.fit_summary(inputs.get("job"), inputs.get("candidate"), seed=seed)
        if task is TaskType.COVER_LETTER:
            return await self.cover_letter(inputs.get("job"), inputs.get("candidate"), seed=seed)
        if task is TaskType.RESUME_IMPROVEMENT:
            return await self.improve_resume_bullets(inputs.get("bullets"), seed=seed)
        if task is TaskType.JOB_DESCRIPTION:
            return await self.generate_job_description(inputs.get("notes"), seed=seed)
        if task is TaskType.SCREENING_QUESTIONS:
            return await self.screening_questions(
                inputs.get("job"), inputs.get("candidate"), seed=seed
            )
        return await self._run(
            task,
            seed,
            job=_coerce(JobData, inputs.get("job"), "job"),
            applications=_coerce_applications(inputs.get("applications")),
        )

    # --- workflows ---

    async def shortlist(
        self, job: Any, applications: Any, *, seed: int | None = None
    ) -> Shortlist:
        """Rank candidates, then draft screening questions for each one.

        Question generation runs concurrently per candidate. A candidate
        whose questions cannot be produced gets a single placeholder
        question; the rest of the shortlist is unaffected.
        """
        job_data = _coerce(JobData, job, "job")
        apps = _coerce_applications(applications)
        report = await self.rank_candidates(job_data, apps, seed=seed)

        async def questions_for(index: int) -> tuple[list[str], bool]:
            try:
                result = await self.screening_questions(
                    job_data, apps[index].candidate_profile, seed=seed
                )
            except AppError as exc:
                logger.warning(
                    "Screening questions unavailable for candidate %d: %s",
                    index, exc.message,
                )
                return [SCREENING_PLACEHOLDER], False
            questions = parse_screening_questions(result.text)
            return questions or [SCREENING_PLACEHOLDER], result.stale

        ordered = report.results
        drafted = await asyncio.gather(*(questions_for(r.candidate_index) for r in ordered))

        entries = [
            ShortlistEntry(
                candidate_index=ranking.candidate_index,
                ranking=ranking,
                questions=questions,
                stale=stale,
            )
            for ranking, (questions, stale) in zip(ordered, drafted)
        ]
        return Shortlist(report=report, entries=entries)

    # --- images ---

    async def generate_image(
        self,
        prompt: Any,
        *,
        width: int | None = None,
        height: int | None = None,
        seed: int | None = None,
    ) -> str:
        """Image URL for a prompt; a placeholder when generation cannot proceed."""
        text = _require_text(prompt, "prompt")
        try:
            options = ImageOptions(
                width=1200 if width is None else width,
                height=630 if height is None else height,
                seed=self._image_seed if seed is None else seed,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid image options", details=exc.errors(include_url=False)
            ) from exc
        return await self._images.generate_image(text, options)

    # --- lifecycle ---

    async def aclose(self) -> None:
        """Release provider, cache and rate-limit store resources."""
        await self._caller.provider.aclose()
        await self._caller.cache.close()
        if self._rate_limiter is not None:
            await self._rate_limiter.close()

    async def __aenter__(self) -> GenerationService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _run(
        self, task: TaskType, seed: int | None, **inputs: Any
    ) -> GenerationResult:
        request = build_prompt(
            task,
            params=self._params,
            seed=seed,
            cache_ttl_s=self._text_ttl_s,
            **inputs,
        )
        set_task_context(task.value)
        try:
            text = await self._caller.generate(request)
        except GenerationUnavailable as exc:
            if not exc.has_fallback:
                raise
            return GenerationResult(text=exc.fallback, stale=True, warning=exc.message)
        finally:
            set_task_context(None)
        return GenerationResult(text=text)


def create_service(
    settings: Settings | None = None,
    provider: BaseTextProvider | None = None,
    cache_store: BaseCacheStore | None = None,
    rate_limiter: RequestRateLimiter | None = None,
    breaker: CircuitBreaker | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> GenerationService:
    """Wire a GenerationService from settings.

    Any component passed explicitly replaces the one built from settings.

    Raises:
        ConfigurationError: If settings are internally inconsistent.
    """
    settings = settings if settings is not None else load_settings()
    if provider is None:
        provider = create_text_provider(settings.llm_provider, settings)
    store = cache_store if cache_store is not None else create_cache_store(settings)
    if breaker is None:
        breaker = CircuitBreaker(
            failure_threshold=settings.breaker_failure_threshold,
            cooldown_s=settings.breaker_cooldown_s,
        )
    if rate_limiter is None:
        rate_limiter = create_request_limiter(settings)

    caller = ResilientCaller(
        provider=provider,
        cache=ResultCache(store),
        breaker=breaker,
        retry_policy=RetryPolicy(
            max_attempts=settings.retry_max_attempts,
            base_delay_s=settings.retry_base_delay_s,
            backoff_factor=settings.retry_backoff_factor,
        ),
        timeout_s=settings.request_timeout_s or None,
        unavailable_message=settings.unavailable_message,
        sleep=sleep,
    )
    images = ImageGenerator(
        store,
        base_url=settings.pollinations_image_url,
        ttl_s=settings.image_cache_ttl_s,
    )
    params = GenerationParams(
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        seed=settings.llm_seed,
    )

    logger.info(
        "Generation service ready: provider=%s, cache=%s, rate_limit=%s",
        provider.provider_name, settings.cache_backend, settings.rate_limit_backend,
    )
    return GenerationService(
        caller=caller,
        image_generator=images,
        rate_limiter=rate_limiter,
        params=params,
        text_ttl_s=settings.text_cache_ttl_s,
        image_seed=settings.llm_seed,
    )


# --- input coercion ---


def _coerce(model_cls: type[_M], value: Any, name: str) -> _M:
    if isinstance(value, model_cls):
        return value
    if value is None:
        raise ValidationError(f"{name} is required")
    if not isinstance(value, Mapping):
        raise ValidationError(f"{name} must be an object")
    try:
        return model_cls.model_validate(dict(value))
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid {name}", details=exc.errors(include_url=False)
        ) from exc


def _coerce_applications(value: Any) -> list[Application]:
    if value is None or isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise ValidationError("applications must be a list")
    if not value:
        raise ValidationError("At least one application is required for ranking")
    return [_coerce(Application, item, f"applications[{i}]") for i, item in enumerate(value)]


def _require_bullets(value: Any) -> list[str]:
    if value is None or isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ValidationError("bullets must be a list of strings")
    if not value:
        raise ValidationError("bullets must not be empty")
    if any(not isinstance(b, str) or not b.strip() for b in value):
        raise ValidationError("bullets must be non-blank strings")
    return list(value)


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-blank string")
    return value
