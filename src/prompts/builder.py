# src/prompts/builder.py - v1
"""Map a task and its typed inputs to a GenerationRequest.

Usage:
    request = build_prompt(TaskType.FIT_SUMMARY, job=job, candidate=candidate)

No state and no I/O. Generation parameters are fixed constants unless
the caller overrides the seed (or passes explicit params), so identical
inputs always yield an identical request and cache key.
"""

from __future__ import annotations

from typing import Any, Callable

from talentgen.core.models import GenerationParams, GenerationRequest, TaskType
from talentgen.prompts import templates

DEFAULT_MODEL = "openai"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_SEED = 42
DEFAULT_TEXT_TTL_S = 3600

# task -> (system prompt, user prompt renderer, input names)
_TASK_TEMPLATES: dict[TaskType, tuple[str, Callable[..., str], tuple[str, ...]]] = {
    TaskType.FIT_SUMMARY: (
        templates.FIT_SUMMARY_SYSTEM,
        templates.fit_summary_prompt,
        ("job", "candidate"),
    ),
    TaskType.COVER_LETTER: (
        templates.COVER_LETTER_SYSTEM,
        templates.cover_letter_prompt,
        ("job", "candidate"),
    ),
    TaskType.RESUME_IMPROVEMENT: (
        templates.RESUME_IMPROVEMENT_SYSTEM,
        templates.resume_improvement_prompt,
        ("bullets",),
    ),
    TaskType.JOB_DESCRIPTION: (
        templates.JOB_DESCRIPTION_SYSTEM,
        templates.job_description_prompt,
        ("notes",),
    ),
    TaskType.CANDIDATE_RANKING: (
        templates.CANDIDATE_RANKING_SYSTEM,
        templates.candidate_ranking_prompt,
        ("job", "applications"),
    ),
    TaskType.SCREENING_QUESTIONS: (
        templates.SCREENING_QUESTIONS_SYSTEM,
        templates.screening_questions_prompt,
        ("job", "candidate"),
    ),
}


def build_generation_params(
    seed: int | None = None,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
) -> GenerationParams:
    """Fixed generation parameters with an optional seed override."""
    return GenerationParams(
        model=model,
        temperature=temperature,
        seed=DEFAULT_SEED if seed is None else seed,
    )


def task_inputs(task: TaskType) -> tuple[str, ...]:
    """Names of the keyword inputs a task's template expects."""
    return _TASK_TEMPLATES[TaskType(task)][2]


def build_prompt(
    task: TaskType | str,
    *,
    params: GenerationParams | None = None,
    seed: int | None = None,
    cache_ttl_s: int = DEFAULT_TEXT_TTL_S,
    fallback_message: str | None = None,
    **inputs: Any,
) -> GenerationRequest:
    """Render the prompt pair for a task.

    Args:
        task: Task identifier.
        params: Explicit generation parameters. Defaults to the fixed set.
        seed: Seed override, applied on top of ``params`` when both are given.
        cache_ttl_s: Primary cache TTL for the result.
        fallback_message: Message used when generation is unavailable.
        **inputs: Typed task inputs, named as listed by ``task_inputs()``.

    Returns:
        Immutable GenerationRequest.

    Raises:
        TypeError: If a required input is missing or an unknown one is given.
    """
    task = TaskType(task)
    system_prompt, render, expected = _TASK_TEMPLATES[task]

    missing = [name for name in expected if name not in inputs]
    unknown = sorted(set(inputs) - set(expected))
    if missing or unknown:
        raise TypeError(
            f"{task.value} expects inputs {list(expected)}; "
            f"missing={missing}, unknown={unknown}"
        )

    resolved = params or build_generation_params()
    if seed is not None:
        resolved = resolved.model_copy(update={"seed": seed})

    return GenerationRequest(
        task=task,
        system_prompt=system_prompt,
        user_prompt=render(*(inputs[name] for name in expected)),
        params=resolved,
        cache_ttl_s=cache_ttl_s,
        fallback_message=fallback_message,
    )
