# src/generation/ranking_parser.py - v1
"""Turn raw candidate-ranking output into typed, sorted RankingResults.

Never raises. Structured output (a JSON array, bare, fenced or wrapped in
an object) with the expected cardinality yields a StructuredRanking.
Anything else is recovered heuristically from "CANDIDATE n" sections and
yields a HeuristicRanking whose warnings list every default applied.
Either way there is exactly one result per input candidate, ordered by
score descending then candidate index ascending.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from talentgen.core.models import HeuristicRanking, RankingResult, StructuredRanking

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50
DEFAULT_RATIONALE = "No rationale provided"
DEFAULT_STRENGTH = "N/A"
DEFAULT_CONCERN = "None identified"

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_WRAPPER_KEYS = ("rankings", "candidates", "results")
_INDEX_KEYS = ("candidateIndex", "candidate_index")

# Marker must open a line so "better than candidate 2" inside prose is not a split point.
_MARKER_RE = re.compile(
    r"^[\s#*_>\-]*CANDIDATE\s+\d+\b[\s*_]*[:.)\-]?", re.IGNORECASE | re.MULTILINE
)
_SCORE_RE = re.compile(
    r"\bScore\b[\s*_]*[:=\-]?\s*\[?\s*(\d+(?:\.\d+)?)\s*(?:/\s*100)?", re.IGNORECASE
)
_RATIONALE_RE = re.compile(
    r"\bRationale\b[\s*_]*[:\-]\s*(.*?)(?=\b(?:Strengths?|Concerns?)\b[\s*_]*[:\-]|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_STRENGTH_RE = re.compile(
    r"\bStrengths?\b[\s*_]*[:\-]\s*(.*?)(?=\bConcerns?\b[\s*_]*[:\-]|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_CONCERN_RE = re.compile(r"\bConcerns?\b[\s*_]*[:\-]\s*(.*)\Z", re.IGNORECASE | re.DOTALL)
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def parse_ranking(raw_text: str, candidate_count: int) -> StructuredRanking | HeuristicRanking:
    """Parse provider output for ``candidate_count`` candidates.

    Args:
        raw_text: Raw text returned by the provider (may be empty).
        candidate_count: Number of candidates in the ranking request.

    Returns:
        StructuredRanking on a clean structured parse, else HeuristicRanking.
    """
    count = max(0, candidate_count)
    text = raw_text or ""
    warnings: list[str] = []

    entries = _load_structured(text)
    if entries is not None:
        if len(entries) == count and all(isinstance(e, dict) for e in entries):
            return StructuredRanking(results=sort_results(_from_entries(entries, count)))
        warnings.append(
            f"Structured output had {len(entries)} entries for {count} candidates; "
            "falling back to text parsing"
        )

    blocks = _split_blocks(text)
    dict_entries = [e for e in entries or [] if isinstance(e, dict)]
    if blocks:
        results = _from_blocks(blocks, count, warnings)
    elif dict_entries:
        results = _from_entries(dict_entries[:count], count)
        warnings.append(f"Recovered {len(results)} entries from structured output")
    else:
        results = []
        if count:
            warnings.append("No candidate sections found in provider output")

    results = _pad_missing(results, count, warnings)
    if warnings:
        logger.warning("Heuristic ranking parse: %s", "; ".join(warnings))
    return HeuristicRanking(results=sort_results(results), warnings=warnings)


def sort_results(results: list[RankingResult]) -> list[RankingResult]:
    """Presentation order: score descending, ties by candidate index ascending."""
    return sorted(results, key=lambda r: (-r.score, r.candidate_index))


# --- structured path ---


def _load_structured(text: str) -> list[Any] | None:
    stripped = text.strip()
    if not stripped:
        return None

    attempts = [stripped]
    fenced = _FENCE_RE.search(stripped)
    if fenced:
        attempts.append(fenced.group(1).strip())
    start, end = stripped.find("["), stripped.rfind("]")
    if 0 <= start < end:
        attempts.append(stripped[start : end + 1])

    for candidate in attempts:
        try:
            data = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(data, dict):
            for key in _WRAPPER_KEYS:
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
        if isinstance(data, list):
            return data
    return None


def _from_entries(entries: list[dict[str, Any]], count: int) -> list[RankingResult]:
    indices = _assign_indices([_declared_index(e) for e in entries], count)
    results = []
    for entry, index in zip(entries, indices):
        score = _coerce_score(entry.get("score"))
        results.append(
            RankingResult(
                candidate_index=index,  # type: ignore[arg-type]
                score=DEFAULT_SCORE if score is None else score,
                rationale=_text_field(entry.get("rationale"), DEFAULT_RATIONALE),
                strength=_text_field(entry.get("strength"), DEFAULT_STRENGTH),
                concern=_text_field(entry.get("concern"), DEFAULT_CONCERN),
            )
        )
    return results


def _assign_indices(declared: list[int | None], count: int) -> list[int]:
    """Resolve one candidate index per entry.

    Valid declared indices are kept (first claim wins). Entries without a
    usable one take the lowest free index at or after their own position,
    wrapping to the lowest free index overall. A complete 1..count set is
    read as the prompt's 1-based candidate numbering.
    """
    if count and sorted(i for i in declared if i is not None) == list(range(1, count + 1)):
        declared = [i - 1 for i in declared]  # type: ignore[operator]

    taken: set[int] = set()
    resolved: list[int | None] = []
    for index in declared:
        if index is not None and 0 <= index < count and index not in taken:
            taken.add(index)
            resolved.append(index)
        else:
            resolved.append(None)

    free = [i for i in range(count) if i not in taken]
    for position, index in enumerate(resolved):
        if index is not None:
            continue
        pick = next((i for i in free if i >= position), free[0])
        free.remove(pick)
        resolved[position] = pick
    return resolved  # type: ignore[return-value]


def _declared_index(entry: dict[str, Any]) -> int | None:
    for key in _INDEX_KEYS:
        value = entry.get(key)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
    return None


def _coerce_score(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_RE.search(str(value))
        if not match:
            return None
        number = float(match.group(0))
    if number != number:  # NaN
        return None
    return min(100, max(0, int(round(number))))


def _text_field(value: Any, default: str) -> str:
    if value is None:
        return default
    cleaned = _clean(str(value))
    return cleaned or default


# --- heuristic path ---


def _split_blocks(text: str) -> list[str]:
    markers = list(_MARKER_RE.finditer(text))
    blocks = []
    for i, match in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
        blocks.append(text[match.end() : end])
    return blocks


def _from_blocks(blocks: list[str], count: int, warnings: list[str]) -> list[RankingResult]:
    if len(blocks) > count:
        warnings.append(f"Found {len(blocks)} candidate sections for {count} candidates; extra sections ignored")
        blocks = blocks[:count]

    results = []
    for index, block in enumerate(blocks):
        label = f"Candidate {index + 1}"
        score = _extract_score(block)
        if score is None:
            warnings.append(f"{label}: no score found, defaulted to {DEFAULT_SCORE}")
            score = DEFAULT_SCORE
        rationale = _extract(_RATIONALE_RE, block)
        if rationale is None:
            warnings.append(f"{label}: no rationale found")
        results.append(
            RankingResult(
                candidate_index=index,
                score=score,
                rationale=rationale or DEFAULT_RATIONALE,
                strength=_extract(_STRENGTH_RE, block) or DEFAULT_STRENGTH,
                concern=_extract(_CONCERN_RE, block) or DEFAULT_CONCERN,
            )
        )
    return results


def _extract_score(block: str) -> int | None:
    match = _SCORE_RE.search(block)
    if not match:
        return None
    return _coerce_score(match.group(1))


def _extract(pattern: re.Pattern[str], block: str) -> str | None:
    match = pattern.search(block)
    if not match:
        return None
    return _clean(match.group(1)) or None


def _clean(value: str) -> str:
    value = " ".join(value.split())
    value = value.strip("*_ ")
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1].strip()
    return value


def _pad_missing(results: list[RankingResult], count: int, warnings: list[str]) -> list[RankingResult]:
    present = {r.candidate_index for r in results}
    padded = list(results)
    for index in range(count):
        if index not in present:
            warnings.append(f"Candidate {index + 1}: missing from provider output, placeholder used")
            padded.append(
                RankingResult(
                    candidate_index=index,
                    score=DEFAULT_SCORE,
                    rationale=DEFAULT_RATIONALE,
                    strength=DEFAULT_STRENGTH,
                    concern=DEFAULT_CONCERN,
                )
            )
    return padded
