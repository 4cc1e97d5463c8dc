# tests/unit/generation/test_unit_ranking_parser.py - v1
"""Tests for generation/ranking_parser.py and generation/screening.py."""

from __future__ import annotations

import json

import pytest
from pydantic import TypeAdapter

from talentgen.core.models import HeuristicRanking, RankingOutcome, StructuredRanking
from talentgen.generation.ranking_parser import (
    DEFAULT_CONCERN,
    DEFAULT_RATIONALE,
    DEFAULT_SCORE,
    DEFAULT_STRENGTH,
    parse_ranking,
)
from talentgen.generation.screening import parse_screening_questions

FREE_TEXT_TWO = """Here is my assessment.

CANDIDATE 1: Score [72/100]
Rationale: Solid Python background but limited cloud exposure.
Strength: API design
Concern: No Kubernetes experience

CANDIDATE 2: Score [88/100]
Rationale: Strong match across the stack.
It also mentions that candidate 1 is more junior.
Strength: AWS and Go
Concern: None
"""


def _entries(*scores, with_index=True):
    return [
        {
            **({"candidateIndex": i} if with_index else {}),
            "score": s,
            "rationale": f"r{i}",
            "strength": f"s{i}",
            "concern": f"c{i}",
        }
        for i, s in enumerate(scores)
    ]


class TestStructured:
    def test_three_entries_clamped_and_indexed(self):
        raw = json.dumps(_entries(140, -5, 63.6))
        outcome = parse_ranking(raw, 3)
        assert isinstance(outcome, StructuredRanking)
        assert len(outcome.results) == 3
        assert outcome.result_for(0).score == 100
        assert outcome.result_for(1).score == 0
        assert outcome.result_for(2).score == 64
        assert outcome.result_for(2).rationale == "r2"

    def test_declared_index_preserved(self):
        data = _entries(10, 20, 30)
        for entry, idx in zip(data, (2, 0, 1)):
            entry["candidateIndex"] = idx
        outcome = parse_ranking(json.dumps(data), 3)
        assert outcome.result_for(2).score == 10
        assert outcome.result_for(0).score == 20

    def test_missing_index_uses_position(self):
        outcome = parse_ranking(json.dumps(_entries(10, 20, with_index=False)), 2)
        assert outcome.result_for(0).score == 10
        assert outcome.result_for(1).score == 20

    def test_duplicate_index_uses_position(self):
        data = _entries(10, 20)
        data[1]["candidateIndex"] = 0
        outcome = parse_ranking(json.dumps(data), 2)
        assert sorted(outcome.by_candidate_index()) == [0, 1]
        assert outcome.result_for(1).score == 20

    def test_mixed_declared_and_missing_indices(self):
        raw = json.dumps([
            {"candidateIndex": 2, "score": 90, "rationale": "best"},
            {"score": 10},
            {"candidateIndex": 0, "score": 40, "rationale": "middle"},
        ])
        outcome = parse_ranking(raw, 3)
        assert isinstance(outcome, StructuredRanking)
        assert outcome.result_for(2).score == 90
        assert outcome.result_for(2).rationale == "best"
        assert outcome.result_for(0).score == 40
        assert outcome.result_for(1).score == 10
        assert outcome.ordered_indices == [2, 0, 1]

    def test_missing_index_takes_free_slot(self):
        raw = json.dumps([
            {"score": 70},
            {"candidateIndex": 0, "score": 20},
        ])
        outcome = parse_ranking(raw, 2)
        assert outcome.result_for(0).score == 20
        assert outcome.result_for(1).score == 70

    def test_out_of_range_index_keeps_valid_ones(self):
        raw = json.dumps([
            {"candidateIndex": 1, "score": 80},
            {"candidateIndex": 7, "score": 30},
        ])
        outcome = parse_ranking(raw, 2)
        assert outcome.result_for(1).score == 80
        assert outcome.result_for(0).score == 30

    def test_one_based_numbering_shifted(self):
        raw = json.dumps([
            {"candidateIndex": 3, "score": 95},
            {"candidateIndex": 1, "score": 60},
            {"candidateIndex": 2, "score": 70},
        ])
        outcome = parse_ranking(raw, 3)
        assert outcome.result_for(2).score == 95
        assert outcome.result_for(0).score == 60
        assert outcome.result_for(1).score == 70

    def test_snake_case_index_and_string_score(self):
        raw = json.dumps([
            {"candidate_index": 1, "score": "81/100"},
            {"candidate_index": 0, "score": "n/a"},
        ])
        outcome = parse_ranking(raw, 2)
        assert outcome.result_for(1).score == 81
        assert outcome.result_for(0).score == DEFAULT_SCORE

    def test_missing_text_fields_default(self):
        outcome = parse_ranking(json.dumps([{"score": 50, "rationale": "  "}]), 1)
        result = outcome.result_for(0)
        assert result.rationale == DEFAULT_RATIONALE
        assert result.strength == DEFAULT_STRENGTH
        assert result.concern == DEFAULT_CONCERN

    def test_fenced_json(self):
        raw = "Sure!\n```json\n" + json.dumps(_entries(40, 92)) + "\n```\nThanks."
        assert isinstance(parse_ranking(raw, 2), StructuredRanking)

    def test_wrapper_object(self):
        raw = json.dumps({"rankings": _entries(40, 92)})
        assert isinstance(parse_ranking(raw, 2), StructuredRanking)

    def test_wrong_cardinality_degrades(self):
        outcome = parse_ranking(json.dumps(_entries(40, 92)), 3)
        assert isinstance(outcome, HeuristicRanking)
        assert len(outcome.results) == 3
        assert outcome.result_for(0).score == 40
        assert outcome.result_for(2).score == DEFAULT_SCORE
        assert any("Structured output had 2 entries" in w for w in outcome.warnings)

    def test_presentation_order(self):
        outcome = parse_ranking(json.dumps(_entries(40, 92, 75)), 3)
        assert outcome.ordered_indices == [1, 2, 0]
        assert outcome.result_for(0).score == 40
        assert outcome.result_for(1).score == 92
        assert outcome.result_for(2).score == 75

    def test_ties_broken_by_index(self):
        outcome = parse_ranking(json.dumps(_entries(70, 80, 70)), 3)
        assert outcome.ordered_indices == [1, 0, 2]


class TestHeuristic:
    def test_two_blocks_three_candidates(self):
        outcome = parse_ranking(FREE_TEXT_TWO, 3)
        assert isinstance(outcome, HeuristicRanking)
        assert len(outcome.results) == 3
        first = outcome.result_for(0)
        assert first.score == 72
        assert first.rationale == "Solid Python background but limited cloud exposure."
        assert first.strength == "API design"
        assert first.concern == "No Kubernetes experience"

        second = outcome.result_for(1)
        assert second.score == 88
        assert "candidate 1 is more junior" in second.rationale

        placeholder = outcome.result_for(2)
        assert placeholder.score == DEFAULT_SCORE
        assert placeholder.rationale == DEFAULT_RATIONALE
        assert placeholder.strength == DEFAULT_STRENGTH
        assert placeholder.concern == DEFAULT_CONCERN
        assert any("Candidate 3" in w for w in outcome.warnings)
        assert outcome.ordered_indices == [1, 0, 2]

    def test_preamble_ignored(self):
        outcome = parse_ranking(FREE_TEXT_TWO, 2)
        assert outcome.result_for(0).score == 72

    def test_missing_score_defaults_with_warning(self):
        raw = "CANDIDATE 1:\nRationale: Good.\nStrength: x\nConcern: y"
        outcome = parse_ranking(raw, 1)
        assert outcome.result_for(0).score == DEFAULT_SCORE
        assert any("no score" in w for w in outcome.warnings)

    def test_markdown_and_case_variants(self):
        raw = (
            "**Candidate 1:** Score: 91/100\n**Rationale:** Excellent.\n"
            "**Strength:** Leadership\n**Concern:** Cost\n"
            "candidate 2 - Score 35/100\nRationale: Weak fit."
        )
        outcome = parse_ranking(raw, 2)
        assert outcome.result_for(0).score == 91
        assert outcome.result_for(0).rationale == "Excellent."
        assert outcome.result_for(0).strength == "Leadership"
        assert outcome.result_for(1).score == 35
        assert outcome.result_for(1).strength == DEFAULT_STRENGTH

    def test_extra_blocks_truncated(self):
        raw = "CANDIDATE 1: Score [10/100]\nCANDIDATE 2: Score [20/100]\nCANDIDATE 3: Score [30/100]"
        outcome = parse_ranking(raw, 2)
        assert len(outcome.results) == 2
        assert any("extra sections ignored" in w for w in outcome.warnings)

    @pytest.mark.parametrize("raw", ["", "   ", "The model refused.", "[not json"])
    def test_garbage_yields_placeholders(self, raw):
        outcome = parse_ranking(raw, 2)
        assert isinstance(outcome, HeuristicRanking)
        assert [r.score for r in outcome.results] == [DEFAULT_SCORE, DEFAULT_SCORE]
        assert outcome.ordered_indices == [0, 1]

    def test_zero_candidates(self):
        outcome = parse_ranking("", 0)
        assert outcome.results == []


class TestOutcomeSerialization:
    def test_discriminated_union(self):
        adapter = TypeAdapter(RankingOutcome)
        outcome = parse_ranking(FREE_TEXT_TWO, 2)
        restored = adapter.validate_python(outcome.model_dump())
        assert isinstance(restored, HeuristicRanking)
        assert restored.warnings == outcome.warnings


class TestScreeningQuestions:
    def test_numbered_lines_only(self):
        text = (
            "Here are some questions:\n"
            "1. How have you used PostgreSQL at scale?\n"
            "   Context: validates database depth\n"
            "2) Describe an outage you handled.\n"
            "3. **What draws you to this team?**\n"
            "4.\n"
        )
        assert parse_screening_questions(text) == [
            "How have you used PostgreSQL at scale?",
            "Describe an outage you handled.",
            "What draws you to this team?",
        ]

    def test_no_numbered_lines(self):
        assert parse_screening_questions("No questions today.") == []
        assert parse_screening_questions("") == []
