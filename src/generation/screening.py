# src/generation/screening.py - v1
"""Extract numbered interview questions from screening-question output."""

from __future__ import annotations

import re

SCREENING_PLACEHOLDER = "Unable to generate screening questions"

_NUMBERED_LINE_RE = re.compile(r"^\s*\d+\s*[.)]\s*(.*)$")


def parse_screening_questions(text: str) -> list[str]:
    """Keep lines that start with ``1.`` / ``1)`` style numbering.

    Returns the question text without its numbering, in source order.
    Numbered lines with nothing after the number are skipped.
    """
    questions = []
    for line in (text or "").splitlines():
        match = _NUMBERED_LINE_RE.match(line)
        if not match:
            continue
        question = match.group(1).strip().strip("*_").strip()
        if question:
            questions.append(question)
    return questions
