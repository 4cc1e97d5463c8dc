# src/prompts/templates.py - v1
"""System and user prompt templates, one pair per task.

Every function is pure: identical inputs always render identical text,
which is what makes generation requests cacheable.
"""

from __future__ import annotations

from collections.abc import Sequence

from talentgen.core.models import Application, CandidateProfile, JobData

FIT_SUMMARY_SYSTEM = (
    "You are an expert career advisor analyzing job fit. Provide concise, "
    "actionable insights about how well a candidate matches a job posting. "
    "Focus on skills alignment, experience relevance, and growth potential. "
    "Be honest but encouraging."
)

COVER_LETTER_SYSTEM = (
    "You are a professional career coach helping candidates write compelling "
    "cover letters. Create personalized, authentic cover letters that highlight "
    "relevant experience and genuine interest. Keep it concise (3-4 paragraphs), "
    "professional, and avoid clichés."
)

RESUME_IMPROVEMENT_SYSTEM = (
    "You are an ATS optimization expert. Analyze resume bullets and suggest "
    "improvements for better ATS compatibility and impact. Focus on: action "
    "verbs, quantifiable results, relevant keywords, and clear formatting. Keep "
    "suggestions concise and actionable."
)

JOB_DESCRIPTION_SYSTEM = (
    "You are an expert recruiter creating inclusive, compelling job "
    "descriptions. Transform rough notes into well-structured JDs with clear "
    "sections: Overview, Responsibilities, Requirements, Nice-to-Haves, "
    "Benefits. Use inclusive language, avoid jargon, and focus on impact over "
    "credentials."
)

CANDIDATE_RANKING_SYSTEM = (
    "You are an expert recruiter evaluating candidates for job fit. Analyze "
    "each candidate's profile against job requirements and rank them by overall "
    "match quality. Consider skills alignment, experience relevance, and "
    "potential. Provide clear rationale for rankings."
)

SCREENING_QUESTIONS_SYSTEM = (
    "You are an expert interviewer creating targeted screening questions. "
    "Generate 3-5 specific questions that assess the candidate's fit for the "
    "role based on their background and the job requirements. Focus on "
    "practical scenarios and skill validation."
)


def _join(items: Sequence[str], sep: str = ", ") -> str:
    return sep.join(items)


def _experience_headlines(candidate: CandidateProfile) -> str:
    return _join([f"{e.title} at {e.company}" for e in candidate.experience], "; ")


def _education_lines(candidate: CandidateProfile) -> str:
    return _join(
        [f"{e.degree} in {e.field} from {e.institution}" for e in candidate.education],
        "; ",
    )


def fit_summary_prompt(job: JobData, candidate: CandidateProfile) -> str:
    return f"""Analyze the fit between this candidate and job:

JOB:
Title: {job.title}
Level: {job.level}
Requirements: {_join(job.requirements)}
Description: {job.description}

CANDIDATE:
Skills: {_join(candidate.skills)}
Experience: {_experience_headlines(candidate)}

Provide a 2-3 sentence summary of the match quality, highlighting strengths and any gaps."""


def cover_letter_prompt(job: JobData, candidate: CandidateProfile) -> str:
    experience = _join(
        [f"{e.title} at {e.company}: {e.description}" for e in candidate.experience],
        "\n",
    )
    return f"""Write a cover letter for this application:

JOB:
Title: {job.title}
Company: [Company Name]
Level: {job.level}
Requirements: {_join(job.requirements)}

CANDIDATE BACKGROUND:
Skills: {_join(candidate.skills)}
Experience:
{experience}

Write a professional cover letter (3-4 paragraphs) that:
1. Opens with enthusiasm for the specific role
2. Highlights 2-3 most relevant experiences
3. Explains why they're a great fit
4. Closes with a call to action"""


def resume_improvement_prompt(bullets: Sequence[str]) -> str:
    numbered = _join([f"{i}. {b}" for i, b in enumerate(bullets, start=1)], "\n")
    return f"""Improve these resume bullets for ATS compatibility:

{numbered}

For each bullet, provide:
1. The improved version
2. One-line explanation of the change

Format as:
BULLET 1: [improved text]
Why: [explanation]"""


def job_description_prompt(notes: str) -> str:
    return f"""Create a structured job description from these notes:

{notes}

Format the output with these sections:
## Overview
[2-3 sentences about the role and team]

## Responsibilities
[5-7 bullet points of key responsibilities]

## Requirements
[Must-have qualifications and skills]

## Nice to Have
[Preferred but not required qualifications]

## Benefits
[Compensation range if mentioned, benefits, perks]

Use inclusive language and avoid gendered terms or unnecessary degree requirements."""


def candidate_ranking_prompt(job: JobData, applications: Sequence[Application]) -> str:
    blocks = []
    for number, app in enumerate(applications, start=1):
        profile = app.candidate_profile
        blocks.append(
            f"CANDIDATE {number}:\n"
            f"Skills: {_join(profile.skills)}\n"
            f"Experience: {_experience_headlines(profile)}\n"
            f"Education: {_education_lines(profile)}\n"
        )
    candidates = "\n".join(blocks)
    return f"""Rank these candidates for this job:

JOB:
Title: {job.title}
Level: {job.level}
Requirements: {_join(job.requirements)}

CANDIDATES:
{candidates}

For each candidate, provide:
1. Fit score (0-100)
2. Brief rationale (2-3 sentences)
3. Top strength
4. Potential concern

Format as:
CANDIDATE 1: Score [X/100]
Rationale: [explanation]
Strength: [key strength]
Concern: [if any]"""


def screening_questions_prompt(job: JobData, candidate: CandidateProfile) -> str:
    recent_role = candidate.experience[0].title if candidate.experience else "N/A"
    return f"""Generate screening questions for this candidate-job match:

JOB:
Title: {job.title}
Level: {job.level}
Key Requirements: {_join(job.requirements[:5])}

CANDIDATE:
Skills: {_join(candidate.skills)}
Recent Role: {recent_role}

Create 3-5 specific screening questions that:
1. Validate key technical skills
2. Assess relevant experience
3. Explore problem-solving approach
4. Gauge cultural fit

Format as numbered list with brief context for each question."""
