"""
Candidate/job compatibility scoring.

Scores are integers in [0, 100] built from three terms:

- a fixed base awarded to every pooled candidate (the classification
  already matched when the pool was built),
- a skills term proportional to the share of required skills found on
  the resume (case-insensitive exact comparison),
- an experience term comparing resume years to the minimum implied by
  the job's experience level, with partial credit below it.

Everything here is pure: the result depends only on the job and resume
passed in.
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from src.data.models import Job, Resume
from src.utils.constants import (
    EXPERIENCE_YEARS_BY_LEVEL,
    MAX_MATCH_SCORE,
    MIN_MATCH_SCORE,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_SCORE = 50
DEFAULT_SKILLS_WEIGHT = 30
DEFAULT_EXPERIENCE_WEIGHT = 20


@dataclass
class ScoreBreakdown:
    """Terms that make up one match score."""

    base: float = 0.0
    skills_term: float = 0.0
    experience_term: float = 0.0
    matched_skills: list[str] = field(default_factory=list)
    required_years: Optional[int] = None
    score: int = 0

    @property
    def raw_total(self) -> float:
        """Sum of the terms before clamping and rounding."""
        return self.base + self.skills_term + self.experience_term


def parse_skills(raw: Any) -> list[str]:
    """
    Read a stored skills field into a list of strings.

    Accepts a list or a JSON-encoded list. Anything else, including
    malformed JSON, reads as an empty list. Non-string entries are dropped.
    """
    if raw is None:
        return []

    value = raw
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            return []
        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(f"Unparsable skills field: {raw!r}")
            return []

    if not isinstance(value, (list, tuple)):
        return []
    return [s for s in value if isinstance(s, str)]


def required_years_for_level(level: Optional[str]) -> int:
    """Minimum years of experience for a level label; unknown labels need 0."""
    if not level:
        return 0
    return EXPERIENCE_YEARS_BY_LEVEL.get(level.strip().lower(), 0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


class MatchScorer:
    """
    Computes match scores with configurable term weights.

    The defaults give 50 base points, up to 30 for skills and up to 20
    for experience.
    """

    def __init__(
        self,
        base_score: float = DEFAULT_BASE_SCORE,
        skills_weight: float = DEFAULT_SKILLS_WEIGHT,
        experience_weight: float = DEFAULT_EXPERIENCE_WEIGHT,
    ):
        self.base_score = base_score
        self.skills_weight = skills_weight
        self.experience_weight = experience_weight

    def skills_term(
        self, job_skills: list[str], resume_skills: list[str]
    ) -> tuple[float, list[str]]:
        """
        Score the overlap between required and resume skills.

        Returns:
            The term value and the resume skills that matched.
        """
        if not job_skills or not resume_skills:
            return 0.0, []

        wanted = {s.lower() for s in job_skills}
        # Repeated resume entries each count; min() caps the term
        matched = [s for s in resume_skills if s.lower() in wanted]

        ratio = len(matched) / max(len(job_skills), 1)
        return min(self.skills_weight, ratio * self.skills_weight), matched

    def experience_term(
        self, experience_level: Optional[str], experience_years: Optional[float]
    ) -> float:
        """Score resume experience against the job's level."""
        if experience_years is None or not experience_level:
            return 0.0

        required = required_years_for_level(experience_level)
        if experience_years >= required:
            return float(self.experience_weight)
        # Partial credit below the requirement
        return (experience_years / max(required, 1)) * self.experience_weight

    def score(self, job: Job, resume: Resume) -> ScoreBreakdown:
        """
        Score a resume against a job.

        The clamp to 100 applies to the summed terms; rounding happens once,
        on the clamped total.
        """
        job_skills = parse_skills(job.required_skills)
        resume_skills = parse_skills(resume.skills)

        skills_term, matched = self.skills_term(job_skills, resume_skills)
        experience_term = self.experience_term(job.experience_level, resume.experience_years)

        breakdown = ScoreBreakdown(
            base=float(self.base_score),
            skills_term=skills_term,
            experience_term=experience_term,
            matched_skills=matched,
            required_years=(
                required_years_for_level(job.experience_level)
                if job.experience_level
                else None
            ),
        )
        clamped = max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, breakdown.raw_total))
        breakdown.score = round_half_up(clamped)
        return breakdown


_default_scorer = MatchScorer()


def calculate_match_score(job: Job, resume: Resume) -> int:
    """Score a resume against a job with the default weights."""
    return _default_scorer.score(job, resume).score
