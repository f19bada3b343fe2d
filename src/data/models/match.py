"""
Match data models for Talent-Match.

Defines the persisted job/candidate compatibility record and the
result payloads returned by an auto-match run.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.utils.constants import (
    EDUCATION_MATCH_PLACEHOLDER,
    MAX_MATCH_SCORE,
    MIN_MATCH_SCORE,
    NO_CLASSIFICATION_MESSAGE,
    SKILLS_MATCH_PLACEHOLDER,
    MatchScoreLevel,
)

from .base import BaseDocument, EmbeddedModel, PyObjectId, utcnow


class MatchStatus(str, Enum):
    """Status of a match in the review pipeline."""

    PENDING_REVIEW = "pending_review"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"


class Match(BaseDocument):
    """
    Compatibility record between one job and one candidate.

    Unique per (job_id, candidate_id). Re-matching rewrites ``match_score``
    and ``matched_at`` in place; the auxiliary fields keep the values
    written when the record was first inserted.
    """

    job_id: PyObjectId
    candidate_id: PyObjectId
    resume_id: Optional[PyObjectId] = None

    match_score: int = Field(0, ge=MIN_MATCH_SCORE, le=MAX_MATCH_SCORE)

    # Auxiliary components carried through from the first insert
    skills_match: int = SKILLS_MATCH_PLACEHOLDER
    experience_match: int = 0
    education_match: int = EDUCATION_MATCH_PLACEHOLDER

    status: MatchStatus = MatchStatus.PENDING_REVIEW
    matched_at: datetime = Field(default_factory=utcnow)

    @property
    def score_level(self) -> MatchScoreLevel:
        return MatchScoreLevel.from_score(self.match_score)

    class Settings:
        """MongoDB collection settings."""

        name = "job_matches"
        indexes = [
            [("job_id", 1), ("candidate_id", 1)],  # Compound unique index
            "candidate_id",
            "match_score",
            "matched_at",
        ]


class CandidateMatchResult(EmbeddedModel):
    """One scored candidate in an auto-match response."""

    candidate_id: PyObjectId
    match_score: int = Field(..., ge=MIN_MATCH_SCORE, le=MAX_MATCH_SCORE)


class AutoMatchResult(BaseModel):
    """
    Outcome of one auto-match run for a job.

    ``matches`` is None when there was nothing to do (no job or no
    classification), and a possibly empty list otherwise.
    """

    matched: int = 0
    matches: Optional[list[CandidateMatchResult]] = None
    message: str
    cancelled: Optional[bool] = None

    @classmethod
    def no_classification(cls) -> "AutoMatchResult":
        return cls(matched=0, message=NO_CLASSIFICATION_MESSAGE)

    @classmethod
    def completed(
        cls,
        matches: list[CandidateMatchResult],
        cancelled: bool = False,
    ) -> "AutoMatchResult":
        """Build the DONE result from the successfully persisted matches."""
        matched = len(matches)
        if cancelled:
            return cls(
                matched=matched,
                matches=matches,
                message=f"Matching cancelled after {matched} candidates",
                cancelled=True,
            )
        return cls(matched=matched, matches=matches, message=f"Matched {matched} candidates")
