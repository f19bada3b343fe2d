"""
Candidate profile data models for Talent-Match.
"""

from typing import Optional

from pydantic import Field

from .base import BaseDocument, EmbeddedModel, PyObjectId


class CandidateProfile(BaseDocument):
    """
    Candidate profile attached to a user account.

    The candidate's identifier throughout matching is ``user_id``.
    A profile carries two independent notions of "role": the free-text
    ``current_job_title`` and the catalog reference ``job_classification``.
    """

    user_id: PyObjectId
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool = True

    current_job_title: Optional[str] = None
    job_classification: Optional[PyObjectId] = None

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts)


class PoolCandidate(EmbeddedModel):
    """A candidate eligible for scoring against a job."""

    candidate_id: PyObjectId
    current_title: Optional[str] = Field(default=None, alias="current_job_title")
