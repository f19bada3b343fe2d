"""
Job posting data models for Talent-Match.

Defines the classification catalog (job roles) and the job posting
fields the matching engine reads.
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, field_validator

from src.utils.constants import JobStatus

from .base import BaseDocument, PyObjectId


class JobRole(BaseDocument):
    """A classification catalog entry (e.g. "Backend Engineer")."""

    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class Job(BaseDocument):
    """
    Job posting as seen by the matching engine.

    ``required_skills`` and ``preferred_skills`` are kept raw: older rows
    store them as JSON-encoded strings, newer ones as arrays. The scorer
    parses them and treats anything unreadable as an empty list.
    """

    transient_fields: ClassVar[frozenset[str]] = frozenset({"job_classification_name"})

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None

    # Classification reference into job_roles, and its name resolved by join
    job_classification: Optional[PyObjectId] = None
    job_classification_name: Optional[str] = None

    required_skills: Any = None
    preferred_skills: Any = None  # Not used by scoring
    experience_level: Optional[str] = None

    status: JobStatus = JobStatus.OPEN

    @property
    def has_classification(self) -> bool:
        """A job can only be matched once its classification is set."""
        return self.job_classification is not None


class JobCreate(BaseModel):
    """Schema for creating a new job posting."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    job_classification: Optional[PyObjectId] = None
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    status: JobStatus = JobStatus.OPEN


class JobUpdate(BaseModel):
    """Schema for updating an existing job posting."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    job_classification: Optional[PyObjectId] = None
    required_skills: Optional[list[str]] = None
    preferred_skills: Optional[list[str]] = None
    experience_level: Optional[str] = None
    status: Optional[JobStatus] = None
