"""
Resume data models for Talent-Match.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from .base import BaseDocument, PyObjectId, utcnow


class Resume(BaseDocument):
    """
    Uploaded resume record.

    Only the fields scoring needs are modeled; file storage lives elsewhere.
    ``skills`` is kept raw (array or JSON string) like the job skill lists.
    """

    candidate_id: PyObjectId
    file_name: Optional[str] = None
    skills: Any = None
    experience_years: Optional[int] = None
    uploaded_at: datetime = Field(default_factory=utcnow)

    @field_validator("experience_years")
    @classmethod
    def validate_experience_years(cls, v: Optional[int]) -> Optional[int]:
        """Experience cannot be negative."""
        if v is not None and v < 0:
            raise ValueError("experience_years must be non-negative")
        return v
