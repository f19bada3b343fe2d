"""
Resume repository for Talent-Match.
"""

from typing import Optional

from bson import ObjectId

from src.data.models.resume import Resume
from src.utils.constants import RESUMES_COLLECTION
from src.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ResumeRepository(BaseRepository[Resume]):
    """Repository for resume document operations."""

    @property
    def collection_name(self) -> str:
        return RESUMES_COLLECTION

    @property
    def model_class(self) -> type[Resume]:
        return Resume

    async def get_latest_for_candidate(
        self, candidate_id: str | ObjectId
    ) -> Optional[Resume]:
        """Get the most recently uploaded resume, or None if there is none."""
        return await self.find_one(
            {"candidate_id": self._to_object_id(candidate_id)},
            sort=[("uploaded_at", -1)],
        )


# Singleton instance
_resume_repository: Optional[ResumeRepository] = None


def get_resume_repository() -> ResumeRepository:
    """Get the resume repository singleton instance."""
    global _resume_repository
    if _resume_repository is None:
        _resume_repository = ResumeRepository()
    return _resume_repository
