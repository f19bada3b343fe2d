"""
Candidate profile repository for Talent-Match.

Provides the active-candidate queries the matching pool is built from.
"""

from typing import Any, Optional

from bson import ObjectId

from src.data.models.candidate import CandidateProfile, PoolCandidate
from src.utils.constants import CANDIDATE_PROFILES_COLLECTION
from src.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

_POOL_PROJECTION = {"_id": 0, "user_id": 1, "current_job_title": 1}


class CandidateRepository(BaseRepository[CandidateProfile]):
    """Repository for candidate profile operations."""

    @property
    def collection_name(self) -> str:
        return CANDIDATE_PROFILES_COLLECTION

    @property
    def model_class(self) -> type[CandidateProfile]:
        return CandidateProfile

    async def _find_pool(self, query: dict[str, Any]) -> list[PoolCandidate]:
        collection = self._get_collection()
        cursor = collection.find({"is_active": True, **query}, _POOL_PROJECTION)
        cursor = cursor.sort("user_id", 1)

        pool: list[PoolCandidate] = []
        seen: set[ObjectId] = set()
        async for document in cursor:
            user_id = document["user_id"]
            if user_id in seen:
                continue
            seen.add(user_id)
            pool.append(
                PoolCandidate(
                    candidate_id=user_id,
                    current_title=document.get("current_job_title"),
                )
            )
        return pool

    async def find_active_by_title(self, title: str) -> list[PoolCandidate]:
        """Active candidates whose current job title equals ``title`` exactly."""
        return await self._find_pool({"current_job_title": title})

    async def find_active_by_classification(
        self, classification_id: str | ObjectId
    ) -> list[PoolCandidate]:
        """Active candidates whose profile references the given classification."""
        return await self._find_pool(
            {"job_classification": self._to_object_id(classification_id)}
        )


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
