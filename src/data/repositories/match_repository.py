"""
Match repository for Talent-Match.

Provides data access for job/candidate match documents, including the
atomic upsert the auto-matcher persists through.
"""

from typing import Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from src.data.models.base import utcnow
from src.data.models.match import Match, MatchStatus
from src.utils.constants import (
    EDUCATION_MATCH_PLACEHOLDER,
    MATCHES_COLLECTION,
    SKILLS_MATCH_PLACEHOLDER,
)
from src.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class MatchRepository(BaseRepository[Match]):
    """Repository for job/candidate match document operations."""

    @property
    def collection_name(self) -> str:
        return MATCHES_COLLECTION

    @property
    def model_class(self) -> type[Match]:
        return Match

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    async def get_by_job_and_candidate(
        self,
        job_id: str | ObjectId,
        candidate_id: str | ObjectId,
    ) -> Optional[Match]:
        """Get the match for a (job, candidate) pair."""
        return await self.find_one(
            {
                "job_id": self._to_object_id(job_id),
                "candidate_id": self._to_object_id(candidate_id),
            }
        )

    async def get_by_job(
        self,
        job_id: str | ObjectId,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Match]:
        """Get matches for a job, best score first, latest first on ties."""
        return await self.find(
            {"job_id": self._to_object_id(job_id)},
            skip=skip,
            limit=limit,
            sort=[("match_score", -1), ("matched_at", -1)],
        )

    async def get_by_candidate(
        self,
        candidate_id: str | ObjectId,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Match]:
        """Get matches for a candidate, best score first, latest first on ties."""
        return await self.find(
            {"candidate_id": self._to_object_id(candidate_id)},
            skip=skip,
            limit=limit,
            sort=[("match_score", -1), ("matched_at", -1)],
        )

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    async def upsert_score(
        self,
        job_id: str | ObjectId,
        candidate_id: str | ObjectId,
        resume_id: Optional[str | ObjectId],
        match_score: int,
        experience_years: Optional[int],
    ) -> Match:
        """
        Insert or update the match for a (job, candidate) pair atomically.

        An existing match only gets a new score and ``matched_at``; the
        resume reference and auxiliary fields are written on insert only.
        """
        collection = self._get_collection()
        key = {
            "job_id": self._to_object_id(job_id),
            "candidate_id": self._to_object_id(candidate_id),
        }
        now = utcnow()
        update = {
            "$set": {
                "match_score": match_score,
                "matched_at": now,
                "updated_at": now,
            },
            "$setOnInsert": {
                "resume_id": self._to_object_id(resume_id) if resume_id else None,
                "skills_match": SKILLS_MATCH_PLACEHOLDER,
                "experience_match": experience_years or 0,
                "education_match": EDUCATION_MATCH_PLACEHOLDER,
                "status": MatchStatus.PENDING_REVIEW.value,
                "created_at": now,
            },
        }

        try:
            document = await collection.find_one_and_update(
                key, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            # Another writer inserted the pair between our match and insert;
            # the second attempt matches that document and updates it.
            logger.debug(f"Upsert race on job={key['job_id']} candidate={key['candidate_id']}, retrying")
            document = await collection.find_one_and_update(
                key, update, upsert=True, return_document=ReturnDocument.AFTER
            )

        return self._to_model(document)


# Singleton instance
_match_repository: Optional[MatchRepository] = None


def get_match_repository() -> MatchRepository:
    """Get the match repository singleton instance."""
    global _match_repository
    if _match_repository is None:
        _match_repository = MatchRepository()
    return _match_repository
