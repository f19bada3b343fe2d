"""
Storage collaborator used by the auto-matcher.

``MatchingStore`` is the narrow read/write surface the matching components
depend on. ``MongoMatchingStore`` implements it with the repositories and
turns driver failures into ``StorageError``.
"""

from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar

from bson import ObjectId
from pymongo.errors import PyMongoError

from src.data.exceptions import StorageError
from src.data.models import Job, Match, PoolCandidate, Resume
from src.data.repositories import (
    CandidateRepository,
    JobRepository,
    MatchRepository,
    ResumeRepository,
    get_candidate_repository,
    get_job_repository,
    get_match_repository,
    get_resume_repository,
)

R = TypeVar("R")


class MatchingStore(Protocol):
    """Reads and writes the auto-matcher needs from the relational side."""

    async def fetch_job_with_classification(self, job_id: ObjectId) -> Optional[Job]: ...

    async def fetch_active_candidates_by_classification_label(
        self, label: str
    ) -> list[PoolCandidate]: ...

    async def fetch_active_candidates_by_classification_id(
        self, classification_id: ObjectId
    ) -> list[PoolCandidate]: ...

    async def fetch_latest_resume(self, candidate_id: ObjectId) -> Optional[Resume]: ...

    async def fetch_existing_match(
        self, job_id: ObjectId, candidate_id: ObjectId
    ) -> Optional[Match]: ...

    async def upsert_match(
        self,
        job_id: ObjectId,
        candidate_id: ObjectId,
        resume_id: Optional[ObjectId],
        score: int,
        experience_years: Optional[int],
    ) -> Match: ...


def _storage_operation(
    func: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """Wrap driver errors raised by a store method in StorageError."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> R:
        try:
            return await func(*args, **kwargs)
        except PyMongoError as e:
            raise StorageError(func.__name__, e) from e

    return wrapper


class MongoMatchingStore:
    """MatchingStore backed by the MongoDB repositories."""

    def __init__(
        self,
        jobs: Optional[JobRepository] = None,
        candidates: Optional[CandidateRepository] = None,
        resumes: Optional[ResumeRepository] = None,
        matches: Optional[MatchRepository] = None,
    ) -> None:
        self._jobs = jobs or get_job_repository()
        self._candidates = candidates or get_candidate_repository()
        self._resumes = resumes or get_resume_repository()
        self._matches = matches or get_match_repository()

    @_storage_operation
    async def fetch_job_with_classification(self, job_id: ObjectId) -> Optional[Job]:
        return await self._jobs.get_with_classification(job_id)

    @_storage_operation
    async def fetch_active_candidates_by_classification_label(
        self, label: str
    ) -> list[PoolCandidate]:
        return await self._candidates.find_active_by_title(label)

    @_storage_operation
    async def fetch_active_candidates_by_classification_id(
        self, classification_id: ObjectId
    ) -> list[PoolCandidate]:
        return await self._candidates.find_active_by_classification(classification_id)

    @_storage_operation
    async def fetch_latest_resume(self, candidate_id: ObjectId) -> Optional[Resume]:
        return await self._resumes.get_latest_for_candidate(candidate_id)

    @_storage_operation
    async def fetch_existing_match(
        self, job_id: ObjectId, candidate_id: ObjectId
    ) -> Optional[Match]:
        return await self._matches.get_by_job_and_candidate(job_id, candidate_id)

    @_storage_operation
    async def upsert_match(
        self,
        job_id: ObjectId,
        candidate_id: ObjectId,
        resume_id: Optional[ObjectId],
        score: int,
        experience_years: Optional[int],
    ) -> Match:
        return await self._matches.upsert_score(
            job_id, candidate_id, resume_id, score, experience_years
        )


# Singleton instance
_matching_store: Optional[MongoMatchingStore] = None


def get_matching_store() -> MongoMatchingStore:
    """Get the MongoDB-backed matching store singleton."""
    global _matching_store
    if _matching_store is None:
        _matching_store = MongoMatchingStore()
    return _matching_store
