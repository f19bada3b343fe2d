"""
Shared test fixtures for the Talent-Match test suite.

Sets environment variables before any src imports to prevent config failures,
then provides an in-memory MatchingStore and factory fixtures for jobs,
candidates and resumes.
"""

import os

# === Set environment BEFORE any src imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "talent_match_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

import asyncio
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest
from bson import ObjectId

from src.data.exceptions import StorageError
from src.data.models import Job, Match, MatchStatus, PoolCandidate, Resume, utcnow
from src.utils.constants import EDUCATION_MATCH_PLACEHOLDER, SKILLS_MATCH_PLACEHOLDER


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemoryMatchingStore:
    """
    MatchingStore kept in dictionaries.

    Mirrors the MongoDB store: one match per (job, candidate), insert-only
    auxiliary fields, newest resume wins. Failures can be injected per
    operation or per candidate, and every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.jobs: dict[ObjectId, Job] = {}
        self.candidates: list[dict[str, Any]] = []
        self.resumes: list[Resume] = []
        self.matches: dict[tuple[ObjectId, ObjectId], Match] = {}
        self.calls: list[str] = []

        self.fail_operations: dict[str, Exception] = {}
        self.fail_upsert_for: set[ObjectId] = set()
        self.upsert_delay: float = 0.0

        self.in_flight = 0
        self.max_in_flight = 0

    # -- seeding ------------------------------------------------------------

    def add_job(self, job: Job) -> Job:
        if job.id is None:
            job.id = ObjectId()
        self.jobs[job.id] = job
        return job

    def add_candidate(
        self,
        title: Optional[str] = None,
        classification: Optional[ObjectId] = None,
        is_active: bool = True,
        user_id: Optional[ObjectId] = None,
    ) -> ObjectId:
        user_id = user_id or ObjectId()
        self.candidates.append(
            {
                "user_id": user_id,
                "current_job_title": title,
                "job_classification": classification,
                "is_active": is_active,
            }
        )
        return user_id

    def add_resume(self, resume: Resume) -> Resume:
        if resume.id is None:
            resume.id = ObjectId()
        self.resumes.append(resume)
        return resume

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_operations:
            raise StorageError(operation, self.fail_operations[operation])

    def _pool(self, field: str, value: Any) -> list[PoolCandidate]:
        seen: set[ObjectId] = set()
        pool = []
        for row in self.candidates:
            if not row["is_active"] or row[field] != value or row["user_id"] in seen:
                continue
            seen.add(row["user_id"])
            pool.append(
                PoolCandidate(
                    candidate_id=row["user_id"],
                    current_job_title=row["current_job_title"],
                )
            )
        return pool

    # -- MatchingStore ------------------------------------------------------

    async def fetch_job_with_classification(self, job_id: ObjectId) -> Optional[Job]:
        self._check("fetch_job_with_classification")
        return self.jobs.get(job_id)

    async def fetch_active_candidates_by_classification_label(
        self, label: str
    ) -> list[PoolCandidate]:
        self._check("fetch_active_candidates_by_classification_label")
        return self._pool("current_job_title", label)

    async def fetch_active_candidates_by_classification_id(
        self, classification_id: ObjectId
    ) -> list[PoolCandidate]:
        self._check("fetch_active_candidates_by_classification_id")
        return self._pool("job_classification", classification_id)

    async def fetch_latest_resume(self, candidate_id: ObjectId) -> Optional[Resume]:
        self._check("fetch_latest_resume")
        owned = [r for r in self.resumes if r.candidate_id == candidate_id]
        if not owned:
            return None
        return max(owned, key=lambda r: r.uploaded_at)

    async def fetch_existing_match(
        self, job_id: ObjectId, candidate_id: ObjectId
    ) -> Optional[Match]:
        self._check("fetch_existing_match")
        return self.matches.get((job_id, candidate_id))

    async def upsert_match(
        self,
        job_id: ObjectId,
        candidate_id: ObjectId,
        resume_id: Optional[ObjectId],
        score: int,
        experience_years: Optional[int],
    ) -> Match:
        self._check("upsert_match")
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.upsert_delay:
                await asyncio.sleep(self.upsert_delay)
            if candidate_id in self.fail_upsert_for:
                raise StorageError("upsert_match", RuntimeError("write rejected"))

            now = utcnow()
            key = (job_id, candidate_id)
            existing = self.matches.get(key)
            if existing is not None:
                match = existing.model_copy(
                    update={"match_score": score, "matched_at": now, "updated_at": now}
                )
            else:
                match = Match(
                    id=ObjectId(),
                    job_id=job_id,
                    candidate_id=candidate_id,
                    resume_id=resume_id,
                    match_score=score,
                    skills_match=SKILLS_MATCH_PLACEHOLDER,
                    experience_match=experience_years or 0,
                    education_match=EDUCATION_MATCH_PLACEHOLDER,
                    status=MatchStatus.PENDING_REVIEW,
                    matched_at=now,
                    created_at=now,
                    updated_at=now,
                )
            self.matches[key] = match
            return match
        finally:
            self.in_flight -= 1

    # -- match listing (MatchRepository surface used by the API) -------------

    def _sorted(self, matches: list[Match]) -> list[Match]:
        return sorted(matches, key=lambda m: (m.match_score, m.matched_at), reverse=True)

    async def get_by_job(self, job_id: ObjectId, skip: int = 0, limit: int = 100) -> list[Match]:
        found = [m for (j, _), m in self.matches.items() if j == job_id]
        return self._sorted(found)[skip : skip + limit]

    async def get_by_candidate(
        self, candidate_id: ObjectId, skip: int = 0, limit: int = 100
    ) -> list[Match]:
        found = [m for (_, c), m in self.matches.items() if c == candidate_id]
        return self._sorted(found)[skip : skip + limit]


@pytest.fixture
def store() -> InMemoryMatchingStore:
    return InMemoryMatchingStore()


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_job():
    """Factory that returns a callable to build classified Job models."""

    def _factory(
        required_skills: Any = None,
        experience_level: Optional[str] = "mid",
        classification: Optional[ObjectId] = None,
        classification_name: Optional[str] = "Backend Engineer",
        classified: bool = True,
        **kwargs,
    ) -> Job:
        if required_skills is None:
            required_skills = ["Python", "MongoDB", "Docker"]
        if classified and classification is None:
            classification = ObjectId()
        return Job(
            id=kwargs.pop("id", ObjectId()),
            title=kwargs.pop("title", "Senior Backend Developer"),
            job_classification=classification if classified else None,
            job_classification_name=classification_name if classified else None,
            required_skills=required_skills,
            experience_level=experience_level,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_resume():
    """Factory that returns a callable to build Resume models."""

    def _factory(
        candidate_id: Optional[ObjectId] = None,
        skills: Any = None,
        experience_years: Optional[int] = 4,
        uploaded_at: Optional[datetime] = None,
        **kwargs,
    ) -> Resume:
        if skills is None:
            skills = ["python", "mongodb", "docker"]
        return Resume(
            id=kwargs.pop("id", ObjectId()),
            candidate_id=candidate_id or ObjectId(),
            skills=skills,
            experience_years=experience_years,
            uploaded_at=uploaded_at or utcnow(),
            **kwargs,
        )

    return _factory


@pytest.fixture
def seeded(store, make_job, make_resume):
    """
    A classified job with three pooled candidates, each with a resume.

    Returns (job, [candidate ids]).
    """
    job = store.add_job(make_job())
    candidate_ids = []
    for years in (6, 2, 0):
        cid = store.add_candidate(title=job.job_classification_name)
        store.add_resume(make_resume(candidate_id=cid, experience_years=years))
        candidate_ids.append(cid)
    return job, candidate_ids


@pytest.fixture
def earlier():
    """Callable giving a timestamp ``minutes`` before now."""

    def _earlier(minutes: int) -> datetime:
        return utcnow() - timedelta(minutes=minutes)

    return _earlier


@pytest.fixture
def later():
    """Callable giving a timestamp ``minutes`` after now."""

    def _later(minutes: int) -> datetime:
        return utcnow() + timedelta(minutes=minutes)

    return _later
