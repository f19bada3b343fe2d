"""
Auto-match orchestration.

Runs one matching pass for a job: resolve the job and its classification,
build the candidate pool, then for each candidate pick a resume, score it
and persist the match. Candidates are processed by a bounded pool of
workers; the steps for any single candidate always run in order.
"""

import asyncio
import weakref
from typing import Optional

from bson import ObjectId

from src.data.models import (
    AutoMatchResult,
    CandidateMatchResult,
    Job,
    PoolCandidate,
)
from src.utils.config import get_settings
from src.utils.logger import LoggerMixin, audit_log

from .persister import MatchPersister
from .pool import CandidatePoolSelector
from .resume_selector import ResumeSelector
from .scoring import MatchScorer
from .store import MatchingStore, get_matching_store


class MatchOrchestrator(LoggerMixin):
    """
    Composes pool selection, resume selection, scoring and persistence.

    Runs for the same job are serialized within the process; the store's
    unique (job, candidate) upsert covers writers in other processes.
    """

    def __init__(
        self,
        store: MatchingStore,
        pool_selector: Optional[CandidatePoolSelector] = None,
        resume_selector: Optional[ResumeSelector] = None,
        scorer: Optional[MatchScorer] = None,
        persister: Optional[MatchPersister] = None,
        max_concurrency: Optional[int] = None,
    ):
        settings = get_settings().matching

        self._store = store
        self._pool_selector = pool_selector or CandidatePoolSelector(
            store, settings.pool_strategy
        )
        self._resume_selector = resume_selector or ResumeSelector(store)
        self._scorer = scorer or MatchScorer(
            base_score=settings.base_score,
            skills_weight=settings.skills_weight,
            experience_weight=settings.experience_weight,
        )
        self._persister = persister or MatchPersister(store)
        self.max_concurrency = max(1, max_concurrency or settings.max_concurrency)

        # Entries disappear once no run holds the lock
        self._job_locks: weakref.WeakValueDictionary[ObjectId, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, job_id: ObjectId) -> asyncio.Lock:
        lock = self._job_locks.get(job_id)
        if lock is None:
            lock = asyncio.Lock()
            self._job_locks[job_id] = lock
        return lock

    async def run(
        self,
        job_id: str | ObjectId,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AutoMatchResult:
        """
        Match all eligible candidates to a job.

        Args:
            job_id: Job to match
            cancel_event: When set, no further candidates are started;
                candidates already in flight finish and stay persisted.

        Returns:
            The aggregate result. A missing job or classification is a
            normal zero result, not an error.

        Raises:
            StorageError: if the job or the pool cannot be read.
        """
        job_id = job_id if isinstance(job_id, ObjectId) else ObjectId(job_id)

        lock = self._lock_for(job_id)
        if lock.locked():
            self.logger.info(f"Auto-match for job {job_id} already running, waiting")
        async with lock:
            return await self._run_locked(job_id, cancel_event)

    async def _run_locked(
        self,
        job_id: ObjectId,
        cancel_event: Optional[asyncio.Event],
    ) -> AutoMatchResult:
        job = await self._store.fetch_job_with_classification(job_id)
        if job is None or not job.has_classification:
            self.logger.info(f"Job {job_id} not found or unclassified, nothing to match")
            return AutoMatchResult.no_classification()

        pool = await self._pool_selector.select(job)
        if not pool:
            self.logger.info(f"No candidates in pool for job {job_id}")
            return AutoMatchResult.completed([])

        matches, cancelled = await self._score_pool(job_id, job, pool, cancel_event)
        result = AutoMatchResult.completed(matches, cancelled=cancelled)

        self.logger.info(
            f"Auto-match for job {job_id}: {result.matched}/{len(pool)} candidates matched"
            + (" (cancelled)" if cancelled else "")
        )
        audit_log(
            "auto_match_completed",
            {
                "job_id": str(job_id),
                "pool_size": len(pool),
                "matched": result.matched,
                "cancelled": cancelled,
            },
            audit_type="TRIGGER",
        )
        return result

    async def _score_pool(
        self,
        job_id: ObjectId,
        job: Job,
        pool: list[PoolCandidate],
        cancel_event: Optional[asyncio.Event],
    ) -> tuple[list[CandidateMatchResult], bool]:
        """Run the pool through the workers; results keep pool order."""
        results: list[Optional[CandidateMatchResult]] = [None] * len(pool)
        queue: asyncio.Queue[tuple[int, PoolCandidate]] = asyncio.Queue()
        for item in enumerate(pool):
            queue.put_nowait(item)

        async def worker() -> None:
            while not (cancel_event is not None and cancel_event.is_set()):
                try:
                    index, candidate = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                results[index] = await self._match_candidate(job_id, job, candidate)

        workers = [
            asyncio.create_task(worker())
            for _ in range(min(self.max_concurrency, len(pool)))
        ]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

        cancelled = not queue.empty()
        return [r for r in results if r is not None], cancelled

    async def _match_candidate(
        self,
        job_id: ObjectId,
        job: Job,
        candidate: PoolCandidate,
    ) -> Optional[CandidateMatchResult]:
        """Resume lookup, scoring and persistence for one candidate."""
        candidate_id = candidate.candidate_id
        try:
            resume = await self._resume_selector.select(candidate_id)
            if resume is None:
                self.logger.debug(f"Candidate {candidate_id} has no resume, skipping")
                return None

            breakdown = self._scorer.score(job, resume)
            await self._persister.persist(
                job_id,
                candidate_id,
                resume.id,
                breakdown.score,
                resume.experience_years,
            )
        except Exception as e:
            # One bad candidate must not stop the batch
            self.logger.exception(f"Failed to match candidate {candidate_id} to job {job_id}: {e}")
            return None

        return CandidateMatchResult(candidate_id=candidate_id, match_score=breakdown.score)


# Singleton instance
_match_orchestrator: Optional[MatchOrchestrator] = None


def get_match_orchestrator() -> MatchOrchestrator:
    """Get the orchestrator singleton backed by MongoDB."""
    global _match_orchestrator
    if _match_orchestrator is None:
        _match_orchestrator = MatchOrchestrator(get_matching_store())
    return _match_orchestrator
