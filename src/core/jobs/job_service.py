"""
Job write path.

Stores job postings and announces classified jobs so auto-matching can
run. Matching never blocks or fails the write.
"""

from typing import Optional

from bson import ObjectId

from src.core.matching.events import JobClassified, MatchingEventBus, get_event_bus
from src.data.models import Job, JobCreate, JobUpdate
from src.data.repositories import JobRepository, get_job_repository
from src.utils.logger import get_logger

logger = get_logger(__name__)


class JobService:
    """Creates and updates jobs, publishing JobClassified when classified."""

    def __init__(
        self,
        jobs: Optional[JobRepository] = None,
        event_bus: Optional[MatchingEventBus] = None,
    ):
        self._jobs = jobs or get_job_repository()
        self._event_bus = event_bus or get_event_bus()

    async def create_job(self, data: JobCreate) -> Job:
        job = await self._jobs.create_from_schema(data)
        logger.info(f"Created job {job.id}: {job.title}")
        if data.job_classification is not None:
            self._announce(job.id, data.job_classification, "job_created")
        return job

    async def update_job(self, job_id: str | ObjectId, data: JobUpdate) -> Optional[Job]:
        """
        Update a job; re-match when the update carries a classification.

        Returns None when the job does not exist.
        """
        job = await self._jobs.update_from_schema(job_id, data)
        if job is None:
            return None
        logger.info(f"Updated job {job.id}")
        if data.job_classification is not None:
            self._announce(job.id, data.job_classification, "job_updated")
        return job

    def _announce(self, job_id: ObjectId, classification_id: ObjectId, reason: str) -> None:
        try:
            self._event_bus.publish(
                JobClassified(job_id=job_id, classification_id=classification_id, reason=reason)
            )
        except Exception as e:
            logger.error(f"Could not schedule auto-match for job {job_id}: {e}")
