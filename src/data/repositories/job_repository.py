"""
Job and job-role repositories for Talent-Match.

Provides data access for job postings, including the join that resolves a
job's classification name from the job-role catalog.
"""

from typing import Optional

from bson import ObjectId

from src.data.models.job import Job, JobCreate, JobUpdate
from src.utils.constants import JOB_ROLES_COLLECTION, JOBS_COLLECTION
from src.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[Job]):
    """Repository for job posting operations."""

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    async def create_from_schema(self, data: JobCreate) -> Job:
        """Create a job from a create schema."""
        job = Job(**data.model_dump())
        return await self.create(job)

    async def update_from_schema(
        self, id_value: str | ObjectId, data: JobUpdate
    ) -> Optional[Job]:
        """Update a job from an update schema."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return await self.get_by_id(id_value)
        return await self.update(id_value, update_data)

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    async def get_with_classification(self, id_value: str | ObjectId) -> Optional[Job]:
        """
        Get a job with ``job_classification_name`` resolved from job_roles.

        The join is a left join: a job whose classification points at a
        missing role comes back with the id set and the name None.
        """
        collection = self._get_collection()
        pipeline = [
            {"$match": {"_id": self._to_object_id(id_value)}},
            {
                "$lookup": {
                    "from": JOB_ROLES_COLLECTION,
                    "localField": "job_classification",
                    "foreignField": "_id",
                    "as": "_classification",
                }
            },
            {
                "$addFields": {
                    "job_classification_name": {
                        "$arrayElemAt": ["$_classification.name", 0]
                    }
                }
            },
            {"$project": {"_classification": 0}},
        ]
        documents = await collection.aggregate(pipeline).to_list(length=1)
        if not documents:
            return None
        return self._to_model(documents[0])


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
