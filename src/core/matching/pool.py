"""
Candidate pool selection for auto-matching.
"""

from typing import Optional

from src.data.models import Job, PoolCandidate
from src.utils.constants import PoolStrategy
from src.utils.logger import get_logger

from .store import MatchingStore

logger = get_logger(__name__)


class CandidatePoolSelector:
    """
    Selects the active candidates eligible for a job.

    Two strategies exist because candidate profiles carry two notions of
    classification that can disagree:

    - ``TITLE`` compares the profile's free-text ``current_job_title`` with
      the job's classification name (exact, case-sensitive).
    - ``CLASSIFICATION_ID`` compares the profile's ``job_classification``
      reference with the job's classification id.
    """

    def __init__(
        self,
        store: MatchingStore,
        strategy: PoolStrategy | str = PoolStrategy.TITLE,
    ):
        self._store = store
        self.strategy = PoolStrategy(strategy)

    async def select(self, job: Job) -> list[PoolCandidate]:
        """
        Return the pool for a classified job.

        Store failures propagate. Callers must not pass a job without a
        classification.
        """
        if self.strategy is PoolStrategy.CLASSIFICATION_ID:
            if job.job_classification is None:
                return []
            pool = await self._store.fetch_active_candidates_by_classification_id(
                job.job_classification
            )
        else:
            label: Optional[str] = job.job_classification_name
            if not label:
                # Classification id set but the role it points at is gone
                logger.warning(
                    f"Job {job.id} references classification {job.job_classification} with no name"
                )
                return []
            pool = await self._store.fetch_active_candidates_by_classification_label(label)

        logger.debug(f"Pool for job {job.id} ({self.strategy.value}): {len(pool)} candidates")
        return pool
