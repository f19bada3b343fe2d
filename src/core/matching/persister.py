"""
Match persistence for auto-matching.
"""

from typing import Optional

from bson import ObjectId

from src.data.models import Match
from src.utils.logger import audit_log, get_logger

from .store import MatchingStore

logger = get_logger(__name__)


class MatchPersister:
    """
    Writes match scores, one record per (job, candidate).

    Persistence goes through the store's atomic upsert, so repeated and
    concurrent calls for the same pair converge on a single record.
    """

    def __init__(self, store: MatchingStore):
        self._store = store

    async def persist(
        self,
        job_id: ObjectId,
        candidate_id: ObjectId,
        resume_id: Optional[ObjectId],
        score: int,
        experience_years: Optional[int],
    ) -> Match:
        """
        Insert or update the match for a pair.

        Raises:
            StorageError: if the store write fails.
        """
        match = await self._store.upsert_match(
            job_id, candidate_id, resume_id, score, experience_years
        )
        logger.debug(f"Persisted match job={job_id} candidate={candidate_id} score={score}")
        audit_log(
            "match_scored",
            {
                "job_id": str(job_id),
                "candidate_id": str(candidate_id),
                "resume_id": str(resume_id) if resume_id else None,
                "match_score": score,
            },
        )
        return match
