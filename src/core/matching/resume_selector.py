"""Picks the resume a candidate is scored on."""

from typing import Optional

from bson import ObjectId

from src.data.models import Resume

from .store import MatchingStore


class ResumeSelector:
    """Selects a candidate's most recently uploaded resume."""

    def __init__(self, store: MatchingStore):
        self._store = store

    async def select(self, candidate_id: ObjectId) -> Optional[Resume]:
        # Upload-time ties fall to whichever record the store returns first
        return await self._store.fetch_latest_resume(candidate_id)
