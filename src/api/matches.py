"""
Match routes.

POST /api/matches/auto-match/{job_id}      re-run auto-matching for a job
GET  /api/matches/job/{job_id}             matches for a job
GET  /api/matches/candidate/{candidate_id} matches for a candidate
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from src.core.matching import MatchOrchestrator
from src.data.exceptions import StorageError
from src.data.repositories import MatchRepository
from src.utils.constants import UserRole
from src.utils.logger import get_logger

from .dependencies import (
    APIError,
    CurrentUser,
    get_current_user,
    get_matches,
    get_orchestrator,
    parse_object_id,
    require_elevated_role,
)

logger = get_logger(__name__)

router = APIRouter()

_job_id = parse_object_id("job")
_candidate_id = parse_object_id("candidate")


@router.post("/auto-match/{job_id}")
async def auto_match(
    job_id: str,
    user: CurrentUser = Depends(require_elevated_role),
    orchestrator: MatchOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Re-run auto-matching for a job. Nothing to do is still a 200."""
    oid = _job_id(job_id)
    logger.info(f"Auto-match for job {oid} requested by {user.role} {user.id}")
    try:
        result = await orchestrator.run(oid)
    except (StorageError, ValidationError) as e:
        # ValidationError: a stored job document that no longer fits the model
        logger.error(f"Auto-match for job {oid} failed: {e}")
        raise APIError(500, "Server error", str(e)) from e
    return result.model_dump(mode="json", exclude_none=True)


@router.get("/job/{job_id}")
async def job_matches(
    job_id: str,
    user: CurrentUser = Depends(require_elevated_role),
    matches: MatchRepository = Depends(get_matches),
) -> list[dict[str, Any]]:
    oid = _job_id(job_id)
    try:
        found = await matches.get_by_job(oid)
    except PyMongoError as e:
        logger.error(f"Fetching matches for job {oid} failed: {e}")
        raise APIError(500, "Server error") from e
    return [m.model_dump(mode="json") for m in found]


@router.get("/candidate/{candidate_id}")
async def candidate_matches(
    candidate_id: str,
    user: CurrentUser = Depends(get_current_user),
    matches: MatchRepository = Depends(get_matches),
) -> list[dict[str, Any]]:
    """Candidates may only read their own matches."""
    oid = _candidate_id(candidate_id)
    if user.role not in (UserRole.ADMIN.value, UserRole.CONSULTANT.value) and user.id != str(oid):
        raise APIError(403, "Access denied")
    try:
        found = await matches.get_by_candidate(oid)
    except PyMongoError as e:
        logger.error(f"Fetching matches for candidate {oid} failed: {e}")
        raise APIError(500, "Server error") from e
    return [m.model_dump(mode="json") for m in found]
