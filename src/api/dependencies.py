"""
Request dependencies for the Talent-Match API.

Authentication happens upstream; the gateway forwards the caller's id and
role in ``X-User-Id`` / ``X-User-Role`` headers.
"""

from typing import Callable, Optional

from bson import ObjectId
from fastapi import Depends, Header
from pydantic import BaseModel

from src.core.matching import MatchOrchestrator, get_match_orchestrator
from src.data.repositories import MatchRepository, get_match_repository
from src.utils.config import get_settings


class APIError(Exception):
    """Error rendered as ``{"error": message, ...}`` with a status code."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_content(self) -> dict[str, str]:
        content = {"error": self.message}
        if self.details:
            content["details"] = self.details
        return content


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str
    role: str


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    if not x_user_id or not x_user_role:
        raise APIError(401, "Authentication required")
    return CurrentUser(id=x_user_id, role=x_user_role.strip().lower())


def require_elevated_role(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Allow only the roles configured as elevated (consultant, admin)."""
    if user.role not in get_settings().api.elevated_roles:
        raise APIError(403, "Insufficient permissions")
    return user


def parse_object_id(label: str) -> Callable[[str], ObjectId]:
    """Build a converter turning a path segment into an ObjectId or a 400."""

    def convert(value: str) -> ObjectId:
        if not ObjectId.is_valid(value):
            raise APIError(400, f"Invalid {label} ID")
        return ObjectId(value)

    return convert


def get_orchestrator() -> MatchOrchestrator:
    return get_match_orchestrator()


def get_matches() -> MatchRepository:
    return get_match_repository()
