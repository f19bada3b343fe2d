"""
Application-wide constants for Talent-Match.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "talent-match"
APP_DISPLAY_NAME: Final[str] = "Talent-Match Auto-Matching Service"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Collections
# =============================================================================

JOBS_COLLECTION: Final[str] = "jobs"
JOB_ROLES_COLLECTION: Final[str] = "job_roles"
CANDIDATE_PROFILES_COLLECTION: Final[str] = "candidate_profiles"
RESUMES_COLLECTION: Final[str] = "resumes"
MATCHES_COLLECTION: Final[str] = "job_matches"


# =============================================================================
# Scoring Constants
# =============================================================================

# Minimum years of experience required per experience level label
EXPERIENCE_YEARS_BY_LEVEL: Final[dict[str, int]] = {
    "entry": 0,
    "junior": 1,
    "mid": 3,
    "senior": 5,
    "executive": 10,
}

MAX_MATCH_SCORE: Final[int] = 100
MIN_MATCH_SCORE: Final[int] = 0

# Auxiliary match fields written on first insert
SKILLS_MATCH_PLACEHOLDER: Final[int] = 0
EDUCATION_MATCH_PLACEHOLDER: Final[int] = 1

NO_CLASSIFICATION_MESSAGE: Final[str] = "Job not found or has no classification"


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, Enum):
    """Roles a request can be made under."""

    ADMIN = "admin"
    CONSULTANT = "consultant"
    CANDIDATE = "candidate"


class JobStatus(str, Enum):
    """Status of a job posting."""

    DRAFT = "draft"
    OPEN = "open"
    PAUSED = "paused"
    CLOSED = "closed"
    FILLED = "filled"


class ExperienceLevel(str, Enum):
    """Experience level labels understood by the scorer."""

    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class PoolStrategy(str, Enum):
    """How the candidate pool for a job is selected."""

    TITLE = "title"  # current_job_title == classification name
    CLASSIFICATION_ID = "classification_id"  # job_classification == classification id


class MatchScoreLevel(Enum):
    """Categorical levels for integer match scores."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: int) -> "MatchScoreLevel":
        """Convert a 0-100 score to a level."""
        if score >= SCORE_THRESHOLDS["excellent"]:
            return cls.EXCELLENT
        elif score >= SCORE_THRESHOLDS["good"]:
            return cls.GOOD
        elif score >= SCORE_THRESHOLDS["fair"]:
            return cls.FAIR
        return cls.POOR


# Score thresholds on the 0-100 scale
SCORE_THRESHOLDS: Final[dict[str, int]] = {
    "excellent": 85,
    "good": 70,
    "fair": 55,
}
