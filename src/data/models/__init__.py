"""
Pydantic data models and schemas for Talent-Match.

This module provides all data models used throughout the application,
including database documents and API payloads.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin, utcnow

# Job models
from .job import Job, JobCreate, JobRole, JobUpdate

# Candidate models
from .candidate import CandidateProfile, PoolCandidate

# Resume models
from .resume import Resume

# Match models
from .match import AutoMatchResult, CandidateMatchResult, Match, MatchStatus

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "utcnow",
    # Job
    "Job",
    "JobCreate",
    "JobRole",
    "JobUpdate",
    # Candidate
    "CandidateProfile",
    "PoolCandidate",
    # Resume
    "Resume",
    # Match
    "AutoMatchResult",
    "CandidateMatchResult",
    "Match",
    "MatchStatus",
]
