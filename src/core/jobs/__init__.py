"""Job posting write path."""

from .job_service import JobService

__all__ = [
    "JobService",
]
