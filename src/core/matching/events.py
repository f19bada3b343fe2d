"""
Job events that trigger auto-matching.

The job write path publishes ``JobClassified`` after it stores a job with a
classification. The bus runs subscribers in background tasks so a slow or
failing match never holds up or fails the write that triggered it.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Optional

from bson import ObjectId

from src.data.models import utcnow
from src.utils.logger import get_logger

from .orchestrator import MatchOrchestrator, get_match_orchestrator

logger = get_logger(__name__)


@dataclass(frozen=True)
class JobClassified:
    """A job was created or updated with a non-null classification."""

    job_id: ObjectId
    classification_id: ObjectId
    reason: str = "job_updated"  # job_created | job_updated
    occurred_at: datetime = field(default_factory=utcnow)


Handler = Callable[[JobClassified], Awaitable[object]]


class MatchingEventBus:
    """In-process publish/subscribe for job classification events."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []
        self._pending: set[asyncio.Task] = set()

    def subscribe(self, handler: Handler) -> None:
        self._handlers.append(handler)

    def publish(self, event: JobClassified) -> list[asyncio.Task]:
        """
        Schedule every subscriber for ``event`` and return immediately.

        Must be called from a running event loop.
        """
        tasks = []
        for handler in self._handlers:
            task = asyncio.create_task(self._dispatch(handler, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            tasks.append(task)
        return tasks

    async def _dispatch(self, handler: Handler, event: JobClassified) -> None:
        try:
            await handler(event)
        except Exception as e:
            logger.exception(f"Handler for {event.reason} on job {event.job_id} failed: {e}")

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for all scheduled handlers to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def subscribe_auto_match(bus: MatchingEventBus, orchestrator: MatchOrchestrator) -> None:
    """Run an auto-match pass for every classified job published on ``bus``."""

    async def on_job_classified(event: JobClassified) -> None:
        logger.info(f"Auto-matching job {event.job_id} after {event.reason}")
        await orchestrator.run(event.job_id)

    bus.subscribe(on_job_classified)


# Singleton instance
_event_bus: Optional[MatchingEventBus] = None


def get_event_bus() -> MatchingEventBus:
    """Get the process-wide event bus with auto-matching subscribed."""
    global _event_bus
    if _event_bus is None:
        _event_bus = MatchingEventBus()
        subscribe_auto_match(_event_bus, get_match_orchestrator())
    return _event_bus
