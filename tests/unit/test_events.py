"""
Tests for the job write path and the JobClassified event bus.

Matching triggered by a job write is best effort: it runs in the
background and its failures never reach the writer.
"""

import asyncio
from typing import Optional

from bson import ObjectId

from src.core.jobs import JobService
from src.core.matching import (
    JobClassified,
    MatchingEventBus,
    MatchOrchestrator,
    subscribe_auto_match,
)
from src.data.models import Job, JobCreate, JobUpdate


class FakeJobRepository:
    """Job writes that land in the in-memory matching store."""

    def __init__(self, store, classification_names: dict[ObjectId, str]):
        self._store = store
        self._names = classification_names

    async def create_from_schema(self, data: JobCreate) -> Job:
        job = Job(id=ObjectId(), **data.model_dump())
        job.job_classification_name = self._names.get(job.job_classification)
        return self._store.add_job(job)

    async def update_from_schema(self, job_id, data: JobUpdate) -> Optional[Job]:
        job = self._store.jobs.get(ObjectId(job_id))
        if job is None:
            return None
        for name, value in data.model_dump(exclude_none=True).items():
            setattr(job, name, value)
        job.job_classification_name = self._names.get(job.job_classification)
        return job


class RecordingBus(MatchingEventBus):
    def __init__(self):
        super().__init__()
        self.published: list[JobClassified] = []

    def publish(self, event):
        self.published.append(event)
        return super().publish(event)


class BrokenBus(MatchingEventBus):
    def publish(self, event):
        raise RuntimeError("bus unavailable")


def _service(store, bus=None):
    role_id = ObjectId()
    jobs = FakeJobRepository(store, {role_id: "Backend Engineer"})
    bus = bus or RecordingBus()
    subscribe_auto_match(bus, MatchOrchestrator(store))
    return JobService(jobs=jobs, event_bus=bus), bus, role_id


def _seed_candidate(store, make_resume, title="Backend Engineer"):
    cid = store.add_candidate(title=title)
    store.add_resume(make_resume(candidate_id=cid))
    return cid


# ── JobService ───────────────────────────────────────────────────────────────


class TestJobServiceTrigger:
    def test_create_with_classification_runs_auto_match(self, store, make_resume):
        cid = _seed_candidate(store, make_resume)
        service, bus, role_id = _service(store)

        async def scenario():
            job = await service.create_job(
                JobCreate(title="API Developer", job_classification=role_id, required_skills=["python"])
            )
            await bus.drain()
            return job

        job = asyncio.run(scenario())

        assert [e.reason for e in bus.published] == ["job_created"]
        assert bus.published[0].classification_id == role_id
        assert (job.id, cid) in store.matches

    def test_create_without_classification_publishes_nothing(self, store, make_resume):
        _seed_candidate(store, make_resume)
        service, bus, _ = _service(store)

        async def scenario():
            await service.create_job(JobCreate(title="API Developer"))
            await bus.drain()

        asyncio.run(scenario())

        assert bus.published == []
        assert store.matches == {}

    def test_update_setting_classification_runs_auto_match(self, store, make_resume):
        cid = _seed_candidate(store, make_resume)
        service, bus, role_id = _service(store)

        async def scenario():
            job = await service.create_job(JobCreate(title="API Developer"))
            await service.update_job(job.id, JobUpdate(job_classification=role_id))
            await bus.drain()
            return job

        job = asyncio.run(scenario())

        assert [e.reason for e in bus.published] == ["job_updated"]
        assert (job.id, cid) in store.matches

    def test_update_of_missing_job(self, store):
        service, bus, role_id = _service(store)

        result = asyncio.run(service.update_job(ObjectId(), JobUpdate(job_classification=role_id)))

        assert result is None
        assert bus.published == []

    def test_matching_failure_does_not_fail_the_write(self, store, make_resume):
        _seed_candidate(store, make_resume)
        store.fail_operations["fetch_job_with_classification"] = RuntimeError("down")
        service, bus, role_id = _service(store)

        async def scenario():
            job = await service.create_job(JobCreate(title="API Developer", job_classification=role_id))
            await bus.drain()
            return job

        job = asyncio.run(scenario())

        assert job.title == "API Developer"
        assert store.matches == {}

    def test_publish_failure_does_not_fail_the_write(self, store):
        service, _, role_id = _service(store, bus=BrokenBus())

        job = asyncio.run(
            service.create_job(JobCreate(title="API Developer", job_classification=role_id))
        )
        assert job.id in store.jobs


# ── MatchingEventBus ─────────────────────────────────────────────────────────


class TestMatchingEventBus:
    def test_publish_returns_before_handlers_finish(self):
        bus = MatchingEventBus()
        seen = []

        async def slow(event):
            await asyncio.sleep(0.01)
            seen.append(event.job_id)

        bus.subscribe(slow)
        event = JobClassified(job_id=ObjectId(), classification_id=ObjectId())

        async def scenario():
            bus.publish(event)
            assert seen == []
            assert bus.pending == 1
            await bus.drain()

        asyncio.run(scenario())

        assert seen == [event.job_id]
        assert bus.pending == 0

    def test_failing_handler_does_not_affect_others(self):
        bus = MatchingEventBus()
        seen = []

        async def broken(event):
            raise ValueError("boom")

        async def working(event):
            seen.append(event.reason)

        bus.subscribe(broken)
        bus.subscribe(working)

        async def scenario():
            bus.publish(JobClassified(job_id=ObjectId(), classification_id=ObjectId(), reason="job_created"))
            await bus.drain()

        asyncio.run(scenario())
        assert seen == ["job_created"]

    def test_event_defaults(self):
        event = JobClassified(job_id=ObjectId(), classification_id=ObjectId())
        assert event.reason == "job_updated"
        assert event.occurred_at is not None
