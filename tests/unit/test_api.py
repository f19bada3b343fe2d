"""
Tests for src.api — match routes, role checks and error payloads.

The orchestrator and match listing are backed by the in-memory store
through FastAPI dependency overrides.
"""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from src.api import create_app
from src.api.dependencies import get_matches, get_orchestrator
from src.core.matching import MatchOrchestrator
from src.data.models import Job
from src.utils.constants import NO_CLASSIFICATION_MESSAGE

CONSULTANT = {"X-User-Id": str(ObjectId()), "X-User-Role": "consultant"}
ADMIN = {"X-User-Id": str(ObjectId()), "X-User-Role": "Admin"}


def candidate_headers(candidate_id):
    return {"X-User-Id": str(candidate_id), "X-User-Role": "candidate"}


@pytest.fixture
def client(store):
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: MatchOrchestrator(store)
    app.dependency_overrides[get_matches] = lambda: store
    return TestClient(app)


# ── POST /api/matches/auto-match/{job_id} ────────────────────────────────────


class TestAutoMatchEndpoint:
    def test_matches_pool(self, client, seeded):
        job, candidate_ids = seeded
        response = client.post(f"/api/matches/auto-match/{job.id}", headers=CONSULTANT)

        assert response.status_code == 200
        body = response.json()
        assert body["matched"] == 3
        assert body["message"] == "Matched 3 candidates"
        assert body["matches"] == [
            {"candidate_id": str(candidate_ids[0]), "match_score": 100},
            {"candidate_id": str(candidate_ids[1]), "match_score": 93},
            {"candidate_id": str(candidate_ids[2]), "match_score": 80},
        ]
        assert "cancelled" not in body

    def test_nothing_to_do_is_success(self, client, store, make_job):
        job = store.add_job(make_job(classified=False))
        response = client.post(f"/api/matches/auto-match/{job.id}", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"matched": 0, "message": NO_CLASSIFICATION_MESSAGE}

    def test_requires_authentication(self, client, seeded):
        job, _ = seeded
        response = client.post(f"/api/matches/auto-match/{job.id}")
        assert response.status_code == 401

    def test_candidates_cannot_trigger(self, client, seeded, store):
        job, candidate_ids = seeded
        response = client.post(
            f"/api/matches/auto-match/{job.id}", headers=candidate_headers(candidate_ids[0])
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Insufficient permissions"}
        assert store.calls == []

    def test_invalid_job_id(self, client):
        response = client.post("/api/matches/auto-match/not-an-id", headers=CONSULTANT)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid job ID"}

    def test_store_failure_is_server_error(self, client, store, seeded):
        job, _ = seeded
        store.fail_operations["fetch_job_with_classification"] = ServerSelectionTimeoutError("no servers")

        response = client.post(f"/api/matches/auto-match/{job.id}", headers=CONSULTANT)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Server error"
        assert "fetch_job_with_classification" in body["details"]

    def test_unreadable_job_document_is_server_error(self, client, store, seeded, monkeypatch):
        job, _ = seeded

        async def malformed(job_id):
            return Job.model_validate({"_id": job_id})

        monkeypatch.setattr(store, "fetch_job_with_classification", malformed)

        response = client.post(f"/api/matches/auto-match/{job.id}", headers=CONSULTANT)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Server error"
        assert "title" in body["details"]


# ── GET /api/matches/job/{job_id} ────────────────────────────────────────────


class TestJobMatchesEndpoint:
    def test_lists_best_first(self, client, seeded):
        job, candidate_ids = seeded
        client.post(f"/api/matches/auto-match/{job.id}", headers=CONSULTANT)

        response = client.get(f"/api/matches/job/{job.id}", headers=CONSULTANT)

        assert response.status_code == 200
        body = response.json()
        assert [m["match_score"] for m in body] == [100, 93, 80]
        assert body[0]["candidate_id"] == str(candidate_ids[0])
        assert body[0]["job_id"] == str(job.id)
        assert body[0]["status"] == "pending_review"

    def test_candidates_forbidden(self, client, seeded):
        job, candidate_ids = seeded
        response = client.get(
            f"/api/matches/job/{job.id}", headers=candidate_headers(candidate_ids[0])
        )
        assert response.status_code == 403

    def test_database_failure(self, client, seeded):
        job, _ = seeded

        class Unreachable:
            async def get_by_job(self, *args, **kwargs):
                raise ServerSelectionTimeoutError("no servers")

        client.app.dependency_overrides[get_matches] = lambda: Unreachable()
        response = client.get(f"/api/matches/job/{job.id}", headers=CONSULTANT)

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


# ── GET /api/matches/candidate/{candidate_id} ────────────────────────────────


class TestCandidateMatchesEndpoint:
    def test_candidate_reads_own_matches(self, client, seeded):
        job, candidate_ids = seeded
        client.post(f"/api/matches/auto-match/{job.id}", headers=CONSULTANT)

        response = client.get(
            f"/api/matches/candidate/{candidate_ids[1]}",
            headers=candidate_headers(candidate_ids[1]),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["match_score"] == 93

    def test_candidate_cannot_read_others(self, client, seeded):
        _, candidate_ids = seeded
        response = client.get(
            f"/api/matches/candidate/{candidate_ids[1]}",
            headers=candidate_headers(candidate_ids[0]),
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Access denied"}

    def test_admin_reads_any_candidate(self, client, seeded):
        job, candidate_ids = seeded
        client.post(f"/api/matches/auto-match/{job.id}", headers=ADMIN)

        response = client.get(f"/api/matches/candidate/{candidate_ids[2]}", headers=ADMIN)
        assert response.status_code == 200
        assert response.json()[0]["match_score"] == 80

    def test_invalid_candidate_id(self, client):
        response = client.get("/api/matches/candidate/123", headers=ADMIN)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid candidate ID"}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
