"""Tests for API routes."""
import pytest
from fastapi.testclient import TestClient

from ideascout.api.deps import job_manager
from ideascout.main import app
from ideascout.models.schemas import AnalysisReport
from ideascout.services.job_manager import JobManager


class InstantPipeline:
    async def run(self, job_id, job_input, on_progress):
        on_progress(50)
        return AnalysisReport(problem=f"idea for {job_input.keyword}")


@pytest.fixture
def manager():
    return JobManager(pipeline=InstantPipeline())


@pytest.fixture
def client(manager):
    app.dependency_overrides[job_manager] = lambda: manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "ideascout"}


def test_start_job_returns_job_id(client, manager):
    response = client.post("/api/start-job", json={"keyword": "coffee"})

    assert response.status_code == 202
    job_id = response.json()["jobId"]
    assert manager.get_status(job_id) is not None


def test_start_job_rejects_missing_keyword(client):
    response = client.post("/api/start-job", json={"keyword": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing keyword parameter"}


def test_job_status_requires_job_id(client):
    response = client.get("/api/job-status")

    assert response.status_code == 400


def test_job_status_unknown_job_is_404(client):
    response = client.get("/api/job-status", params={"jobId": "job-nope"})

    assert response.status_code == 404
    assert response.json() == {"error": "Job not found"}


def test_job_status_reports_completed_job(client, manager):
    job_id = client.post("/api/start-job", json={"keyword": "coffee", "location": "Baku"}).json()["jobId"]

    body = None
    for _ in range(50):
        body = client.get("/api/job-status", params={"jobId": job_id}).json()
        if body["status"] == "completed":
            break

    assert body["jobId"] == job_id
    assert body["status"] == "completed"
    assert body["progress"] == 100
    assert body["result"]["problem"] == "idea for coffee"
    assert body["result"]["first_3_steps"] == []
    assert body["data"]["location"] == "Baku"
    assert body["error"] is None


@pytest.mark.parametrize(
    "method,path",
    [("post", "/api/analyze"), ("post", "/api/analyze/start"), ("get", "/api/analyze/status")],
)
def test_deprecated_routes_return_gone(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 410
    assert "/api/" in response.json()["error"]
