"""
Tests for the HTTP endpoints
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from conftest import ANGRY_MONKEY_DIGEST
from api import WELCOME_MESSAGE, create_app
from config import Config, create_infra_adapters
from domain.models import Job


def _wait_for_jobs(app, timeout=10):
    assert app.state.job_queue.join(timeout=timeout)


class TestIndex:
    def test_welcome(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"msg": WELCOME_MESSAGE}

    def test_unknown_route(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert "error" in response.json()


class TestSubmitAndRetrieve:
    def test_submit_returns_plain_text_id(self, client):
        response = client.post("/hash", data={"password": "angryMonkey"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "1"

    def test_pending_then_digest(self, client, app):
        job_id = client.post("/hash", data={"password": "angryMonkey"}).text

        pending = client.get(f"/hash/{job_id}")
        assert pending.status_code == 202
        assert pending.json()["status"] == "pending"
        assert pending.json()["id"] == job_id

        _wait_for_jobs(app)

        done = client.get(f"/hash/{job_id}")
        assert done.status_code == 200
        assert done.text == ANGRY_MONKEY_DIGEST

    def test_same_secret_gets_new_job_and_same_digest(self, client, app):
        first = client.post("/hash", data={"password": "repeat"}).text
        second = client.post("/hash", data={"password": "repeat"}).text
        assert first != second

        _wait_for_jobs(app)
        assert client.get(f"/hash/{first}").text == client.get(f"/hash/{second}").text

    def test_empty_password(self, client, store):
        response = client.post("/hash", data={"password": ""})
        assert response.status_code == 422
        assert response.json() == {"error": "Missing password argument"}
        assert store.count() == 0

    def test_missing_password_field(self, client, store):
        response = client.post("/hash", data={})
        assert response.status_code == 422
        assert store.count() == 0

    def test_unknown_id(self, client):
        response = client.get("/hash/99")
        assert response.status_code == 404
        assert response.json() == {"error": "job 99 not found"}

    def test_failed_job(self, client, store):
        job = store.add_pending()
        store.put(Job.failed(job.id, error="boom", elapsed=1))

        response = client.get(f"/hash/{job.id}")
        assert response.status_code == 500
        assert "boom" in response.json()["error"]

    def test_wrong_methods(self, client):
        assert client.get("/hash").status_code == 405
        assert client.post("/hash/1").status_code == 405
        assert client.post("/stats").status_code == 405
        assert client.post("/shutdown").status_code == 405


class TestStats:
    def test_no_completed_jobs(self, client):
        client.post("/hash", data={"password": "still pending"})
        response = client.get("/stats")
        assert response.status_code == 200
        assert response.json() == {"total": 0, "average": 0}

    def test_concurrent_submissions(self, client, app):
        def submit(i):
            return client.post("/hash", data={"password": f"secret-{i}"}).text

        with ThreadPoolExecutor(max_workers=20) as pool:
            ids = list(pool.map(submit, range(100)))

        assert len(set(ids)) == 100
        _wait_for_jobs(app)

        stats = client.get("/stats").json()
        assert stats["total"] == 100
        assert stats["average"] >= 150


class TestShutdown:
    def test_shutdown_refuses_new_work(self, client, app):
        job_id = client.post("/hash", data={"password": "angryMonkey"}).text

        response = client.get("/shutdown")
        assert response.status_code == 200
        assert app.state.coordinator.wait_for_shutdown_request(timeout=0)

        assert client.get("/").status_code == 503
        assert client.post("/hash", data={"password": "late"}).status_code == 503
        assert client.get(f"/hash/{job_id}").status_code == 503
        assert client.get("/stats").status_code == 503
        assert client.get("/stats").json() == {"error": "server shutting down"}

    def test_drained_only_after_pending_jobs_finish(self, client, app, store):
        job_id = client.post("/hash", data={"password": "angryMonkey"}).text
        client.get("/shutdown")

        assert app.state.coordinator.wait_until_drained(timeout=0) is False
        assert app.state.coordinator.wait_until_drained(timeout=10) is True
        assert store.get(job_id).digest == ANGRY_MONKEY_DIGEST

    def test_shutdown_is_idempotent(self, client, app):
        assert client.get("/shutdown").status_code == 200
        assert client.get("/shutdown").status_code == 200
        assert app.state.coordinator.wait_until_drained(timeout=0)


class TestHealth:
    def test_reports_counts_and_state(self, client, app):
        client.post("/hash", data={"password": "a"})
        body = client.get("/health").json()
        assert body["state"] == "running"
        assert body["jobs"]["pending"] == 1

        _wait_for_jobs(app)
        client.get("/shutdown")
        body = client.get("/health").json()
        assert body["state"] == "drained"
        assert body["jobs"] == {"total": 1, "pending": 0, "completed": 1, "failed": 0}
        assert body["active_workers"] == 0


class TestDefaultAdapters:
    def test_submission_returns_before_the_delay(self):
        cfg = Config()
        app = create_app(cfg, adapters=create_infra_adapters(cfg), delay_seconds=1.0)
        with TestClient(app) as client:
            start = time.monotonic()
            job_id = client.post("/hash", data={"password": "angryMonkey"}).text
            assert time.monotonic() - start < 0.5

            assert client.get(f"/hash/{job_id}").status_code == 202

            assert app.state.job_queue.join(timeout=10)
            assert client.get(f"/hash/{job_id}").text == ANGRY_MONKEY_DIGEST


class TestRequestLogging:
    def test_job_id_is_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="hash_service.request")

        response = client.post("/hash", data={"password": "angryMonkey"})
        assert response.headers["x-job-id"] == "1"
        client.get("/hash/1")
        client.get("/stats")

        lines = [r.getMessage() for r in caplog.records if r.name == "hash_service.request"]
        assert any("method=POST path=/hash " in m and "job=1 " in m for m in lines)
        assert any("path=/hash/1 " in m and "job=1 " in m for m in lines)
        assert any("path=/stats " in m and "job=- " in m for m in lines)

    def test_password_never_logged(self, client, caplog):
        caplog.set_level(logging.DEBUG)
        client.post("/hash", data={"password": "hunter2-secret"})
        assert "hunter2-secret" not in caplog.text
