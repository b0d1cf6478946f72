"""Tests for the health endpoint factory."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from lyrics_library.health import create_health_router


def _client(checks):
    app = FastAPI()
    app.include_router(create_health_router("lyrics-library", "1.0.0", checks))
    return TestClient(app)


class TestHealthRouter:
    def test_healthy(self):
        async def storage():
            return True

        resp = _client({"storage": storage, "cache": lambda: True}).get("/health")

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "healthy",
            "service": "lyrics-library",
            "version": "1.0.0",
            "checks": {"storage": "ok", "cache": "ok"},
        }

    def test_failing_async_check(self):
        async def storage():
            return False

        resp = _client({"storage": storage, "cache": lambda: True}).get("/health")

        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"
        assert resp.json()["checks"]["storage"] == "failing"

    def test_raising_check_is_failing(self):
        def cache():
            raise ConnectionError("refused")

        resp = _client({"cache": cache}).get("/health")

        assert resp.status_code == 503
        assert resp.json()["checks"]["cache"] == "failing"

    def test_no_checks_is_healthy(self):
        assert _client({}).get("/health").status_code == 200
