"""Health endpoint tests."""

from contextlib import asynccontextmanager

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from brandstage.interfaces.api.resources.health import HealthResource


class _UnreachablePool:
    """Pool stand-in whose connections always fail."""

    @asynccontextmanager
    async def connection(self, timeout=None):
        raise OSError("connection refused")
        yield


def _client(health: HealthResource) -> TestClient:
    app = App()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Create test client with health endpoints."""
    return _client(HealthResource())


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_database_down() -> None:
    """GET /v1/health/ready returns 503 when the database is unreachable."""
    result = _client(HealthResource(_UnreachablePool())).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"
