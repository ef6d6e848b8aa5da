"""
Tests for health and readiness check endpoints.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from style_kits import __version__
from style_kits.api.health import router


@pytest.fixture
def client():
    """Create test client."""
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def redis_status(healthy=True):
    manager = MagicMock()
    manager.get_health_status.return_value = {
        "healthy": healthy,
        "circuit_breaker_state": "closed" if healthy else "open",
    }
    return manager


def library_manager(upstream_configured=True):
    manager = MagicMock()
    manager.get_status.return_value = {
        "upstream_configured": upstream_configured,
        "cache_ttl": 86400,
        "memory_catalog": False,
    }
    return AsyncMock(return_value=manager)


class TestHealthCheck:
    """Test the /health endpoint."""

    @patch("style_kits.api.health.get_redis_manager", return_value=redis_status())
    def test_health_check_success(self, mock_redis, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "style-kits"
        assert data["version"] == __version__
        assert data["checks"]["config_loaded"] is True

    @patch("style_kits.api.health.get_redis_manager", return_value=redis_status(False))
    def test_redis_down_is_degraded(self, mock_redis, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["redis"]["circuit_breaker_state"] == "open"

    @patch("style_kits.api.health.LIBRARY_CONFIG", {})
    @patch("style_kits.api.health.get_redis_manager", return_value=redis_status())
    def test_config_not_loaded(self, mock_redis, client):
        response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["checks"]["config_loaded"] is False

    @patch("style_kits.api.health.get_redis_manager", side_effect=RuntimeError("boom"))
    def test_health_check_exception(self, mock_redis, client):
        response = client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "error": "boom"}


class TestReadinessCheck:
    """Test the /ready endpoint."""

    @patch("style_kits.api.health.get_template_library_manager", library_manager())
    def test_ready(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["library"]["cache_ttl"] == 86400

    @patch("style_kits.api.health.get_template_library_manager", library_manager(False))
    def test_not_ready_without_upstream(self, client):
        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["checks"]["upstream_configured"] is False
