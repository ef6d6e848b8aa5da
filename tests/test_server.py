"""
Tests for server module.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from style_kits import __version__
from style_kits.server import app, lifespan


def test_app_initialization():
    """Test that FastAPI app is initialized correctly."""
    assert app.title == "Style Kits Template Library API"
    assert app.version == __version__
    assert app.docs_url == "/docs"


def test_app_middleware_configured():
    assert len(app.user_middleware) == 3


def test_routes_are_prefixed():
    paths = set(app.openapi()["paths"])

    assert "/agwp/v1/templates/" in paths
    assert "/agwp/v1/favorites/" in paths
    assert "/agwp/v1/mark_favorite/" in paths
    assert "/agwp/v1/health" in paths


def test_catalog_error_through_full_stack():
    manager = MagicMock()
    manager.get_catalog = AsyncMock(side_effect=RuntimeError("unexpected"))

    with patch(
        "style_kits.api.templates.get_template_library_manager",
        AsyncMock(return_value=manager),
    ):
        response = TestClient(app).get("/agwp/v1/templates/")

    assert response.status_code == 500
    assert response.json()["error_code"] == "INTERNAL_ERROR"


@pytest.mark.asyncio
async def test_lifespan_checks_redis_and_cleans_up():
    redis_manager = MagicMock()
    redis_manager.health_check = AsyncMock(return_value=False)
    redis_manager.cleanup = AsyncMock()
    library_manager = MagicMock()
    library_manager.cleanup = AsyncMock()

    with patch(
        "style_kits.services.redis_manager.get_redis_manager", return_value=redis_manager
    ):
        with patch(
            "style_kits.services.template_library_manager.get_template_library_manager",
            AsyncMock(return_value=library_manager),
        ):
            async with lifespan(app):
                redis_manager.health_check.assert_awaited_once()

    library_manager.cleanup.assert_awaited_once()
    redis_manager.cleanup.assert_awaited_once()
