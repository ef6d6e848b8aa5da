"""
Tests for template library API endpoints.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from style_kits.api.templates import router
from style_kits.core.errors import LibraryNotConfiguredError, UpstreamLibraryError


@pytest.fixture
def mock_manager(sample_catalog):
    manager = MagicMock()
    manager.get_catalog = AsyncMock(return_value=sample_catalog)
    manager.get_favorites = AsyncMock(return_value=["2", "3"])
    manager.mark_favorite = AsyncMock(return_value=["2", "3", "5"])
    return manager


@pytest.fixture
def client(mock_manager):
    """Create test client."""
    app = FastAPI()
    app.include_router(router)
    with patch(
        "style_kits.api.templates.get_template_library_manager",
        AsyncMock(return_value=mock_manager),
    ):
        yield TestClient(app)


class TestGetTemplates:
    """Test GET /templates/."""

    def test_returns_catalog(self, client, mock_manager):
        response = client.get("/templates/")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 5
        assert data["timestamp"] == 1588300000
        assert [t["id"] for t in data["templates"]] == [1, 2, 3, 4, 5]
        mock_manager.get_catalog.assert_awaited_once_with(force_update=False)

    def test_force_update(self, client, mock_manager):
        response = client.get("/templates/", params={"force_update": "true"})

        assert response.status_code == 200
        mock_manager.get_catalog.assert_awaited_once_with(force_update=True)

    def test_not_configured_is_503(self, client, mock_manager):
        mock_manager.get_catalog.side_effect = LibraryNotConfiguredError("no upstream")

        response = client.get("/templates/")

        assert response.status_code == 503
        assert response.json()["detail"] == "no upstream"

    def test_upstream_failure_is_502(self, client, mock_manager):
        mock_manager.get_catalog.side_effect = UpstreamLibraryError("HTTP 500")

        response = client.get("/templates/")

        assert response.status_code == 502
        assert "HTTP 500" in response.json()["detail"]


class TestFavorites:
    """Test favorites endpoints."""

    def test_get_favorites_default_user(self, client, mock_manager):
        response = client.get("/favorites/")

        assert response.status_code == 200
        assert response.json() == {"favorites": ["2", "3"]}
        mock_manager.get_favorites.assert_awaited_once_with("0")

    def test_get_favorites_for_user_header(self, client, mock_manager):
        client.get("/favorites/", headers={"X-Style-Kits-User": "42"})

        mock_manager.get_favorites.assert_awaited_once_with("42")

    def test_mark_favorite(self, client, mock_manager):
        response = client.post(
            "/mark_favorite/",
            json={"template_id": 5},
            headers={"X-Style-Kits-User": "42"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "favorites": ["2", "3", "5"],
            "template_id": "5",
            "action": "added",
        }
        mock_manager.mark_favorite.assert_awaited_once_with("42", 5, True)

    def test_unmark_favorite(self, client, mock_manager):
        mock_manager.mark_favorite.return_value = ["2"]

        response = client.post(
            "/mark_favorite/", json={"template_id": "3", "favorite": False}
        )

        assert response.json()["action"] == "removed"
        mock_manager.mark_favorite.assert_awaited_once_with("0", "3", False)

    def test_mark_favorite_requires_template_id(self, client):
        response = client.post("/mark_favorite/", json={"favorite": True})

        assert response.status_code == 422
