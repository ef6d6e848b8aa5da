"""
Tests for main CLI module.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from style_kits.core.errors import CatalogFetchError, FavoriteUpdateError
from style_kits.main import cli, format_template_line


def test_cli_group():
    """Test that CLI group is defined."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Style Kits CLI" in result.output


def test_serve_server_command():
    runner = CliRunner()
    with patch("style_kits.main.run_server", new_callable=AsyncMock) as mock_run:
        result = runner.invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_awaited_once_with(host="127.0.0.1", port=9000)


def test_templates_command(sample_catalog):
    browser = MagicMock()
    browser.templates = list(sample_catalog.templates)
    browser.count = 5
    browser.filters = ["hero", "block", "page"]
    browser.favorites.is_favorite.return_value = False

    runner = CliRunner()
    with patch(
        "style_kits.main.run_browser", new_callable=AsyncMock, return_value=browser
    ) as mock_run:
        with patch("style_kits.main.TemplateLibraryClient") as mock_client:
            result = runner.invoke(
                cli,
                ["templates", "--api-url", "http://x/agwp/v1", "--sort", "popular", "--search", "hero"],
            )

    assert result.exit_code == 0
    mock_client.assert_called_once_with(base_url="http://x/agwp/v1")
    mock_run.assert_awaited_once_with(
        mock_client.return_value,
        template_type="all",
        sort="popular",
        query="hero",
        favorites_only=False,
        refresh=False,
    )


def test_templates_rejects_type_with_sort():
    runner = CliRunner()
    result = runner.invoke(cli, ["templates", "--type", "hero", "--sort", "latest"])

    assert result.exit_code == 2
    assert "cannot be combined" in result.output


def test_templates_rejects_unknown_sort():
    runner = CliRunner()
    result = runner.invoke(cli, ["templates", "--sort", "alphabetical"])

    assert result.exit_code == 2


def test_templates_fetch_failure():
    runner = CliRunner()
    with patch(
        "style_kits.main.run_browser",
        new_callable=AsyncMock,
        side_effect=CatalogFetchError("Template catalog request failed: HTTP 500"),
    ):
        result = runner.invoke(cli, ["templates"])

    assert result.exit_code == 1
    assert "HTTP 500" in result.output


def test_favorite_command():
    runner = CliRunner()
    with patch("style_kits.main.TemplateLibraryClient") as mock_client:
        mock_client.return_value.mark_favorite = AsyncMock(return_value=["3"])
        result = runner.invoke(cli, ["favorite", "3", "--remove"])

    assert result.exit_code == 0
    mock_client.return_value.mark_favorite.assert_awaited_once_with("3", favorite=False)


def test_favorite_command_failure():
    runner = CliRunner()
    with patch("style_kits.main.TemplateLibraryClient") as mock_client:
        mock_client.return_value.mark_favorite = AsyncMock(
            side_effect=FavoriteUpdateError("Could not update favorite 3")
        )
        result = runner.invoke(cli, ["favorite", "3"])

    assert result.exit_code == 1
    assert "Could not update favorite 3" in result.output


def test_format_template_line_marks_favorites_and_pro(sample_catalog):
    landing = sample_catalog.templates[3]
    hero = sample_catalog.templates[1]

    assert format_template_line(landing, False) == "    [4] Landing Page [pro] (page, popularity -)"
    assert format_template_line(hero, True) == "  ★ [2] Hero B (hero, popularity 9)"
