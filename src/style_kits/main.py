"""
Style Kits CLI
"""

import asyncio
import logging

import click
from dotenv import find_dotenv, load_dotenv

# Activate logging setup before any other imports that use logging
import style_kits.logging_config  # noqa: F401

from style_kits.core.errors import StyleKitsError
from style_kits.models.template_models import Template
from style_kits.runner import run_browser, run_server
from style_kits.services.template_browser import FILTER_ALL, SORT_KEYS
from style_kits.services.template_client import TemplateLibraryClient

logger = logging.getLogger("style_kits.main")

# Load .env variables
load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)


def format_template_line(template: Template, favorite: bool) -> str:
    """One listing row: favorite star, id, title, type, popularity and pro marker."""
    star = "★" if favorite else " "
    popularity = "-" if template.popularity_index is None else template.popularity_index
    pro = " [pro]" if template.is_pro else ""
    return (
        f"  {star} [{template.id}] {template.title}{pro} "
        f"({template.type}, popularity {popularity})"
    )


@click.group()
def cli():
    """Style Kits CLI - template library browser and catalog server"""
    pass


@cli.command("serve")
@click.option("--host", default="0.0.0.0", help="Server host (default: 0.0.0.0)")
@click.option("--port", default=8080, help="Server port (default: 8080)")
def serve_server(host, port):
    """Start the catalog API server."""
    logger.info(f"Starting server on {host}:{port}...")
    asyncio.run(run_server(host=host, port=port))


@cli.command("templates")
@click.option("--api-url", default=None, help="Catalog endpoint root (default: STYLE_KITS_API_URL)")
@click.option("--type", "template_type", default=FILTER_ALL, help="Only show this template type")
@click.option("--sort", type=click.Choice(SORT_KEYS), default=None, help="Sort order")
@click.option("--search", "query", default="", help="Match title or tags")
@click.option("--favorites", "favorites_only", is_flag=True, help="Only show favorites")
@click.option("--refresh", is_flag=True, help="Bypass the server cache")
def templates_cmd(api_url, template_type, sort, query, favorites_only, refresh):
    """List templates from the library."""
    if sort and template_type != FILTER_ALL:
        raise click.UsageError("--type and --sort cannot be combined")

    client = TemplateLibraryClient(base_url=api_url)
    try:
        browser = asyncio.run(
            run_browser(
                client,
                template_type=template_type,
                sort=sort,
                query=query,
                favorites_only=favorites_only,
                refresh=refresh,
            )
        )
    except StyleKitsError as e:
        raise click.ClickException(str(e))

    logger.info(
        f"Showing {len(browser.templates)} of {browser.count} templates "
        f"(types: {', '.join(browser.filters) or 'none'})"
    )
    for template in browser.templates:
        logger.info(
            format_template_line(template, browser.favorites.is_favorite(template.id))
        )


@cli.command("favorite")
@click.argument("template_id")
@click.option("--remove", is_flag=True, help="Remove from favorites instead")
@click.option("--api-url", default=None, help="Catalog endpoint root (default: STYLE_KITS_API_URL)")
def favorite_cmd(template_id, remove, api_url):
    """Mark a template as favorite."""
    client = TemplateLibraryClient(base_url=api_url)
    try:
        favorites = asyncio.run(client.mark_favorite(template_id, favorite=not remove))
    except StyleKitsError as e:
        raise click.ClickException(str(e))
    logger.info(f"Favorites: {', '.join(favorites) or 'none'}")


if __name__ == "__main__":
    cli()
