"""
Style Kits runner.

Entry points behind the CLI: serve the catalog API, or drive a template
browser session against a running catalog endpoint.
"""

import logging
from typing import Optional

import uvicorn

from style_kits.core.errors import FavoriteUpdateError
from style_kits.services.favorites_store import FavoritesStore
from style_kits.services.template_browser import FILTER_ALL, TemplateBrowser
from style_kits.services.template_client import TemplateLibraryClient

logger = logging.getLogger("style_kits.runner")


async def run_server(host: str = "0.0.0.0", port: int = 8080):
    """Run the FastAPI server."""
    from style_kits.server import app

    config = uvicorn.Config(app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    await server.serve()


async def run_browser(
    client: TemplateLibraryClient,
    template_type: str = FILTER_ALL,
    sort: Optional[str] = None,
    query: str = "",
    favorites_only: bool = False,
    refresh: bool = False,
) -> TemplateBrowser:
    """
    Load the catalog and apply view operations in the order the UI applies them.

    Type filtering and sorting both rebuild the view from the catalog, so only
    one of them can apply; search and favorites then narrow the result.

    Returns:
        The browser with the resulting view in ``templates``

    Raises:
        ValueError: Both a type filter and a sort order were requested
        CatalogFetchError: The catalog could not be fetched
        FavoriteUpdateError: Favorites could not be loaded for a favorites-only view
    """
    if sort and template_type != FILTER_ALL:
        raise ValueError("Filter by type and sort order cannot be combined")

    try:
        favorites = await FavoritesStore.fetch(client)
    except FavoriteUpdateError as e:
        if favorites_only:
            raise
        logger.warning(f"Could not load favorites, listing without them: {e}")
        favorites = FavoritesStore(client)
    browser = TemplateBrowser(client, favorites)

    if refresh:
        await browser.refresh()
    else:
        await browser.load()

    if sort:
        browser.sort_by(sort)
    if template_type != FILTER_ALL:
        browser.filter_by_type(template_type)
    if query:
        browser.search(query)
    if favorites_only:
        browser.toggle_favorites()

    logger.debug(
        f"Browser view: {len(browser.templates)} of {len(browser.catalog)} templates"
    )
    return browser
