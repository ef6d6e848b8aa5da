"""
Template Browser.

View-state controller behind the template library screen. The fetched catalog
is the archive: it is replaced wholesale on load or refresh and never edited.
Every view operation derives the displayed list from it again, so filters do
not stack. The one exception is ``search``, which narrows what is currently
shown.

The controller is not safe for overlapping ``load``/``refresh`` calls; the
response that resolves last wins.
"""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from style_kits.core.errors import CatalogFetchError
from style_kits.models.template_models import Template, TemplateCatalog, TemplateId
from style_kits.services.favorites_store import FavoritesStore
from style_kits.services.template_client import TemplateLibraryClient

logger = logging.getLogger("style_kits.services.template_browser")

FILTER_ALL = "all"
SORT_POPULAR = "popular"
SORT_LATEST = "latest"
SORT_KEYS = (SORT_POPULAR, SORT_LATEST)


class BrowserStatus(str, Enum):
    """Lifecycle of the catalog held by the browser."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    REFRESHING = "refreshing"
    ERROR = "error"


def sort_by_popularity(templates: List[Template]) -> List[Template]:
    """Stable sort, most popular first; templates without an index go last."""
    return sorted(
        templates,
        key=lambda t: (
            t.popularity_index is None,
            -(t.popularity_index or 0),
        ),
    )


class TemplateBrowser:
    """
    Holds the template catalog and the list currently displayed.

    Args:
        client: Library client used for load and refresh
        favorites: Favorites store; read when entering favorites mode
    """

    def __init__(self, client: TemplateLibraryClient, favorites: FavoritesStore):
        self._client = client
        self._favorites = favorites
        self._catalog: Tuple[Template, ...] = ()
        self.templates: List[Template] = []
        self.count: Optional[int] = None
        self.timestamp: Optional[int] = None
        self.filters: List[str] = []
        self.status = BrowserStatus.IDLE
        self.error: Optional[CatalogFetchError] = None
        self.showing_favorites = False
        self.preview_open = False
        self.preview_template: Optional[Template] = None

    @property
    def catalog(self) -> Tuple[Template, ...]:
        return self._catalog

    @property
    def favorites(self) -> FavoritesStore:
        return self._favorites

    @property
    def loading(self) -> bool:
        return self.status is BrowserStatus.LOADING

    @property
    def refreshing(self) -> bool:
        return self.status is BrowserStatus.REFRESHING

    def _apply_catalog(self, catalog: TemplateCatalog) -> None:
        self._catalog = tuple(catalog.templates)
        self.templates = list(self._catalog)
        self.count = catalog.count if catalog.count is not None else len(self._catalog)
        self.timestamp = catalog.timestamp
        self.filters = list(dict.fromkeys(t.type for t in self._catalog))
        self.error = None
        self.status = BrowserStatus.READY

    async def load(self) -> None:
        """
        Fetch the catalog and show all of it.

        Raises:
            CatalogFetchError: The fetch failed; catalog and view are unchanged
        """
        previous_status = self.status
        self.status = BrowserStatus.LOADING
        try:
            catalog = await self._client.request_template_list()
        except CatalogFetchError as exc:
            self.status = BrowserStatus.ERROR
            self.error = exc
            logger.error(
                f"Template catalog load failed (was {previous_status.value}): {exc}"
            )
            raise

        self._apply_catalog(catalog)
        logger.info(f"Loaded {len(self._catalog)} templates, {len(self.filters)} types")

    async def refresh(self) -> None:
        """
        Re-fetch the catalog, bypassing the server cache.

        On failure the previous catalog is shown again, favorites mode is left
        and the status becomes ``error``.

        Raises:
            CatalogFetchError: The forced fetch failed
        """
        previous_count = self.count
        self.templates = []
        self.count = None
        self.status = BrowserStatus.REFRESHING
        try:
            catalog = await self._client.request_template_list(force_update=True)
        except CatalogFetchError as exc:
            self.templates = list(self._catalog)
            self.count = previous_count
            self.showing_favorites = False
            self.status = BrowserStatus.ERROR
            self.error = exc
            logger.error(f"Template catalog refresh failed: {exc}")
            raise

        self.showing_favorites = False
        self._apply_catalog(catalog)
        logger.info(f"Refreshed catalog: {len(self._catalog)} templates")

    def filter_by_type(self, template_type: str) -> List[Template]:
        """Show the catalog entries of one type, or everything for ``"all"``."""
        if template_type == FILTER_ALL:
            self.templates = list(self._catalog)
        else:
            self.templates = [t for t in self._catalog if t.type == template_type]
        return self.templates

    def sort_by(self, key: str) -> List[Template]:
        """
        Reset the view to the catalog, leaving favorites mode, then order it.

        ``popular`` sorts by popularity index descending; ``latest`` keeps the
        catalog order, which the library serves newest first.
        """
        self.showing_favorites = False
        self.templates = list(self._catalog)

        if key == SORT_POPULAR:
            self.templates = sort_by_popularity(self.templates)
        elif key != SORT_LATEST:
            logger.debug(f"Unknown sort key {key!r}; showing catalog order")
        return self.templates

    def search(self, query: str) -> List[Template]:
        """
        Narrow the current view to templates whose title or tags contain ``query``.

        An empty query, or one that matches nothing, shows the whole catalog.
        """
        matches = [t for t in self.templates if t.matches(query)] if query else []
        self.templates = matches if matches else list(self._catalog)
        return self.templates

    def toggle_favorites(self) -> List[Template]:
        """Switch favorites mode on (keep favorites of the current view) or off."""
        self.showing_favorites = not self.showing_favorites
        if self.showing_favorites:
            favorite_ids = self._favorites.ids
            self.templates = [t for t in self.templates if t.key in favorite_ids]
        else:
            self.templates = list(self._catalog)
        return self.templates

    async def mark_favorite(self, template_id: TemplateId, favorite: bool = True):
        """Forward a favorite change to the favorites store."""
        return await self._favorites.mark(template_id, favorite)

    def open_preview(self, template_id: TemplateId) -> Template:
        """
        Open the preview modal for a catalog template.

        Raises:
            KeyError: No template with that id is in the catalog
        """
        key = str(template_id)
        for template in self._catalog:
            if template.key == key:
                self.preview_template = template
                self.preview_open = True
                return template
        raise KeyError(f"Template {template_id} is not in the catalog")

    def close_preview(self) -> None:
        self.preview_open = False
        self.preview_template = None

    def reset_view(self) -> None:
        """Modal closed: show the whole catalog again and leave favorites mode."""
        self.close_preview()
        self.showing_favorites = False
        self.templates = list(self._catalog)

    def bind_reset(self, register: Callable[[Callable[[], None]], Any]) -> Any:
        """Hand ``reset_view`` to the shell's modal-closed registration hook."""
        return register(self.reset_view)
