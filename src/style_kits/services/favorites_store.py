"""
Favorites store.

Holds the set of favorite template ids handed to the browser controller. The
only way to change it is ``mark``, which goes through the library client and
adopts whatever set the server reports back.
"""

import logging
from typing import FrozenSet, Iterable, Optional

from style_kits.models.template_models import TemplateId
from style_kits.services.template_client import TemplateLibraryClient

logger = logging.getLogger("style_kits.services.favorites_store")


class FavoritesStore:
    """Favorite template ids for the current user."""

    def __init__(
        self,
        client: Optional[TemplateLibraryClient] = None,
        initial_ids: Iterable[TemplateId] = (),
    ):
        self._client = client
        self._ids = frozenset(str(template_id) for template_id in initial_ids)

    @classmethod
    async def fetch(cls, client: TemplateLibraryClient) -> "FavoritesStore":
        """Build a store seeded with the favorites the server knows about."""
        return cls(client, await client.get_favorites())

    @property
    def ids(self) -> FrozenSet[str]:
        return self._ids

    def is_favorite(self, template_id: TemplateId) -> bool:
        return str(template_id) in self._ids

    async def mark(self, template_id: TemplateId, favorite: bool = True) -> FrozenSet[str]:
        """
        Persist a favorite change and refresh the local set.

        Without a client the change is applied locally only.

        Raises:
            FavoriteUpdateError: If the server rejects the change
        """
        key = str(template_id)
        if self._client is None:
            self._ids = self._ids | {key} if favorite else self._ids - {key}
        else:
            self._ids = frozenset(await self._client.mark_favorite(template_id, favorite))

        logger.info(
            f"Template {key} {'added to' if favorite else 'removed from'} favorites "
            f"({len(self._ids)} total)"
        )
        return self._ids
