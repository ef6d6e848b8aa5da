"""
Template Library Manager Service.

Serves the template catalog behind ``GET /templates/``. Catalogs fetched from
the upstream library are cached in Redis for ``CACHE_TTL`` seconds; a forced
update skips the cache read and overwrites it. Per-user favorites live in Redis
sets. When Redis is unavailable both fall back to process memory.
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Set

import httpx
import redis.asyncio as redis
from pydantic import ValidationError

from style_kits.config.settings import (
    CACHE_TTL,
    FAVORITES_KEY_PREFIX,
    TEMPLATES_CACHE_KEY,
    UPSTREAM_TIMEOUT,
    UPSTREAM_URL,
)
from style_kits.core.errors import LibraryNotConfiguredError, UpstreamLibraryError
from style_kits.models.template_models import TemplateCatalog, TemplateId
from style_kits.services.redis_manager import get_redis_manager

logger = logging.getLogger("style_kits.services.template_library_manager")


class TemplateLibraryManager:
    """
    Fetches, caches and serves the template catalog and user favorites.

    Args:
        upstream_url: Remote library the catalog is mirrored from
        cache_ttl: Seconds a cached catalog stays valid
        transport: Optional httpx transport for the upstream request
    """

    def __init__(
        self,
        upstream_url: Optional[str] = None,
        cache_ttl: int = CACHE_TTL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.upstream_url = UPSTREAM_URL if upstream_url is None else upstream_url
        self.cache_ttl = cache_ttl
        self._transport = transport
        self._redis_manager = get_redis_manager()
        # In-memory fallback when Redis is unavailable
        self._memory_catalog: Optional[TemplateCatalog] = None
        self._memory_catalog_expires: float = 0.0
        self._memory_favorites: Dict[str, Set[str]] = {}

    async def get_catalog(self, force_update: bool = False) -> TemplateCatalog:
        """
        Get the template catalog.

        Args:
            force_update: Skip the cache and fetch from the upstream library

        Returns:
            TemplateCatalog with templates, count and timestamp

        Raises:
            LibraryNotConfiguredError: No upstream URL configured
            UpstreamLibraryError: Upstream request failed or returned bad data
        """
        if not force_update:
            cached = await self._get_cached_catalog()
            if cached is not None:
                return cached

        catalog = await self._fetch_upstream()
        await self._cache_catalog(catalog)
        logger.info(
            f"Fetched {catalog.count} templates from upstream (force_update={force_update})"
        )
        return catalog

    async def _fetch_upstream(self) -> TemplateCatalog:
        if not self.upstream_url:
            raise LibraryNotConfiguredError(
                "No upstream template library configured (set STYLE_KITS_UPSTREAM_URL)"
            )

        try:
            async with httpx.AsyncClient(
                timeout=UPSTREAM_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(self.upstream_url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamLibraryError(
                f"Upstream library returned HTTP {exc.response.status_code}",
                {"status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamLibraryError(
                f"Upstream library request failed: {type(exc).__name__}: {exc}"
            ) from exc
        except ValueError as exc:
            raise UpstreamLibraryError(f"Upstream library sent invalid JSON: {exc}") from exc

        if isinstance(data, list):
            data = {"templates": data}
        try:
            catalog = TemplateCatalog.model_validate(data)
        except ValidationError as exc:
            raise UpstreamLibraryError(
                f"Upstream library payload is not a template catalog: {exc.error_count()} errors"
            ) from exc

        return catalog.model_copy(
            update={
                "count": len(catalog.templates),
                "timestamp": catalog.timestamp or int(time.time()),
            }
        )

    async def _get_cached_catalog(self) -> Optional[TemplateCatalog]:
        try:

            async def get_catalog_operation(redis_client: redis.Redis):
                return await redis_client.get(TEMPLATES_CACHE_KEY)

            cached = await self._redis_manager.execute(get_catalog_operation)
            if cached:
                return TemplateCatalog.model_validate(json.loads(cached))
            return None
        except Exception as e:
            logger.warning(f"Failed to read cached catalog from Redis: {e}")

        if self._memory_catalog and time.time() < self._memory_catalog_expires:
            return self._memory_catalog
        return None

    async def _cache_catalog(self, catalog: TemplateCatalog) -> None:
        self._memory_catalog = catalog
        self._memory_catalog_expires = time.time() + self.cache_ttl
        payload = catalog.model_dump_json(by_alias=True)
        try:

            async def set_catalog_operation(redis_client: redis.Redis):
                return await redis_client.set(
                    TEMPLATES_CACHE_KEY, payload, ex=self.cache_ttl
                )

            await self._redis_manager.execute(set_catalog_operation)
        except Exception as e:
            logger.warning(
                f"Failed to cache catalog in Redis: {e}. Catalog cached in memory only."
            )

    @staticmethod
    def _favorites_key(user_id: str) -> str:
        return f"{FAVORITES_KEY_PREFIX}:{user_id}"

    async def get_favorites(self, user_id: str) -> List[str]:
        """Get a user's favorite template ids, sorted."""
        key = self._favorites_key(user_id)
        try:

            async def smembers_operation(redis_client: redis.Redis):
                return await redis_client.smembers(key)

            members = await self._redis_manager.execute(smembers_operation)
            return sorted(str(member) for member in members)
        except Exception as e:
            logger.warning(f"Failed to read favorites from Redis: {e}")
            return sorted(self._memory_favorites.get(user_id, set()))

    async def mark_favorite(
        self, user_id: str, template_id: TemplateId, favorite: bool = True
    ) -> List[str]:
        """
        Add or remove a favorite for a user.

        Returns:
            The user's favorite ids after the change
        """
        key = self._favorites_key(user_id)
        member = str(template_id)
        try:

            async def update_favorites_operation(redis_client: redis.Redis):
                if favorite:
                    await redis_client.sadd(key, member)
                else:
                    await redis_client.srem(key, member)

            await self._redis_manager.execute(update_favorites_operation)
        except Exception as e:
            logger.warning(
                f"Failed to update favorites in Redis: {e}. Favorites stored in memory only."
            )
            favorites = self._memory_favorites.setdefault(user_id, set())
            if favorite:
                favorites.add(member)
            else:
                favorites.discard(member)
            return sorted(favorites)

        return await self.get_favorites(user_id)

    def get_status(self) -> Dict[str, Any]:
        """Configuration summary for health checks."""
        return {
            "upstream_configured": bool(self.upstream_url),
            "cache_ttl": self.cache_ttl,
            "memory_catalog": self._memory_catalog is not None,
        }

    async def cleanup(self):
        """Drop in-memory state. RedisManager cleanup is handled globally."""
        self._memory_catalog = None
        self._memory_favorites.clear()


# Singleton instance
_template_library_manager: Optional[TemplateLibraryManager] = None


async def get_template_library_manager() -> TemplateLibraryManager:
    """Get or create the template library manager singleton."""
    global _template_library_manager
    if _template_library_manager is None:
        _template_library_manager = TemplateLibraryManager()
    return _template_library_manager
