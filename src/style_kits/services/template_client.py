"""
Template library client.

Talks to the catalog endpoint (``GET /templates/``) and the favorites endpoints
(``GET /favorites/``, ``POST /mark_favorite/``) over HTTP.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from style_kits.config.settings import API_URL, FETCH_MAX_ATTEMPTS, REQUEST_TIMEOUT
from style_kits.core.errors import CatalogFetchError, FavoriteUpdateError
from style_kits.models.template_models import TemplateCatalog, TemplateId

logger = logging.getLogger("style_kits.services.template_client")


class TemplateLibraryClient:
    """
    Async HTTP client for the template library.

    Transport failures are retried up to ``max_attempts`` times with
    exponential backoff; HTTP error statuses and malformed payloads are not.
    A ``max_attempts`` of 1 disables retries.

    Args:
        base_url: Endpoint root, e.g. ``https://example.com/wp-json/agwp/v1``
        timeout: Per-request timeout in seconds
        max_attempts: Total attempts for transport-level failures
        transport: Optional httpx transport (used by tests)
        headers: Extra headers sent with every request
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        max_attempts: int = FETCH_MAX_ATTEMPTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = (base_url or API_URL).rstrip("/")
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self._transport = transport
        self._headers = headers or {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers=self._headers,
        )

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        async with self._client() as client:
            async for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            f"Retrying {method} {path} "
                            f"(attempt {attempt.retry_state.attempt_number}/{self.max_attempts})"
                        )
                    response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response

    async def request_template_list(self, force_update: bool = False) -> TemplateCatalog:
        """
        Fetch the full template catalog.

        Args:
            force_update: Ask the server to bypass its cache

        Returns:
            TemplateCatalog with templates, count and timestamp

        Raises:
            CatalogFetchError: On transport failure, error status or bad payload
        """
        params = {"force_update": "true"} if force_update else None
        try:
            response = await self._send("GET", "/templates/", params=params)
            catalog = TemplateCatalog.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            raise CatalogFetchError(
                f"Template catalog request failed: HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
                force_update=force_update,
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogFetchError(
                f"Template catalog request failed: {type(exc).__name__}: {exc}",
                force_update=force_update,
            ) from exc
        except (ValueError, ValidationError) as exc:
            raise CatalogFetchError(
                f"Template catalog response was not understood: {exc}",
                force_update=force_update,
            ) from exc

        logger.debug(
            f"Fetched {len(catalog.templates)} templates (force_update={force_update})"
        )
        return catalog

    async def get_favorites(self) -> List[str]:
        """Fetch the ids of the current user's favorite templates."""
        try:
            response = await self._send("GET", "/favorites/")
            return self._favorites_from(response)
        except (httpx.HTTPError, ValueError) as exc:
            raise FavoriteUpdateError(f"Could not load favorites: {exc}") from exc

    async def mark_favorite(
        self, template_id: TemplateId, favorite: bool = True
    ) -> List[str]:
        """
        Mark or unmark a template as favorite.

        Returns:
            The favorite ids after the change, as reported by the server
        """
        try:
            response = await self._send(
                "POST",
                "/mark_favorite/",
                json={"template_id": template_id, "favorite": favorite},
            )
            return self._favorites_from(response)
        except (httpx.HTTPError, ValueError) as exc:
            raise FavoriteUpdateError(
                f"Could not update favorite {template_id}: {exc}",
                template_id=str(template_id),
            ) from exc

    @staticmethod
    def _favorites_from(response: httpx.Response) -> List[str]:
        data = response.json()
        favorites = data.get("favorites") if isinstance(data, dict) else None
        if not isinstance(favorites, list):
            raise ValueError("response has no 'favorites' list")
        return [str(item) for item in favorites]
