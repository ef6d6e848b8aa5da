"""
Template Library API Endpoints.

Catalog and favorites endpoints consumed by the template browser.
"""

import logging

from fastapi import APIRouter, Header, HTTPException, Query

from ..config.settings import DEFAULT_USER, USER_HEADER
from ..core.errors import LibraryNotConfiguredError, UpstreamLibraryError
from ..models.template_models import (
    FavoriteRequest,
    FavoritesResponse,
    FavoriteUpdateResponse,
    TemplateCatalog,
)
from ..services.template_library_manager import get_template_library_manager

logger = logging.getLogger("style_kits.api.templates")

router = APIRouter()


@router.get("/templates/", response_model=TemplateCatalog)
async def get_templates(
    force_update: bool = Query(
        False, description="If true, bypass the server cache and refetch upstream"
    ),
):
    """
    Get the template catalog.

    Returns:
        TemplateCatalog: ``{templates, count, timestamp}``
    """
    try:
        manager = await get_template_library_manager()
        return await manager.get_catalog(force_update=force_update)
    except LibraryNotConfiguredError as e:
        logger.error(f"Template library not configured: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except UpstreamLibraryError as e:
        logger.error(f"Upstream template library failed: {e}")
        raise HTTPException(
            status_code=502, detail=f"Failed to fetch template library: {e}"
        )


@router.get("/favorites/", response_model=FavoritesResponse)
async def get_favorites(
    user_id: str = Header(DEFAULT_USER, alias=USER_HEADER),
):
    """Get the current user's favorite template ids."""
    manager = await get_template_library_manager()
    return FavoritesResponse(favorites=await manager.get_favorites(user_id))


@router.post("/mark_favorite/", response_model=FavoriteUpdateResponse)
async def mark_favorite(
    request: FavoriteRequest,
    user_id: str = Header(DEFAULT_USER, alias=USER_HEADER),
):
    """
    Mark or unmark a template as favorite.

    Returns:
        FavoriteUpdateResponse with the action taken and the updated favorites
    """
    manager = await get_template_library_manager()
    favorites = await manager.mark_favorite(user_id, request.template_id, request.favorite)
    action = "added" if request.favorite else "removed"
    logger.info(f"User {user_id} {action} favorite {request.template_id}")
    return FavoriteUpdateResponse(
        template_id=str(request.template_id), action=action, favorites=favorites
    )
