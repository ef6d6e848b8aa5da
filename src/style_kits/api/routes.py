"""
Centralized API Routes Registry
"""

from fastapi import APIRouter

from style_kits.api.health import router as health_router
from style_kits.api.templates import router as templates_router
from style_kits.config.settings import API_PREFIX


def register_routes() -> APIRouter:
    """
    Register all API routes in one centralized location.

    Returns:
        APIRouter with all sub-routers included
    """
    api_router = APIRouter(prefix=API_PREFIX)

    # ========================================
    # TEMPLATE LIBRARY ROUTES
    # ========================================
    # GET  /agwp/v1/templates/?force_update=true - Template catalog
    # GET  /agwp/v1/favorites/ - Current user's favorites
    # POST /agwp/v1/mark_favorite/ - Mark or unmark a favorite
    api_router.include_router(templates_router, tags=["Template Library"])

    # ========================================
    # HEALTH ROUTES
    # ========================================
    # GET /agwp/v1/health - Health check
    # GET /agwp/v1/ready - Readiness check
    api_router.include_router(health_router, tags=["Health"])

    return api_router
