"""
Style Kits FastAPI server module.

Endpoints:
    TEMPLATE LIBRARY:
    GET /agwp/v1/templates/: Template catalog (``?force_update=true`` bypasses the cache)
    GET /agwp/v1/favorites/: Favorite template ids of the current user
    POST /agwp/v1/mark_favorite/: Mark or unmark a favorite

    HEALTH:
    GET /agwp/v1/health: Health check
    GET /agwp/v1/ready: Readiness check

Usage:
    style-kits serve --host 0.0.0.0 --port 8080
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

import style_kits.logging_config  # noqa: F401

from . import __version__
from .api import api_router
from .config.settings import CACHE_TTL, UPSTREAM_URL
from .middleware.error_handling import ErrorHandlingMiddleware
from .middleware.logging import LoggingMiddleware, RequestIDMiddleware

logger = logging.getLogger("style_kits.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Style Kits API server starting up...")
    logger.info(f"API version: {__version__}")
    if UPSTREAM_URL:
        logger.info(f"Upstream template library: {UPSTREAM_URL} (cache ttl {CACHE_TTL}s)")
    else:
        logger.warning(
            "⚠ No upstream template library configured (STYLE_KITS_UPSTREAM_URL); "
            "catalog requests will fail with 503"
        )

    try:
        from style_kits.services.redis_manager import get_redis_manager

        if await get_redis_manager().health_check():
            logger.info("✓ Redis connection healthy")
        else:
            logger.warning("⚠ Redis unavailable; catalog and favorites kept in memory")
    except Exception as e:
        logger.warning(f"⚠ Failed to check Redis connection: {e}")

    yield

    logger.info("Style Kits API server shutting down...")

    try:
        from style_kits.services.template_library_manager import (
            get_template_library_manager,
        )

        manager = await get_template_library_manager()
        await manager.cleanup()
    except Exception as e:
        logger.warning(f"Error cleaning up template library manager: {e}")

    try:
        from style_kits.services.redis_manager import get_redis_manager

        await get_redis_manager().cleanup()
        logger.info("Redis connections cleaned up")
    except Exception as e:
        logger.warning(f"Error cleaning up Redis connections: {e}")

    logger.info("Shutdown completed")


app = FastAPI(
    title="Style Kits Template Library API",
    description="Template catalog and favorites for the Style Kits library browser",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware in correct order (last added is first executed)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(LoggingMiddleware, log_requests=True, log_responses=True)
app.add_middleware(
    ErrorHandlingMiddleware, debug=os.getenv("DEBUG", "false").lower() == "true"
)

app.include_router(api_router)
