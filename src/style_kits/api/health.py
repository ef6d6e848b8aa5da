"""
Health and readiness check API endpoints.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from style_kits import __version__
from style_kits.config.settings import LIBRARY_CONFIG
from style_kits.services.redis_manager import get_redis_manager
from style_kits.services.template_library_manager import get_template_library_manager

logger = logging.getLogger("style_kits.api.health")

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns 200 while the service can answer requests. A Redis outage only
    degrades the service, since the catalog falls back to memory.
    """
    try:
        redis_health = get_redis_manager().get_health_status()
        health_status = {
            "status": "healthy" if redis_health["healthy"] else "degraded",
            "service": "style-kits",
            "version": __version__,
            "checks": {
                "config_loaded": bool(LIBRARY_CONFIG),
            },
            "redis": {
                "healthy": redis_health["healthy"],
                "circuit_breaker_state": redis_health["circuit_breaker_state"],
            },
        }

        if not all(health_status["checks"].values()):
            health_status["status"] = "unhealthy"
            return JSONResponse(status_code=503, content=health_status)

        return health_status
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503, content={"status": "unhealthy", "error": str(e)}
        )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint.

    Ready once an upstream template library is configured.
    """
    try:
        manager = await get_template_library_manager()
        library_status = manager.get_status()
        ready_status = {
            "status": "ready",
            "service": "style-kits",
            "checks": {
                "upstream_configured": library_status["upstream_configured"],
            },
            "library": library_status,
        }

        if not all(ready_status["checks"].values()):
            ready_status["status"] = "not_ready"
            return JSONResponse(status_code=503, content=ready_status)

        return ready_status
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503, content={"status": "not_ready", "error": str(e)}
        )
