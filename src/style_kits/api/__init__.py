"""
API package for Style Kits.

All routes are registered in routes.py.
"""

from style_kits.api.routes import register_routes

# Create and register all routes
api_router = register_routes()

__all__ = ["api_router"]
