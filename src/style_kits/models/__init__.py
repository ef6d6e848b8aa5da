"""
Pydantic models for the template catalog and the HTTP API.
"""

from .response_models import APIResponse, ErrorResponse
from .template_models import (
    FavoriteRequest,
    FavoritesResponse,
    FavoriteUpdateResponse,
    Template,
    TemplateCatalog,
    TemplateId,
)

__all__ = [
    "APIResponse",
    "ErrorResponse",
    "FavoriteRequest",
    "FavoritesResponse",
    "FavoriteUpdateResponse",
    "Template",
    "TemplateCatalog",
    "TemplateId",
]
