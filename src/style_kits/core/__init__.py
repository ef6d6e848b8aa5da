"""
Core modules for Style Kits.

Key Modules:
- errors: Exception hierarchy shared by the controller, client and service
"""

from .errors import (
    CatalogFetchError,
    FavoriteUpdateError,
    LibraryNotConfiguredError,
    StyleKitsError,
    UpstreamLibraryError,
)

__all__ = [
    "StyleKitsError",
    "CatalogFetchError",
    "FavoriteUpdateError",
    "LibraryNotConfiguredError",
    "UpstreamLibraryError",
]
