"""
Exception hierarchy for Style Kits.

Controller and client failures surface as distinct types so callers can tell
a failed fetch apart from an empty catalog.
"""

from typing import Any, Dict, Optional


class StyleKitsError(Exception):
    """Base class for all Style Kits errors."""

    error_code = "STYLE_KITS_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.error_code, "message": self.message, **self.details}


class CatalogFetchError(StyleKitsError):
    """The template catalog could not be fetched (network failure or bad payload)."""

    error_code = "CATALOG_FETCH_FAILED"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        force_update: bool = False,
    ):
        super().__init__(
            message, {"status_code": status_code, "force_update": force_update}
        )
        self.status_code = status_code
        self.force_update = force_update


class FavoriteUpdateError(StyleKitsError):
    """Reading or changing favorites failed."""

    error_code = "FAVORITE_UPDATE_FAILED"

    def __init__(self, message: str, template_id: Optional[str] = None):
        super().__init__(message, {"template_id": template_id})
        self.template_id = template_id


class LibraryNotConfiguredError(StyleKitsError):
    """No upstream template library URL is configured."""

    error_code = "LIBRARY_NOT_CONFIGURED"


class UpstreamLibraryError(StyleKitsError):
    """The upstream template library returned an error or an unreadable payload."""

    error_code = "UPSTREAM_LIBRARY_ERROR"
