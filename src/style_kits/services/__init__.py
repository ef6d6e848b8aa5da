"""
Services for Style Kits.

- template_browser: view-state controller over the fetched catalog
- template_client: HTTP client for the catalog and favorites endpoints
- favorites_store: favorite ids injected into the browser
- template_library_manager: server-side catalog cache and favorites storage
- redis_manager: shared Redis connection handling
"""

from .favorites_store import FavoritesStore
from .template_browser import BrowserStatus, TemplateBrowser
from .template_client import TemplateLibraryClient

__all__ = [
    "BrowserStatus",
    "FavoritesStore",
    "TemplateBrowser",
    "TemplateLibraryClient",
]
