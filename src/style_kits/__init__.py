"""
Style Kits - a template library browser for page-builder design kits.

Provides:
- A template browser controller (filter, sort, search and favorites views)
- An HTTP client for the remote template catalog and favorites endpoints
- The catalog service itself, with a Redis-backed cache and favorites storage
"""

from style_kits._version import __version__

__all__ = ["__version__"]
