"""
Application settings and configuration.

Defaults come from ``config/library.yml``; environment variables override them.
This module only holds constants so it can be imported anywhere without cycles.
"""

import os

import yaml

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LIBRARY_CONFIG_PATH = os.getenv(
    "STYLE_KITS_CONFIG", os.path.join(BASE_DIR, "config", "library.yml")
)

# Load library configuration
with open(LIBRARY_CONFIG_PATH) as f:
    LIBRARY_CONFIG = yaml.safe_load(f) or {}

_upstream = LIBRARY_CONFIG.get("upstream", {})
_cache = LIBRARY_CONFIG.get("cache", {})
_client = LIBRARY_CONFIG.get("client", {})
_api = LIBRARY_CONFIG.get("api", {})

# Catalog service
UPSTREAM_URL = os.getenv("STYLE_KITS_UPSTREAM_URL", _upstream.get("url") or "")
UPSTREAM_TIMEOUT = float(
    os.getenv("STYLE_KITS_UPSTREAM_TIMEOUT", _upstream.get("timeout", 15.0))
)
CACHE_TTL = int(os.getenv("STYLE_KITS_CACHE_TTL", _cache.get("ttl", 86400)))
TEMPLATES_CACHE_KEY = _cache.get("templates_key", "style_kits:templates")
FAVORITES_KEY_PREFIX = _cache.get("favorites_key", "style_kits:favorites")

# Browser client
API_URL = os.getenv("STYLE_KITS_API_URL", _client.get("api_url", ""))
REQUEST_TIMEOUT = float(
    os.getenv("STYLE_KITS_REQUEST_TIMEOUT", _client.get("timeout", 10.0))
)
FETCH_MAX_ATTEMPTS = int(
    os.getenv("STYLE_KITS_FETCH_MAX_ATTEMPTS", _client.get("max_attempts", 1))
)

# HTTP API
API_PREFIX = _api.get("prefix", "/agwp/v1")
USER_HEADER = _api.get("user_header", "X-Style-Kits-User")
DEFAULT_USER = str(_api.get("default_user", "0"))
