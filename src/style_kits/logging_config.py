"""
Logging configuration for Style Kits.

All logs go to stdout, errors are duplicated to stderr with call-site detail.

Usage:
    Import this module at the entry point (main.py or server.py) before any
    other imports that use logging.
"""

import logging
import logging.config
import os
import sys

# --- Log Level Setup ---
LOG_LEVEL = os.getenv("STYLE_KITS_LOG_LEVEL", "INFO").upper()

_PACKAGE_HANDLERS = ["console", "error_console"]


# --- Logging Configuration Dictionary ---
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "detailed": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "level": LOG_LEVEL,
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "standard",
        },
        "error_console": {
            "level": "ERROR",
            "class": "logging.StreamHandler",
            "stream": sys.stderr,
            "formatter": "detailed",
        },
    },
    "loggers": {
        "style_kits": {
            "handlers": _PACKAGE_HANDLERS,
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "style_kits.services": {
            "handlers": _PACKAGE_HANDLERS,
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "style_kits.api": {
            "handlers": _PACKAGE_HANDLERS,
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "style_kits.middleware": {
            "handlers": _PACKAGE_HANDLERS,
            "level": LOG_LEVEL,
            "propagate": False,
        },
        # HTTP client - request lines are noisy at INFO
        "httpx": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        # FastAPI/Uvicorn
        "uvicorn": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.access": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "fastapi": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": _PACKAGE_HANDLERS,
        "level": "INFO",
    },
}


# --- Apply Logging Configuration ---
logging.config.dictConfig(LOGGING_CONFIG)
