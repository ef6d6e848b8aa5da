"""
Middleware package for FastAPI.
"""

from .error_handling import ErrorHandlingMiddleware, create_error_response
from .logging import LoggingMiddleware, RequestIDMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "ErrorHandlingMiddleware",
    "create_error_response",
]
