"""
Error handling middleware for FastAPI.

Renders exceptions that escape the route handlers as ``ErrorResponse`` JSON.
"""

import logging
import traceback

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.errors import (
    LibraryNotConfiguredError,
    StyleKitsError,
    UpstreamLibraryError,
)
from ..models import ErrorResponse

logger = logging.getLogger("style_kits.middleware.error_handling")

_STATUS_BY_ERROR = {
    LibraryNotConfiguredError: status.HTTP_503_SERVICE_UNAVAILABLE,
    UpstreamLibraryError: status.HTTP_502_BAD_GATEWAY,
}


def create_error_response(
    message: str,
    error_code: str,
    status_code: int,
    request_id: str = "unknown",
    details: dict = None,
) -> JSONResponse:
    """Build an ``ErrorResponse`` JSON response."""
    error_response = ErrorResponse(
        success=False,
        message=message,
        error_code=error_code,
        error_details={"request_id": request_id, **(details or {})},
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code, content=error_response.model_dump(mode="json")
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Global error handling middleware for FastAPI."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request through error handling middleware."""
        try:
            return await call_next(request)
        except Exception as e:
            return await self._handle_exception(request, e)

    async def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Handle different types of exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")

        if isinstance(exc, HTTPException):
            logger.warning(
                f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
                extra={"request_id": request_id, "url": str(request.url)},
            )
            return create_error_response(
                str(exc.detail),
                f"HTTP_{exc.status_code}",
                exc.status_code,
                request_id,
                {"status_code": exc.status_code},
            )

        if isinstance(exc, RequestValidationError):
            errors = [
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ]
            logger.warning(
                f"Validation error in request {request_id}: {len(errors)} errors",
                extra={"request_id": request_id, "url": str(request.url)},
            )
            return create_error_response(
                "Request validation failed",
                "VALIDATION_ERROR",
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                request_id,
                {"validation_errors": errors},
            )

        if isinstance(exc, StyleKitsError):
            status_code = _STATUS_BY_ERROR.get(
                type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
            )
            logger.error(
                f"{type(exc).__name__} in request {request_id}: {exc.message}",
                extra={"request_id": request_id, "url": str(request.url)},
            )
            return create_error_response(
                exc.message, exc.error_code, status_code, request_id, exc.details
            )

        return self._handle_generic_exception(request, exc, request_id)

    def _handle_generic_exception(
        self, request: Request, exc: Exception, request_id: str
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {exc}",
            extra={
                "request_id": request_id,
                "url": str(request.url),
                "method": request.method,
            },
            exc_info=True,
        )

        details = {"error_type": type(exc).__name__}
        if self.debug:
            details["traceback"] = traceback.format_exc().split("\n")

        return create_error_response(
            str(exc) if self.debug else "Internal server error",
            "INTERNAL_ERROR",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id,
            details,
        )
