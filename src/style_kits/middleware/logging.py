"""
Logging middleware for FastAPI.

Request/response logging and request ID tracking.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("style_kits.middleware.logging")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and its response time."""

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next):
        request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        if self.log_requests:
            logger.info(
                f"Request {request_id}: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": dict(request.query_params),
                    "client_ip": request.client.host if request.client else "unknown",
                },
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request {request_id} failed after {time.time() - start_time:.3f}s: {e}",
                extra={"request_id": request_id, "path": request.url.path},
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        if self.log_responses:
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                f"Response {request_id}: {response.status_code} - {process_time:.3f}s",
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time": process_time,
                },
            )

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Request ID middleware for tracking requests."""

    def __init__(self, app, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next):
        """Add request ID to request and response."""
        request_id = request.headers.get(self.header_name, str(uuid.uuid4()))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
