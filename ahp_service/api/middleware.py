"""
Custom middleware for the API.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ahp_service.utils.context import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 2.0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses with timing.

    Logs request completion with method, path, status code and duration.
    The correlation ID is added to the record by the log formatter.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_seconds = time.perf_counter() - start_time
        duration_ms = duration_seconds * 1000
        is_slow = duration_seconds > SLOW_REQUEST_SECONDS

        log_level = logging.WARNING if is_slow else logging.INFO
        logger.log(
            log_level,
            f"Request completed: {request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)",
            extra={
                "event": "request_completed",
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
                "is_slow_request": is_slow,
                "is_error": response.status_code >= 400,
            },
        )

        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.0f}"

        return response


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware managing the request correlation ID.

    - Reuses the X-Correlation-ID header or generates a new ID
    - Sets it in context for the lifetime of the request
    - Echoes it in the response headers
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
            set_correlation_id(correlation_id)
            request.state.correlation_id = correlation_id

            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id

            return response

        finally:
            clear_correlation_id()
