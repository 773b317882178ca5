"""
FastAPI middleware for observability.

Request logging with correlation ID propagation.

Dependencies: fastapi, starlette, weekly_vote.observability
System role: Request/response observability injection
"""

import logging
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from weekly_vote.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with timing and echo a correlation ID header."""

    async def dispatch(self, request: Request, call_next):
        """
        Log HTTP request and response with timing.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response object carrying X-Correlation-ID
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path

        logger.info(
            f"{method} {path}",
            extra={
                "method": method,
                "path": path,
                "query_string": str(request.url.query) if request.url.query else None,
            },
        )

        try:
            response: Response = await call_next(request)
            process_time = time.perf_counter() - start_time

            logger.info(
                f"{method} {path} - {response.status_code}",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2),
                },
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.exception(
                f"{method} {path} - Exception",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": round(process_time * 1000, 2),
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            raise
        finally:
            clear_correlation_id()
