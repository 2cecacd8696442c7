"""
PhotoStash Backend - Access Log Middleware
============================================

What:  One access log line per HTTP request on the `photostash.access` logger.
How:   Times the rest of the stack. The line carries method, path, status,
       duration, response size, request id and client address; the same
       values are attached as `extra` fields for structured handlers.

Log level by outcome:
    5xx or unhandled exception → ERROR
    4xx                        → WARNING
    anything else              → INFO

GET /health is not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("photostash.access")

QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for the photo and image routes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        try:
            response = await call_next(request)
        except Exception:
            fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            logger.error(
                "%s %s failed after %.1fms [%s]",
                fields["method"],
                fields["path"],
                fields["duration_ms"],
                fields["request_id"],
                extra=fields,
            )
            raise

        fields["status"] = response.status_code
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        fields["bytes"] = response.headers.get("content-length", "-")

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms %sB [%s] from %s",
            fields["method"],
            fields["path"],
            fields["status"],
            fields["duration_ms"],
            fields["bytes"],
            fields["request_id"],
            fields["client_ip"],
            extra=fields,
        )
        return response
