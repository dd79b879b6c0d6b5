"""
pagedemo — Request Logging Middleware
======================================

What:  One access log line per HTTP request.
How:   Measures time from middleware entry to response return and logs
       method, path, status, duration, request ID, client IP and, for
       page responses, the view that was rendered.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, IP, request ID, view name
    ❌ Don't log: request body, cookies, authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pagedemo.middleware.request_id import request_id_var
from pagedemo.views import VIEW_NAME_HEADER

logger = logging.getLogger("pagedemo.access")

# Paths polled by probes; logging them drowns out real traffic
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        # perf_counter: monotonic and high resolution
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        view_name = response.headers.get(VIEW_NAME_HEADER, "-")

        logger.log(
            log_level,
            "%s %s %d %.1fms view=%s [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            view_name,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "view_name": view_name,
            },
        )

        return response
