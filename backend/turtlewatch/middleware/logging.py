"""
TurtleWatch Backend - Request Context & Access Logging
=======================================================

What:  Gives each request a correlation ID and writes one access line per
       request.
How:   The ID comes from the client's X-Request-ID header or a fresh UUID
       prefix. It lives in a ContextVar for the rest of the request, is
       echoed back in the X-Request-ID response header, and is stamped on
       every log record by RequestIdFilter (installed on the stdout handler
       in main.setup_logging), so service and error logs carry it too.

Access line:
    2025-06-14T06:12:44 [WARNING] [3f9a1c2e] turtlewatch.access: POST /api/nests/create 400 4.2ms from 10.0.0.7

    Level follows the status class (5xx ERROR, 4xx WARNING, else INFO);
    /health probes are logged at DEBUG. Request bodies are never logged
    (they carry passwords on /api/users routes).
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("turtlewatch.access")

# "-" outside of a request (startup, shutdown)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Adds `request_id` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def _level_for(path: str, status: int) -> int:
    if path == "/health":
        return logging.DEBUG
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        client_ip = request.client.host if request.client else "unknown"
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s raised after %.1fms from %s",
                request.method,
                request.url.path,
                (time.perf_counter() - start_time) * 1000,
                client_ip,
            )
            raise

        logger.log(
            _level_for(request.url.path, response.status_code),
            "%s %s %d %.1fms from %s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start_time) * 1000,
            client_ip,
        )
        response.headers["X-Request-ID"] = rid
        return response
