"""HTTP middleware for status API request logging."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 1000

# Polled by dashboards; successful hits are only logged at DEBUG
QUIET_PATHS = frozenset({"/v1/health", "/v1/events"})


def response_log_level(path: str, status: int, duration_ms: float) -> int:
    """
    Level for a finished request.

    5xx is ERROR, 4xx and slow requests are WARNING, quiet paths are DEBUG and
    everything else is INFO.
    """
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path in QUIET_PATHS:
        return logging.DEBUG
    if duration_ms > SLOW_REQUEST_THRESHOLD_MS:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status and latency.

    SSE responses are timed to the first byte, not to stream close.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method
        path = request.url.path
        logger.debug("%s %s", method, path)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        level = response_log_level(path, response.status_code, duration_ms)
        slow = " SLOW" if duration_ms > SLOW_REQUEST_THRESHOLD_MS else ""
        logger.log(
            level,
            "%s %s -> %d (%.1fms)%s",
            method,
            path,
            response.status_code,
            duration_ms,
            slow,
        )
        return response
