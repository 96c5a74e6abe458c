"""Middleware for logging API requests."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

PROXY_HEADERS = ("X-Forwarded-For", "X-Real-IP")


def client_ip(request: Request) -> str:
    """Originating client address; proxy headers win over the socket peer."""
    for header in PROXY_HEADERS:
        value = request.headers.get(header)
        if value:
            # X-Forwarded-For lists the original client first
            return value.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, client IP and duration for every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                "%s %s failed after %.1fms (client=%s)",
                request.method,
                request.url.path,
                elapsed_ms,
                client_ip(request),
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s in %.1fms (client=%s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client_ip(request),
        )
        return response
