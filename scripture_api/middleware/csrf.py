"""Double-submit cookie CSRF check for cookie-authenticated writes."""
from __future__ import annotations

import logging
import secrets
from typing import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from scripture_api.config import get_settings

logger = logging.getLogger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})


class CSRFMiddleware(BaseHTTPMiddleware):
    """Reject unsafe requests carrying the auth cookie unless the CSRF header echoes the CSRF cookie.

    Requests authenticated only by an ``Authorization`` header are not
    subject to the check.
    """

    def __init__(self, app, settings=None, exempt_paths: Iterable[str] | None = None):
        super().__init__(app)
        self.settings = settings or get_settings()
        self.exempt_paths = tuple(exempt_paths or self.settings.csrf_exempt_paths)

    def _needs_check(self, request: Request) -> bool:
        if not self.settings.csrf_protection_enabled:
            return False
        if request.method.upper() in SAFE_METHODS:
            return False
        if request.url.path.startswith(self.exempt_paths):
            return False
        return bool(request.cookies.get(self.settings.auth_cookie_name))

    async def dispatch(self, request: Request, call_next):
        if not self._needs_check(request):
            return await call_next(request)

        csrf_cookie = request.cookies.get(self.settings.csrf_cookie_name) or ""
        csrf_header = request.headers.get(self.settings.csrf_header_name) or ""

        if not csrf_cookie or not csrf_header or not secrets.compare_digest(csrf_cookie, csrf_header):
            logger.warning(
                "CSRF check failed for %s %s (cookie=%s, header=%s)",
                request.method,
                request.url.path,
                bool(csrf_cookie),
                bool(csrf_header),
            )
            return JSONResponse(status_code=403, content={"detail": "Invalid CSRF token"})

        return await call_next(request)
