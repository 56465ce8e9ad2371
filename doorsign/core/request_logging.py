"""One log line per HTTP request.

Lines carry the matched route template (``/api/members/{user_id}``) so
per-member traffic groups together, and the session user when there is one.
Successful health checks and SQLAdmin static assets only log at DEBUG.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from doorsign.core.logging import env_bool

logger = logging.getLogger("doorsign.request")

QUIET_PATH_PREFIXES = ("/health", "/admin/statics")


def level_for(path: str, status_code: int | None) -> int:
    if status_code is None or status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    if path.startswith(QUIET_PATH_PREFIXES):
        return logging.DEBUG
    return logging.INFO


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            status_code = response.status_code if response is not None else None
            duration_ms = round((time.perf_counter() - start) * 1000.0, 2)
            path = request.url.path
            extra: dict[str, Any] = {
                "method": request.method,
                "path": path,
                "route": _route_template(request),
                "status_code": status_code,
                "duration_ms": duration_ms,
                "client_ip": request.client.host if request.client else None,
            }
            # Session middleware wraps this one, so the cookie is already decoded.
            user_id = (request.scope.get("session") or {}).get("user_id")
            if user_id:
                extra["user_id"] = user_id

            logger.log(
                level_for(path, status_code),
                "%s %s -> %s (%.2fms)",
                request.method,
                path,
                status_code,
                duration_ms,
                extra=extra,
            )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach request logging unless LOG_REQUESTS is off."""
    if env_bool("LOG_REQUESTS", default=True):
        app.add_middleware(RequestLoggingMiddleware)
