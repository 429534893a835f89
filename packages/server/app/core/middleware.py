"""
HTTP middleware: permissive CORS headers, preflight replies, last-resort 500s.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.errors import GENERIC_ERROR_MESSAGE, error_response

log = structlog.get_logger()

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Attach CORS headers to every response.

    OPTIONS requests are answered here with an empty 200, before routing, so
    every collection accepts preflight without declaring it.
    """

    def __init__(self, app, allow_origin: str = "*"):
        super().__init__(app)
        self._headers = cors_headers(allow_origin)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self._headers)

        response = await call_next(request)
        for header, value in self._headers.items():
            response.headers[header] = value
        return response


# ---------------------------------------------------------------------------
# Unhandled errors
# ---------------------------------------------------------------------------

class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Log anything the routers did not handle and answer with a generic 500."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception:
            log.exception(
                "request.unhandled_error",
                method=request.method,
                path=request.url.path,
            )
            return error_response(500, "INTERNAL_ERROR", GENERIC_ERROR_MESSAGE)
