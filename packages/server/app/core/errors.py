"""
Error taxonomy and the JSON error envelope.

Every non-2xx response has the shape::

    {"error": {"code": "...", "message": "...", "status": 400, "errors": [...]}}
"""

from __future__ import annotations

from typing import Iterable, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from resource_tracker_shared.schemas.common import ErrorDetail, ErrorResponse

log = structlog.get_logger()

GENERIC_ERROR_MESSAGE = "An internal server error occurred"


class ApiError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])


class ValidationFailed(ApiError):
    status_code = 400
    code = "VALIDATION_FAILED"

    def __init__(self, errors: Iterable[str], message: str = "Validation failed"):
        super().__init__(message, errors)


class MalformedRequest(ApiError):
    status_code = 400
    code = "MALFORMED_REQUEST"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"


_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    errors: Optional[list[str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, status=status_code, errors=errors or [])
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude={"data"}))


def describe_validation_errors(raw_errors: Iterable[dict]) -> list[str]:
    """Turn Pydantic error dicts into short human-readable messages."""
    messages = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc)
        if err.get("type") == "missing":
            messages.append(f"{field or 'Request body'} is required")
            continue
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            # custom validators already name the field
            messages.append(msg[len("Value error, "):])
        elif field:
            messages.append(f"{field}: {msg}")
        else:
            messages.append(msg)
    return messages


def translate_validation_error(exc: RequestValidationError) -> ApiError:
    raw = exc.errors()
    if any(err.get("type") == "json_invalid" for err in raw):
        return MalformedRequest("Invalid JSON in request body")
    return ValidationFailed(describe_validation_errors(raw))


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.message, exc.errors)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = translate_validation_error(exc)
    log.info("request.rejected", path=request.url.path, method=request.method, code=err.code)
    return error_response(err.status_code, err.code, err.message, err.errors)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        message = f"Method {request.method} not allowed"
    else:
        message = str(exc.detail)
    response = error_response(
        exc.status_code, _HTTP_CODES.get(exc.status_code, "HTTP_ERROR"), message
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
