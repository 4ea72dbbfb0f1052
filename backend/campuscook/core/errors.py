# campuscook/core/errors.py
# Error taxonomy + handlers. Every failure leaves the API as {"error", "message"}.
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campuscook.core.config import settings

log = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400
    error = "Validation Error"


class AuthenticationError(AppError):
    status_code = 401
    error = "Authentication Error"


class AuthorizationError(AppError):
    status_code = 403
    error = "Authorization Error"


class NotFoundError(AppError):
    status_code = 404
    error = "Not Found"


class ConflictError(AppError):
    status_code = 409
    error = "Conflict"


class InternalError(AppError):
    pass


_HTTP_CATEGORIES = {
    400: ValidationError.error,
    401: "Authentication Error",
    403: "Authorization Error",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
}


def error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg") or "Invalid request")
    # pydantic prefixes ValueError messages raised from validators
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    if first.get("type") == "missing" and loc:
        return f"{loc[-1]} is required"
    if loc:
        return f"{'.'.join(loc)}: {msg}"
    return msg


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=error_body(ValidationError.error, _first_validation_message(exc)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "The requested resource was not found"
    else:
        message = str(exc.detail)
    category = _HTTP_CATEGORIES.get(exc.status_code, "Error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(category, message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # last resort: anything a handler did not map
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.is_development else "An unexpected error occurred"
    return JSONResponse(status_code=500, content=error_body(InternalError.error, message))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
