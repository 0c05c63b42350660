"""Application error taxonomy and its HTTP rendering.

Services raise subclasses of :class:`AppError`; the handlers registered by
:func:`register_exception_handlers` turn them into a JSON body of the form
``{"error": <code>, "detail": <message>}``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "invalid_request",
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_429_TOO_MANY_REQUESTS: "rate_limited",
}


class AppError(RuntimeError):
    """Base exception for failures that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, *, code: str | None = None) -> None:
        self.detail = detail or self.default_detail
        if code is not None:
            self.code = code
        super().__init__(self.detail)


class InvalidRequest(AppError):
    """Malformed, missing or contradictory input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"
    default_detail = "Invalid request"


class Unauthenticated(AppError):
    """No valid credentials were supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_detail = "Authentication required"


class Forbidden(AppError):
    """The caller is authenticated but may not perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_detail = "Forbidden"


class NotFound(AppError):
    """A referenced resource does not exist (or is not visible to the caller)."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Not found"


class Conflict(AppError):
    """The action collides with existing state."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_detail = "Conflict"


class RateLimited(AppError):
    """The caller exceeded an action quota."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
    default_detail = "Too many requests"


def error_body(code: str, detail: Any) -> dict[str, Any]:
    """Return the JSON envelope shared by every error response."""
    return {"error": code, "detail": detail}


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, exc.detail))


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _STATUS_CODES.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:  # pragma: no cover - FastAPI always reports at least one error
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("invalid_request", message),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope on *app*."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
