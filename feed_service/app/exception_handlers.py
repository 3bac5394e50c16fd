"""Global exception handlers for the FastAPI application.

Every error leaves the service as::

    {"error": <short title>, "message": <explanation>, "request_id": <id>}

Details of unexpected failures are logged, never returned.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from feed_service.core.database import NotFoundError
from feed_service.core.exceptions import AppException
from feed_service.core.schemas.error import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    extra: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, request_id=_get_request_id(request))
    content = body.model_dump(exclude_none=True)
    if extra:
        # Never let context override the fixed fields
        content = {**extra, **content}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException with its title and detail."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _error_response(request, exc.status_code, exc.title, exc.detail, extra=exc.extra)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map repository-level NotFoundError to a 404."""
    logger.info(
        "Entity not found",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "model": exc.model_name,
        },
    )
    return _error_response(
        request, status.HTTP_404_NOT_FOUND, "Not found", f"{exc.model_name} not found"
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 with per-field errors."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "errors": errors,
        },
    )

    body = ValidationErrorResponse(
        error="Invalid request",
        message=f"Request validation failed for {len(errors)} field(s)",
        request_id=_get_request_id(request),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) in the common shape."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error_response(
            request, exc.status_code, "Not found", "The requested resource was not found"
        )
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return _error_response(
            request,
            exc.status_code,
            "Method not allowed",
            "The requested method is not supported for this resource",
            headers=getattr(exc, "headers", None),
        )
    return _error_response(
        request,
        exc.status_code,
        AppException._default_title(exc.status_code),
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with a generic 500."""
    logger.exception(
        "Unhandled exception",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "Something went wrong",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
