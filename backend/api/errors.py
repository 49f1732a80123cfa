"""
Exception handlers.

Every error leaving the API is rendered here into the same envelope:

    {"success": false, "message": "...", "errors": [...], "retryAfter": N}

Application errors carry their own status code; FastAPI and Starlette
errors are mapped onto the envelope so clients only ever see one shape.
"""

import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from modules.ratelimit import RateLimitExceededError
from modules.validation import RequestValidationError
from shared.exceptions import FinanceTrackerError

from .models.errors import ErrorResponse, FieldErrorItem

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    errors: Optional[list[FieldErrorItem]] = None,
    retry_after: Optional[int] = None,
    stack: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors, retry_after=retry_after, stack=stack)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers,
    )


async def handle_app_error(request: Request, exc: FinanceTrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return error_response(exc.status_code, exc.message, headers=exc.headers or None)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [FieldErrorItem(field=e.path, message=e.message) for e in exc.field_errors]
    return error_response(exc.status_code, exc.message, errors=errors, headers=exc.headers or None)


async def handle_rate_limit(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    return error_response(
        exc.status_code,
        exc.message,
        retry_after=exc.retry_after if exc.expose_retry_after else None,
        headers=exc.headers,
    )


async def handle_framework_validation(request: Request, exc: FastAPIValidationError) -> JSONResponse:
    errors = [
        FieldErrorItem(
            field=".".join(str(part) for part in error.get("loc", ())),
            message=error.get("msg", "Invalid value"),
        )
        for error in exc.errors()
    ]
    return error_response(400, "Validation errors", errors=errors)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "Route not found"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    settings = request.app.state.container.settings
    stack = "".join(traceback.format_exception(exc)) if settings.debug else None
    return error_response(500, "Internal Server Error", stack=stack)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers. Starlette picks the most specific class first."""
    app.add_exception_handler(RateLimitExceededError, handle_rate_limit)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(FinanceTrackerError, handle_app_error)
    app.add_exception_handler(FastAPIValidationError, handle_framework_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)
