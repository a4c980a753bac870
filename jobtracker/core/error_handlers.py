"""
Exception handlers producing the structured error body.

Every error leaves the API as:
    {"timestamp", "status", "error", "message", "validationErrors"?}
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobtracker.core.exceptions import AppError, UnauthorizedError, ValidationFailedError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def error_response(
    status_code: int,
    error: str,
    message: str,
    validation_errors: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the JSON error body shared by every handler."""
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
    }
    if validation_errors:
        body["validationErrors"] = validation_errors
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_name(loc) -> str:
    # ("body", "title") -> "title"; ("query", "page") -> "page"; ("body",) -> "body"
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


def collect_field_errors(exc: RequestValidationError) -> Dict[str, str]:
    """Map each offending field to its first validation message."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        # Unparseable JSON is located by character offset; report it against the body
        if err.get("type") == "json_invalid":
            field = "body"
        else:
            field = _field_name(err.get("loc", ()))
        message = err.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        errors.setdefault(field, message)
    return errors


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return error_response(
        exc.status_code,
        exc.error,
        exc.message,
        validation_errors=exc.validation_errors,
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = collect_field_errors(exc)
    logger.debug(f"Request validation failed: path={request.url.path}, fields={list(field_errors)}")
    return await app_error_handler(
        request, ValidationFailedError("Input validation failed", field_errors)
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error = "Resource Not Found" if exc.status_code == status.HTTP_404_NOT_FOUND else "Request Failed"
    return error_response(
        exc.status_code,
        error,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
