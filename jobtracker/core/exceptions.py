"""
Application error taxonomy.

Services raise these; the handlers in error_handlers.py turn them into the
structured error body. HTTP status codes live here so routes never need to
catch and re-map domain errors.
"""
from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a structured HTTP error response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str, validation_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.validation_errors = validation_errors


class ValidationFailedError(AppError):
    """Malformed or missing input, one message per offending field."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class ConflictError(AppError):
    """Duplicate username or email. Reported as 400 like other registration failures."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Conflict"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFoundError(AppError):
    """Resource absent, or present but not owned by the caller."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource Not Found"
