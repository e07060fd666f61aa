# storefront/core/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    """
    Base class for errors raised by services and dependencies.

    Subclasses pin the HTTP status so callers only pass a message.
    The exception handlers in `main.py` render every error as
    `{"success": false, "message": ...}`.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
        )


class ValidationError(AppError):
    """Missing/malformed field, invalid quantity, invalid size."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: insufficient role"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"
