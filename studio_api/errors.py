"""Application error taxonomy.

Every failure a handler can report to a client is one of the classes below.
Each carries the HTTP status it maps to and a stable ``message``; the
exception handlers in ``studio_api.main`` turn them into JSON bodies.
"""

from typing import Any

from fastapi import status
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

# Postgres SQLSTATE for a statement cancelled by statement_timeout
QUERY_CANCELED = "57014"


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Body of the JSON error response."""
        return {"message": self.message}

    def headers(self) -> dict[str, str] | None:
        """Extra response headers, if any."""
        return None


class ValidationError(AppError):
    """Malformed or out-of-policy input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"

    def __init__(self, errors: list[dict[str, str | None]]):
        if not errors:
            errors = [{"field": None, "message": self.message}]
        self.errors = errors
        self.field = errors[0]["field"]
        super().__init__(errors[0]["message"])

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "field": self.field, "errors": self.errors}


class Unauthenticated(AppError):
    """No authenticated session for an operation that requires one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class InvalidCredentials(AppError):
    """Login failed. Deliberately silent about which part was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class DuplicateResource(AppError):
    """A uniqueness constraint would be violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class DuplicateEmail(DuplicateResource):
    """A user with this email is already registered."""

    message = "User already exists"


class NotFound(AppError):
    """Referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class RateLimited(AppError):
    """Request budget for this client is exhausted."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many requests from this IP, please try again later."

    def __init__(self, retry_after: int, message: str | None = None):
        self.retry_after = retry_after
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "retryAfter": self.retry_after}

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}


class UpstreamTimeout(AppError):
    """Database connection or query did not complete in time. Safe to retry."""

    message = "The service is temporarily unavailable, please retry"


class SessionStoreUnavailable(AppError):
    """The session table could not be read or written."""

    message = "Session store unavailable"


def is_timeout(exc: SQLAlchemyError) -> bool:
    """Whether a database error is a pool or statement timeout."""
    if isinstance(exc, PoolTimeoutError):
        return True
    if isinstance(exc, OperationalError):
        return getattr(exc.orig, "pgcode", None) == QUERY_CANCELED
    return False
