"""Exception handling package for FastAPI application.

Provides an exception hierarchy with declared statuses and the handlers that
turn every error into an RFC 7807 problem response.
"""

from .handlers import register_exception_handlers
from .http_exceptions import (
    AppError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    NotImplementedAppError,
    ServerError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnprocessableEntityError,
)

__all__ = [
    # Base exceptions
    "AppError",
    # Client exceptions (4xx)
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ForbiddenError",
    # Server Error (5xx)
    "InternalServerError",
    "NotFoundError",
    "NotImplementedAppError",
    "ServerError",
    "ServiceUnavailableError",
    "UnauthorizedError",
    "UnprocessableEntityError",
    # Handlers
    "register_exception_handlers",
]
