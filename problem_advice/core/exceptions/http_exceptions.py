"""Application exception hierarchy with declared HTTP statuses.

Exception Hierarchy:
    AppError (500)
    ├── ClientError (400)
    │   ├── BadRequestError (400)
    │   ├── UnauthorizedError (401)
    │   ├── ForbiddenError (403)
    │   ├── NotFoundError (404)
    │   ├── ConflictError (409)
    │   └── UnprocessableEntityError (422)
    └── ServerError (500)
        ├── InternalServerError (500)
        ├── NotImplementedAppError (501)
        └── ServiceUnavailableError (503)

Statuses are declared with ``@response_status`` and found through the MRO, so
a subclass without its own declaration maps like its closest declared base:

    class UserNotFound(NotFoundError):
        pass

    raise UserNotFound("User 123 does not exist")  # -> 404 Not Found

Wrapping keeps the declared status of the cause when the wrapper declares none:

    try:
        repo.load(user_id)
    except NotFoundError as exc:
        raise RuntimeError("Profile unavailable") from exc  # -> 404 Not Found
"""

from ..status import INTERNAL_SERVER_ERROR, StatusType, declared_status, response_status

__all__ = [
    "AppError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "NotImplementedAppError",
    "ServerError",
    "ServiceUnavailableError",
    "UnauthorizedError",
    "UnprocessableEntityError",
]


@response_status(500)
class AppError(Exception):
    """Base exception for all application HTTP errors."""

    default_message = "An error occurred"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    @property
    def status(self) -> StatusType:
        """Status declared for this exception's type."""
        return declared_status(type(self)) or INTERNAL_SERVER_ERROR


# ============================================================================
# Client Exceptions (4xx)
# ============================================================================


@response_status(400)
class ClientError(AppError):
    """Base exception for client errors (4xx)."""

    default_message = "Client error"


@response_status(400)
class BadRequestError(ClientError):
    """400 Bad Request - Invalid request parameters."""

    default_message = "Bad request"


@response_status(401)
class UnauthorizedError(ClientError):
    """401 Unauthorized - Authentication required."""

    default_message = "Unauthorized"


@response_status(403)
class ForbiddenError(ClientError):
    """403 Forbidden - Insufficient permissions."""

    default_message = "Forbidden"


@response_status(404)
class NotFoundError(ClientError):
    """404 Not Found - Resource does not exist."""

    default_message = "Not found"


@response_status(409)
class ConflictError(ClientError):
    """409 Conflict - Resource already exists or state conflict."""

    default_message = "Conflict"


@response_status(422)
class UnprocessableEntityError(ClientError):
    """422 Unprocessable Entity - Validation error."""

    default_message = "Unprocessable entity"


# ============================================================================
# Server Exceptions (5xx)
# ============================================================================


class ServerError(AppError):
    """Base exception for server errors (5xx). Inherits 500 from AppError."""

    default_message = "Server error"


@response_status(500)
class InternalServerError(ServerError):
    """500 Internal Server Error - Unexpected server error."""

    default_message = "Internal server error"


@response_status(501)
class NotImplementedAppError(ServerError):
    """501 Not Implemented - Feature not yet implemented."""

    default_message = "Not implemented"


@response_status(503)
class ServiceUnavailableError(ServerError):
    """503 Service Unavailable - Service temporarily unavailable."""

    default_message = "Service unavailable"
