"""RFC 7807 problem responses for uncaught exceptions in FastAPI applications."""

from .core import (
    Problem,
    ProblemAdvice,
    ProblemError,
    ProblemResponse,
    StatusType,
    registry,
    response_status,
)
from .core.exceptions import register_exception_handlers

__all__ = [
    "Problem",
    "ProblemAdvice",
    "ProblemError",
    "ProblemResponse",
    "StatusType",
    "register_exception_handlers",
    "registry",
    "response_status",
]
