"""Exception handlers for FastAPI application.

Every handler delegates to the ``ProblemAdvice`` stored on ``app.state`` so
all errors leave the application as ``application/problem+json``.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..advice import ProblemAdvice
from ..problem import ProblemError
from ..response import ProblemResponse
from ..status import StatusType
from .http_exceptions import AppError


def get_advice(request: Request) -> ProblemAdvice:
    """Return the advice registered on the application."""
    return request.app.state.problem_advice


async def problem_exception_handler(request: Request, exc: ProblemError) -> ProblemResponse:
    """Handle exceptions that already carry a problem document.

    Args:
        request: FastAPI request
        exc: Exception wrapping a Problem

    Returns:
        Problem response built from the carried document
    """
    return get_advice(request).create_from_problem(exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> ProblemResponse:
    """Handle Starlette/FastAPI HTTPException using its own status code.

    Args:
        request: FastAPI request
        exc: HTTP exception raised by a route or by routing itself

    Returns:
        Problem response with the exception's status and headers
    """
    return get_advice(request).create(
        exc,
        status=StatusType.of(exc.status_code),
        headers=getattr(exc, "headers", None),
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
    )


async def app_exception_handler(request: Request, exc: AppError) -> ProblemResponse:
    """Handle custom AppError and its subclasses.

    Args:
        request: FastAPI request
        exc: Application exception

    Returns:
        Problem response with the status declared on the exception type
    """
    return get_advice(request).create(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ProblemResponse:
    """Handle Pydantic validation errors (422).

    Args:
        request: FastAPI request
        exc: Validation error

    Returns:
        Problem response listing each violation
    """
    violations = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return get_advice(request).create(
        exc,
        status=StatusType.of(422),
        violations=violations,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> ProblemResponse:
    """Handle every other exception through the declared-status lookup.

    Starlette runs this handler from its server error middleware, which
    re-raises the exception once the response has been sent.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        Problem response, 500 unless a status is declared along the cause chain
    """
    return get_advice(request).create(exc)


def register_exception_handlers(app: Any, advice: ProblemAdvice | None = None) -> ProblemAdvice:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
        advice: Advice to use, a default one when omitted

    Returns:
        The advice stored on ``app.state.problem_advice``
    """
    advice = advice or ProblemAdvice()
    app.state.problem_advice = advice
    app.add_exception_handler(ProblemError, problem_exception_handler)
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    return advice
