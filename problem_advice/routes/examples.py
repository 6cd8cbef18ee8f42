"""Example routes demonstrating problem responses.

Run the application and test:
    curl http://localhost:8000/api/test/success
    curl http://localhost:8000/api/test/not-found
    curl http://localhost:8000/api/test/server-error
    curl http://localhost:8000/api/test/wrapped
"""

from fastapi import APIRouter

from problem_advice.core.exceptions import InternalServerError, NotFoundError
from problem_advice.core.problem import Problem, ProblemError
from problem_advice.core.status import StatusType

router = APIRouter(prefix="/api/test", tags=["Testing"])


def _load_user(user_id: int) -> dict:
    raise NotFoundError(f"User {user_id} does not exist")


@router.get("/success")
async def success() -> dict:
    """Test successful response."""
    return {"message": "Success!"}


@router.get("/not-found")
async def not_found() -> dict:
    """Test 404 exception."""
    raise NotFoundError("User not found")


@router.get("/server-error")
async def server_error() -> dict:
    """Test 500 exception."""
    raise InternalServerError("Database connection failed")


@router.get("/wrapped")
async def wrapped() -> dict:
    """Test a cause chain; the 404 of the cause decides the status."""
    try:
        return _load_user(123)
    except NotFoundError as exc:
        raise RuntimeError("Profile unavailable") from exc


@router.get("/problem")
async def problem() -> dict:
    """Test a ready-made problem document."""
    raise ProblemError(
        Problem(
            type="https://example.org/problems/out-of-stock",
            title="Out of stock",
            status=StatusType.of(409),
            detail="Item B00027Y5QG is no longer available",
            product="B00027Y5QG",
        )
    )


@router.get("/unexpected-error")
async def unexpected_error() -> dict:
    """Test unexpected exception handling."""
    raise ValueError("Unexpected error occurred!")
