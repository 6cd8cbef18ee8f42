"""Starlette response carrying a problem document."""

from collections.abc import Mapping
from typing import Any

from starlette.background import BackgroundTask
from starlette.responses import JSONResponse

from .problem import Problem

__all__ = ["PROBLEM_MEDIA_TYPE", "ProblemResponse"]

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemResponse(JSONResponse):
    """JSON response rendered from a ``Problem`` with the problem media type.

    The in-memory document stays available as ``response.problem``.
    """

    media_type = PROBLEM_MEDIA_TYPE

    def __init__(
        self,
        problem: Problem,
        status_code: int = 500,
        headers: Mapping[str, str] | None = None,
        include_stack_trace: bool = False,
        background: BackgroundTask | None = None,
    ) -> None:
        self.problem = problem
        self.include_stack_trace = include_stack_trace
        super().__init__(
            content=problem,
            status_code=status_code,
            headers=headers,
            media_type=PROBLEM_MEDIA_TYPE,
            background=background,
        )

    def render(self, content: Any) -> bytes:
        if isinstance(content, Problem):
            content = content.to_dict(include_stack_trace=self.include_stack_trace)
        return super().render(content)
