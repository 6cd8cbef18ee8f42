"""RFC 7807 problem documents and captured stack frames."""

import traceback
from collections.abc import Sequence
from types import FrameType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .status import StatusType

__all__ = [
    "BLANK_TYPE",
    "Problem",
    "ProblemError",
    "StackFrame",
    "extract_stack_trace",
]

BLANK_TYPE = "about:blank"


class StackFrame(BaseModel):
    """A single captured frame, compared by value."""

    model_config = ConfigDict(frozen=True)

    filename: str
    lineno: int | None = None
    name: str

    def __str__(self) -> str:
        return f"{self.name} ({self.filename}:{self.lineno})"


class Problem(BaseModel):
    """Structured error document (``application/problem+json``).

    Unknown keyword arguments are kept as extension members and serialized
    next to the standard ones. The stack trace is diagnostic only and is
    left out of the wire shape unless explicitly requested.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = BLANK_TYPE
    title: str | None = None
    status: StatusType | None = None
    detail: str | None = None
    instance: str | None = None
    cause: "Problem | None" = None
    stack_trace: tuple[StackFrame, ...] = Field(default=(), exclude=True)

    @field_serializer("status")
    def _serialize_status(self, status: StatusType | None) -> int | None:
        return status.code if status is not None else None

    def with_stack_trace(self, stack_trace: tuple[StackFrame, ...]) -> "Problem":
        """Return a copy of this document carrying ``stack_trace``."""
        return self.model_copy(update={"stack_trace": tuple(stack_trace)})

    def to_dict(self, include_stack_trace: bool = False) -> dict[str, Any]:
        """Render the wire shape, omitting empty members.

        Args:
            include_stack_trace: Add a ``stackTrace`` member on every level

        Returns:
            JSON-compatible dictionary
        """
        data = self.model_dump(mode="json", exclude_none=True, exclude={"cause"})
        if self.cause is not None:
            data["cause"] = self.cause.to_dict(include_stack_trace)
        if include_stack_trace and self.stack_trace:
            data["stackTrace"] = [str(frame) for frame in self.stack_trace]
        return data


class ProblemError(Exception):
    """Exception carrying a ready-made problem document.

    Raise it when the caller already knows exactly what the client should see:

        raise ProblemError(Problem(title="Out of stock", status=StatusType.of(409)))
    """

    def __init__(self, problem: Problem) -> None:
        super().__init__(problem.detail or problem.title or "")
        self.problem = problem


def _walk(
    exc: BaseException,
    enclosing: list[tuple[FrameType, int | None]] | None = None,
) -> list[tuple[FrameType, int | None]]:
    tb = exc.__traceback__
    if tb is None:
        return []

    frames = list(traceback.walk_tb(tb))
    frames.reverse()
    catching = tb.tb_frame
    if enclosing is not None:
        # The enclosing exception passed through the frame that caught exc,
        # so its frames from there on are exc's callers too.
        for index, (frame, _) in enumerate(enclosing):
            if frame is catching:
                frames.extend(enclosing[index + 1 :])
                return frames
    if catching.f_back is not None:
        frames.extend(traceback.walk_stack(catching.f_back))
    return frames


def extract_stack_trace(
    exc: BaseException,
    enclosing: Sequence[BaseException] = (),
) -> tuple[StackFrame, ...]:
    """Return the frames captured for ``exc``, raise site first.

    The traceback only spans the frames between the raise and the handler
    that caught the exception, so the callers above the catching frame are
    appended to give the full stack.

    A finished frame, such as a returned coroutine, no longer links to its
    caller. A cause caught in such a frame therefore takes its callers from
    the exceptions wrapping it, passed outermost first as ``enclosing``. An
    exception that was never raised has no frames.
    """
    walk = None
    for outer in enclosing:
        walk = _walk(outer, walk)

    return tuple(
        StackFrame(filename=frame.f_code.co_filename, lineno=lineno, name=frame.f_code.co_name)
        for frame, lineno in _walk(exc, walk)
    )
