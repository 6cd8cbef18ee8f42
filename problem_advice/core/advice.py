"""Exception to problem document mapping.

``ProblemAdvice`` turns a caught exception into an RFC 7807 response:

    exception -> status -> Problem (+ causes) -> stack trace -> log -> response

Every step is a separate method so adopters can override one piece of the
policy, either by subclassing or by passing a different collaborator
(status lookup, logger, response processor) to the constructor.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from .lists import trim_trailing
from .problem import BLANK_TYPE, Problem, ProblemError, StackFrame, extract_stack_trace
from .response import ProblemResponse
from .status import INTERNAL_SERVER_ERROR, StatusLookup, StatusType, declared_status

if TYPE_CHECKING:
    from problem_advice.main_config import ProblemConfig

__all__ = ["ProblemAdvice"]

ResponseProcessor = Callable[[ProblemResponse], ProblemResponse]


class ProblemAdvice:
    """Maps exceptions to problem documents and problem responses."""

    def __init__(
        self,
        causal_chains_enabled: bool = False,
        stack_traces_enabled: bool = False,
        status_lookup: StatusLookup = declared_status,
        logger: structlog.stdlib.BoundLogger | None = None,
        response_processor: ResponseProcessor | None = None,
    ) -> None:
        """Create an advice.

        Args:
            causal_chains_enabled: Render ``__cause__`` chains as nested problems
            stack_traces_enabled: Serialize ``stackTrace`` members on the wire
            status_lookup: Exception type -> declared status, or None
            logger: structlog logger used by ``log``
            response_processor: Post-processing hook applied by ``process``
        """
        self._causal_chains_enabled = causal_chains_enabled
        self.stack_traces_enabled = stack_traces_enabled
        self.status_lookup = status_lookup
        self.logger = logger if logger is not None else structlog.get_logger("problem_advice")
        self.response_processor = response_processor

    @classmethod
    def from_config(cls, config: "ProblemConfig", **kwargs: Any) -> "ProblemAdvice":
        return cls(
            causal_chains_enabled=config.causal_chains_enabled,
            stack_traces_enabled=config.stack_traces_enabled,
            **kwargs,
        )

    @property
    def causal_chains_enabled(self) -> bool:
        return self._causal_chains_enabled

    # ------------------------------------------------------------------
    # Status resolution
    # ------------------------------------------------------------------

    def resolve_response_status(self, exc: BaseException) -> StatusType | None:
        """Declared status of ``exc``'s type, else of the first cause declaring one."""
        candidate = self.status_lookup(type(exc))
        if candidate is None and exc.__cause__ is not None:
            return self.resolve_response_status(exc.__cause__)
        return candidate

    def resolve_status(self, exc: BaseException) -> StatusType:
        return self.resolve_response_status(exc) or INTERNAL_SERVER_ERROR

    # ------------------------------------------------------------------
    # Problem building
    # ------------------------------------------------------------------

    def to_problem(
        self,
        exc: BaseException,
        status: StatusType | None = None,
        problem_type: str = BLANK_TYPE,
        enclosing: Sequence[BaseException] = (),
    ) -> Problem:
        """Build the problem document for ``exc`` with its stack trace attached.

        Args:
            exc: Caught exception
            status: Status to report; resolved from ``exc`` when omitted
            problem_type: Problem type URI
            enclosing: Exceptions wrapping ``exc``, outermost first

        Returns:
            Frozen problem document
        """
        if status is None:
            status = self.resolve_status(exc)
        problem = self.prepare(exc, status, problem_type, enclosing)
        return problem.with_stack_trace(self.create_stack_trace(exc, enclosing))

    def prepare(
        self,
        exc: BaseException,
        status: StatusType,
        problem_type: str,
        enclosing: Sequence[BaseException] = (),
    ) -> Problem:
        cause = exc.__cause__
        return Problem(
            type=problem_type,
            title=status.reason_phrase,
            status=status,
            detail=str(exc),
            cause=(
                self.to_problem(cause, enclosing=(*enclosing, exc))
                if cause is not None and self.causal_chains_enabled
                else None
            ),
        )

    def create_stack_trace(
        self,
        exc: BaseException,
        enclosing: Sequence[BaseException] = (),
    ) -> tuple[StackFrame, ...]:
        """Frames of ``exc`` minus the trailing frames shared with its cause."""
        current = extract_stack_trace(exc, enclosing)
        cause = exc.__cause__
        if cause is None or not self.causal_chains_enabled:
            return current
        return trim_trailing(current, extract_stack_trace(cause, (*enclosing, exc)))

    # ------------------------------------------------------------------
    # Response assembly
    # ------------------------------------------------------------------

    def log(self, exc: BaseException, problem: Problem, status: StatusType) -> None:
        if status.is_client_error:
            self.logger.warning(f"{status.reason_phrase}: {exc}")
        elif status.is_server_error:
            self.logger.error(status.reason_phrase, exc_info=exc)

    def fallback(
        self,
        exc: BaseException,
        problem: Problem,
        headers: Mapping[str, str] | None = None,
    ) -> ProblemResponse:
        status = problem.status or INTERNAL_SERVER_ERROR
        return ProblemResponse(
            problem,
            status_code=status.code,
            headers=headers,
            include_stack_trace=self.stack_traces_enabled,
        )

    def process(self, response: ProblemResponse) -> ProblemResponse:
        if self.response_processor is None:
            return response
        return self.response_processor(response)

    def create(
        self,
        exc: BaseException,
        status: StatusType | None = None,
        headers: Mapping[str, str] | None = None,
        problem_type: str = BLANK_TYPE,
        **extensions: Any,
    ) -> ProblemResponse:
        """Run the whole pipeline for ``exc`` and return the response.

        Keyword overrides, standard members or extension members, apply to the
        top-level document only.
        """
        problem = self.to_problem(exc, status, problem_type)
        if extensions:
            problem = problem.model_copy(update=extensions)
        self.log(exc, problem, problem.status or INTERNAL_SERVER_ERROR)
        return self.process(self.fallback(exc, problem, headers))

    def create_from_problem(
        self,
        exc: ProblemError,
        headers: Mapping[str, str] | None = None,
    ) -> ProblemResponse:
        """Respond with the document a ``ProblemError`` already carries."""
        problem = exc.problem
        if not problem.stack_trace:
            problem = problem.with_stack_trace(self.create_stack_trace(exc))
        self.log(exc, problem, problem.status or INTERNAL_SERVER_ERROR)
        return self.process(self.fallback(exc, problem, headers))
