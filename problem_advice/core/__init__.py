"""
Core components for mapping exceptions to RFC 7807 problem responses.

This module contains the status markers, the problem document model, the
advice that builds and logs problems, and the logging setup.
"""

from .advice import ProblemAdvice
from .lists import length_of_trailing_partial_sublist
from .logging_config import setup_logging
from .problem import BLANK_TYPE, Problem, ProblemError, StackFrame, extract_stack_trace
from .response import PROBLEM_MEDIA_TYPE, ProblemResponse
from .status import (
    INTERNAL_SERVER_ERROR,
    StatusRegistry,
    StatusType,
    declared_status,
    registry,
    response_status,
)

__all__ = [
    "BLANK_TYPE",
    "INTERNAL_SERVER_ERROR",
    "PROBLEM_MEDIA_TYPE",
    "Problem",
    "ProblemAdvice",
    "ProblemError",
    "ProblemResponse",
    "StackFrame",
    "StatusRegistry",
    "StatusType",
    "declared_status",
    "extract_stack_trace",
    "length_of_trailing_partial_sublist",
    "registry",
    "response_status",
    "setup_logging",
]
