"""Sequence helpers used when trimming chained stack traces."""

from collections.abc import Sequence
from typing import Any

__all__ = ["length_of_trailing_partial_sublist", "trim_trailing"]


def length_of_trailing_partial_sublist(source: Sequence[Any], target: Sequence[Any]) -> int:
    """Return the length of the longest common suffix of ``source`` and ``target``.

    Elements are compared from the end of both sequences until the first
    mismatch, so the result is always the maximal shared suffix.

    Args:
        source: First sequence
        target: Second sequence

    Returns:
        Number of trailing elements the two sequences have in common
    """
    s = len(source) - 1
    t = len(target) - 1
    length = 0
    while length <= s and length <= t and source[s - length] == target[t - length]:
        length += 1
    return length


def trim_trailing(current: Sequence[Any], reference: Sequence[Any]) -> tuple[Any, ...]:
    """Drop the trailing elements ``current`` shares with ``reference``."""
    length = len(current) - length_of_trailing_partial_sublist(reference, current)
    return tuple(current[:length])
