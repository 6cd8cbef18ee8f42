"""HTTP status values and declared-status markers for exception types.

An exception type declares the status it maps to either with the
``@response_status`` decorator or, for types that cannot be decorated
(builtins, third-party errors), through a ``StatusRegistry``.

Usage:
    @response_status(404)
    class UserNotFound(Exception):
        ...

    registry.register(PermissionError, 403)
"""

from collections.abc import Callable
from http import HTTPStatus
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

__all__ = [
    "INTERNAL_SERVER_ERROR",
    "StatusLookup",
    "StatusRegistry",
    "StatusType",
    "declared_status",
    "registry",
    "response_status",
]

_MARKER = "__response_status__"

E = TypeVar("E", bound=type[BaseException])


class StatusType(BaseModel):
    """HTTP status code paired with its reason phrase."""

    model_config = ConfigDict(frozen=True)

    code: int
    reason_phrase: str

    @classmethod
    def of(cls, code: int) -> "StatusType":
        """Build a status from a raw numeric code.

        Codes missing from ``http.HTTPStatus`` but inside 100-599 get an empty
        reason phrase.

        Raises:
            ValueError: If ``code`` is outside 100-599
        """
        try:
            status = HTTPStatus(code)
        except ValueError:
            if not 100 <= code < 600:
                raise
            return cls(code=code, reason_phrase="")
        return cls(code=status.value, reason_phrase=status.phrase)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.code < 600

    def __str__(self) -> str:
        return f"{self.code} {self.reason_phrase}"


INTERNAL_SERVER_ERROR = StatusType.of(HTTPStatus.INTERNAL_SERVER_ERROR)

StatusLookup = Callable[[type[BaseException]], StatusType | None]


def response_status(code: int) -> Callable[[E], E]:
    """Class decorator declaring the HTTP status an exception type maps to."""
    status = StatusType.of(code)

    def decorate(exc_type: E) -> E:
        setattr(exc_type, _MARKER, status)
        return exc_type

    return decorate


class StatusRegistry:
    """Explicit exception type -> status mapping, populated at startup."""

    def __init__(self) -> None:
        self._statuses: dict[type[BaseException], StatusType] = {}

    def register(self, exc_type: type[BaseException], code: int) -> None:
        self._statuses[exc_type] = StatusType.of(code)

    def unregister(self, exc_type: type[BaseException]) -> None:
        self._statuses.pop(exc_type, None)

    def lookup(self, exc_type: type[BaseException]) -> StatusType | None:
        """Find the status declared for ``exc_type`` or any of its bases.

        The MRO is walked nearest first. On each class a decorator marker
        takes precedence over a registry entry.
        """
        for klass in exc_type.__mro__:
            marker = vars(klass).get(_MARKER)
            if marker is not None:
                return marker
            if klass in self._statuses:
                return self._statuses[klass]
        return None


# Application-wide registry
registry = StatusRegistry()


def declared_status(exc_type: type[BaseException]) -> StatusType | None:
    """Merged status lookup against the application-wide registry."""
    return registry.lookup(exc_type)
