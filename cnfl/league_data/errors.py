"""Error and result types shared by the league engines.

Recoverable failures (rule violations, unknown ids, bad credentials) are
returned as an ``OperationError`` inside an ``OperationResult``; only
infrastructure problems such as an unreadable snapshot raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .store.state import LeagueState


class LeagueDataError(RuntimeError):
    """Raised when a league snapshot cannot be read or written."""


@dataclass(frozen=True)
class OperationError:
    code: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class OperationResult:
    """Outcome of an engine operation.

    ``state`` is always the snapshot to keep using: the new one on success, the
    untouched input on failure.
    """

    state: "LeagueState"
    error: Optional[OperationError] = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, state: "LeagueState", code: str, message: str) -> OperationResult:
        return cls(state=state, error=OperationError(code=code, message=message))


NOT_FOUND = "not_found"
INVALID = "invalid"
CONFLICT = "conflict"
FORBIDDEN = "forbidden"
UNAUTHENTICATED = "unauthenticated"
