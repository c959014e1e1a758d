"""Navigation outcomes.

Navigation never raises for ordinary failures. Every primitive returns a
NavResult; failures carry the original position so a caller that commits
``result.position`` never observes partial movement.

Thread Safety:
NavResult is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from llaves.navigation.stack import Mismatch
    from llaves.tokens import DelimiterToken


class NavStatus(Enum):
    """Terminal state of a navigation call."""

    SUCCESS = auto()
    UNMATCHED = auto()  # openers still on the stack at the horizon
    NOT_FOUND = auto()  # no usable delimiter before the horizon


@dataclass(frozen=True, slots=True)
class NavResult:
    """Outcome of a navigation call.

    Attributes:
        status: Terminal state
        position: Final position (the starting position on failure)
        token: Token that ended the call; for UNMATCHED, the innermost
            unmatched token
        at_boundary: The call stopped at the enclosing group's own
            terminator without consuming it
        mismatches: Lexically mismatched pairs popped along the way

    """

    status: NavStatus
    position: int
    token: DelimiterToken | None = None
    at_boundary: bool = False
    mismatches: tuple[Mismatch, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is NavStatus.SUCCESS

    @classmethod
    def success(
        cls,
        position: int,
        token: DelimiterToken | None = None,
        *,
        at_boundary: bool = False,
        mismatches: tuple[Mismatch, ...] = (),
    ) -> NavResult:
        return cls(NavStatus.SUCCESS, position, token, at_boundary, mismatches)

    @classmethod
    def failure(
        cls,
        status: NavStatus,
        position: int,
        token: DelimiterToken | None = None,
        *,
        mismatches: tuple[Mismatch, ...] = (),
    ) -> NavResult:
        return cls(status, position, token, False, mismatches)
