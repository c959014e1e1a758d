"""Match stack for one navigation call.

Tracks the tokens opened (forward) or closed (backward) so far. Popping
checks lexical correspondence and reports a mismatch as an outcome instead
of failing: ``\\left( ... )`` is legitimate and common.

Thread Safety:
MatchStack instances are single-use per navigation call.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from llaves.tokens import DelimiterToken, Direction
from llaves.utils.logger import get_logger

if TYPE_CHECKING:
    from llaves.matching.classifier import Classifier

logger = get_logger(__name__)


class PopOutcome(Enum):
    """Result of popping the stack."""

    MATCHED = auto()
    MISMATCHED = auto()


@dataclass(frozen=True, slots=True)
class Mismatch:
    """An opener/closer pair that does not correspond lexically.

    Attributes:
        opener: The opening token
        closer: The closing token
        expected: Opening text the closer corresponds to, if known

    """

    opener: DelimiterToken
    closer: DelimiterToken
    expected: str | None


class MatchStack:
    """LIFO of pending tokens.

    Forward scans push openers and pop on closers; backward scans push
    closers and pop on openers.

    Usage:
        stack = MatchStack(classifier, Direction.FORWARD)
        stack.push(open_token)
        if stack.pop(close_token) is PopOutcome.MISMATCHED:
            ...

    """

    __slots__ = ("_classifier", "_direction", "_items", "_mismatches")

    def __init__(self, classifier: Classifier, direction: Direction) -> None:
        self._classifier = classifier
        self._direction = direction
        self._items: list[DelimiterToken] = []
        self._mismatches: list[Mismatch] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def top(self) -> DelimiterToken | None:
        return self._items[-1] if self._items else None

    @property
    def mismatches(self) -> tuple[Mismatch, ...]:
        return tuple(self._mismatches)

    def push(self, token: DelimiterToken) -> None:
        self._items.append(token)

    def pop(self, token: DelimiterToken) -> PopOutcome:
        """Pop the top entry against the token that ends it.

        Raises:
            IndexError: If the stack is empty
        """
        popped = self._items.pop()
        if self._direction is Direction.FORWARD:
            opener, closer = popped, token
        else:
            opener, closer = token, popped
        if self._classifier.is_compatible(opener, closer):
            return PopOutcome.MATCHED
        expected = self._classifier.expected_open(closer)
        self._mismatches.append(Mismatch(opener, closer, expected))
        logger.debug(
            "Mismatched pair %r ... %r (expected opener %r)", opener.text, closer.text, expected
        )
        return PopOutcome.MISMATCHED
