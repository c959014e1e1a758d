"""Token definitions shared by the matcher, classifier and navigation engine.

A DelimiterToken is one occurrence of a delimiter in the buffer: its literal
text, its span, and the category it was recognized as.

Thread Safety:
DelimiterToken is frozen (immutable) and safe to share across threads.
TokenKind, Role and Direction are enums (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Delimiter categories."""

    BRACKET = auto()  # ( [ \{ \langle
    SIZED_BRACKET = auto()  # \left( \bigr] \big\{
    IRREGULAR = auto()  # { \( \[ ``
    ENVIRONMENT = auto()  # \begin{name} \end{name}
    COMMAND_BRACE = auto()  # \textbf{
    MATH_TOGGLE = auto()  # $ $$


class Role(Enum):
    """Whether a token opens or closes a group at its occurrence."""

    OPEN = auto()
    CLOSE = auto()


class Direction(Enum):
    """Scan direction."""

    FORWARD = 1
    BACKWARD = -1

    @property
    def reverse(self) -> "Direction":
        """The opposite direction."""
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


@dataclass(frozen=True, slots=True)
class DelimiterToken:
    """A delimiter occurrence in the buffer.

    Attributes:
        text: The literal text of the token (e.g. "\\bigl[")
        start: Offset of the first character
        end: Offset one past the last character
        kind: Category the token was recognized as

    """

    text: str
    start: int
    end: int
    kind: TokenKind

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"DelimiterToken({self.kind.name}, {self.text!r}, {self.start}:{self.end})"
