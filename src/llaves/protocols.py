"""Protocols for the collaborators Llaves consumes.

The navigation core owns no text. It reads and edits through a TextBuffer,
asks a ContextOracle about comments and math mode, and consults a
UnitScanner for the single-unit step used by expression movement.

Reference implementations live in ``llaves.buffer``, ``llaves.context`` and
``llaves.scanner``; hosts with their own editing surface implement these
protocols instead.

Thread Safety:
    Protocols are purely structural. Implementations are used from one
    thread at a time; every navigation or edit call runs to completion
    before the next starts.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from llaves.tokens import Direction


@runtime_checkable
class TextBuffer(Protocol):
    """Editable text with a cursor and a mark ring.

    All offsets are character offsets into the buffer's current text.
    """

    @property
    def point(self) -> int:
        """Cursor position."""
        ...

    @point.setter
    def point(self, value: int) -> None: ...

    @property
    def revision(self) -> int:
        """Counter bumped by every change to the text."""
        ...

    def __len__(self) -> int: ...

    def substring(self, start: int, end: int) -> str:
        """Text in [start, end), clamped to the buffer."""
        ...

    def reversed_window(self, start: int, end: int) -> str:
        """Character-reversed text of [start, end)."""
        ...

    def insert(self, pos: int, text: str) -> None:
        """Insert text at pos. Point shifts when pos < point."""
        ...

    def delete(self, start: int, end: int) -> str:
        """Delete [start, end) and return the removed text."""
        ...

    def push_mark(self, pos: int | None = None) -> None: ...

    def pop_mark(self) -> int | None: ...

    def transaction(self) -> AbstractContextManager[None]:
        """Group edits; roll all of them back if the block raises."""
        ...


@runtime_checkable
class ContextOracle(Protocol):
    """Per-position syntactic context."""

    def is_comment(self, pos: int) -> bool:
        """True when the character at pos is inside a comment."""
        ...

    def math_depth(self, pos: int) -> int:
        """Math-mode nesting depth at the boundary before the character at pos."""
        ...


@runtime_checkable
class UnitScanner(Protocol):
    """Generic single-unit stepper, independent of the delimiter vocabulary."""

    def step(self, pos: int, direction: Direction) -> int | None:
        """Position after consuming one word, number or punctuation atom.

        Returns None when only whitespace lies in that direction.
        """
        ...
