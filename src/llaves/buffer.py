"""In-memory text buffer.

StringBuffer implements the TextBuffer protocol over a Python string. It is
the buffer used by ``Session`` when constructed from plain text, and the one
the test suite drives.

Point follows edits the way an editor cursor does: text inserted or deleted
strictly before point shifts it; point inside a deleted range collapses to
the start of that range.

Thread Safety:
    Not thread-safe. One navigation or edit call at a time.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class StringBuffer:
    """Editable string with point, mark ring and revision counter.

    Usage:
        >>> buf = StringBuffer("(a) b", point=1)
        >>> buf.delete(2, 3)
        ')'
        >>> buf.insert(4, ")")
        >>> buf.text
        '(a b)'

    """

    __slots__ = ("_text", "_point", "_marks", "_revision", "_depth")

    def __init__(self, text: str = "", point: int = 0) -> None:
        self._text = text
        self._point = 0
        self._marks: list[int] = []
        self._revision = 0
        self._depth = 0
        self.point = point

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"StringBuffer(len={len(self._text)}, point={self._point}, rev={self._revision})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def point(self) -> int:
        return self._point

    @point.setter
    def point(self, value: int) -> None:
        if not 0 <= value <= len(self._text):
            raise ValueError(f"point {value} outside buffer of length {len(self._text)}")
        self._point = value

    @property
    def mark(self) -> int | None:
        """Most recently pushed mark."""
        return self._marks[-1] if self._marks else None

    def substring(self, start: int, end: int) -> str:
        start = max(0, start)
        end = min(len(self._text), end)
        if start >= end:
            return ""
        return self._text[start:end]

    def reversed_window(self, start: int, end: int) -> str:
        return self.substring(start, end)[::-1]

    def char_at(self, pos: int) -> str:
        """Character at pos, or "" outside the buffer."""
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return ""

    def insert(self, pos: int, text: str) -> None:
        if not 0 <= pos <= len(self._text):
            raise ValueError(f"insert position {pos} outside buffer")
        if not text:
            return
        self._text = self._text[:pos] + text + self._text[pos:]
        if pos < self._point:
            self._point += len(text)
        self._marks = [m + len(text) if pos < m else m for m in self._marks]
        self._revision += 1

    def delete(self, start: int, end: int) -> str:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"delete range [{start}, {end}) outside buffer")
        removed = self._text[start:end]
        if not removed:
            return ""
        self._text = self._text[:start] + self._text[end:]
        self._point = _shift_for_delete(self._point, start, end)
        self._marks = [_shift_for_delete(m, start, end) for m in self._marks]
        self._revision += 1
        return removed

    def push_mark(self, pos: int | None = None) -> None:
        if pos is None:
            pos = self._point
        if not 0 <= pos <= len(self._text):
            raise ValueError(f"mark {pos} outside buffer")
        self._marks.append(pos)

    def pop_mark(self) -> int | None:
        return self._marks.pop() if self._marks else None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group edits; restore text, point and marks if the block raises.

        Nested transactions roll back to their own starting state.
        """
        snapshot = (self._text, self._point, list(self._marks))
        self._depth += 1
        try:
            yield
        except BaseException:
            changed = self._text != snapshot[0]
            self._text, self._point, self._marks = snapshot
            if changed:
                self._revision += 1
            raise
        finally:
            self._depth -= 1

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0


def _shift_for_delete(pos: int, start: int, end: int) -> int:
    if pos <= start:
        return pos
    if pos >= end:
        return pos - (end - start)
    return start
