"""Generic single-unit scanner.

Steps over one minimal lexical unit, knowing nothing about the delimiter
vocabulary:

- a run of word characters (letters, digits, ``_``, ``@``)
- a control word (``\\alpha``) or control symbol (``\\$``)
- otherwise, one punctuation character

Leading whitespace in the scan direction is skipped first. Expression
movement compares this step with the nearest delimiter to decide between an
atom and a balanced group.

Example:
    >>> from llaves.buffer import StringBuffer
    >>> from llaves.tokens import Direction
    >>> scanner = WordScanner(StringBuffer("  \\\\alpha+x2"))
    >>> scanner.step(0, Direction.FORWARD)
    8
    >>> scanner.step(11, Direction.BACKWARD)
    9

"""

from __future__ import annotations

from llaves.protocols import TextBuffer
from llaves.tokens import Direction

WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

CONTROL_LETTERS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ@"
)

# Initial read window; doubled while a unit runs into the window edge
_WINDOW = 256


def is_word_char(char: str) -> bool:
    return char.isalnum() or char in "_@"


def scan_unit_forward(text: str, i: int) -> int | None:
    """Index just past the unit starting at or after i, or None."""
    n = len(text)
    while i < n and text[i] in WHITESPACE:
        i += 1
    if i >= n:
        return None
    char = text[i]
    if char == "\\":
        j = i + 1
        while j < n and text[j] in CONTROL_LETTERS:
            j += 1
        if j > i + 1:
            return j
        return min(i + 2, n)
    if is_word_char(char):
        j = i + 1
        while j < n and is_word_char(text[j]):
            j += 1
        return j
    return i + 1


def scan_unit_backward(text: str, j: int) -> int | None:
    """Index of the start of the unit ending at or before j, or None."""
    while j > 0 and text[j - 1] in WHITESPACE:
        j -= 1
    if j <= 0:
        return None
    char = text[j - 1]
    if is_word_char(char):
        k = j - 1
        while k > 0 and is_word_char(text[k - 1]):
            k -= 1
        # \name: the backslash belongs to the leading letters
        letters = k
        while letters < j and text[letters] in CONTROL_LETTERS:
            letters += 1
        if k > 0 and text[k - 1] == "\\" and letters > k:
            if letters == j:
                return k - 1
            return letters
        return k
    if j >= 2 and text[j - 2] == "\\":
        return j - 2
    return j - 1


class WordScanner:
    """UnitScanner over a TextBuffer.

    Thread Safety:
        Stateless apart from the buffer reference.

    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer: TextBuffer) -> None:
        self._buffer = buffer

    def step(self, pos: int, direction: Direction) -> int | None:
        if direction is Direction.FORWARD:
            return self._step_forward(pos)
        return self._step_backward(pos)

    def _step_forward(self, pos: int) -> int | None:
        size = len(self._buffer)
        window = _WINDOW
        while True:
            end = min(size, pos + window)
            text = self._buffer.substring(pos, end)
            stop = scan_unit_forward(text, 0)
            if end == size:
                return None if stop is None else pos + stop
            if stop is not None and stop < len(text):
                return pos + stop
            window *= 2

    def _step_backward(self, pos: int) -> int | None:
        window = _WINDOW
        while True:
            start = max(0, pos - window)
            text = self._buffer.substring(start, pos)
            stop = scan_unit_backward(text, len(text))
            if start == 0:
                return None if stop is None else start + stop
            if stop is not None and stop > 0:
                return start + stop
            window *= 2
