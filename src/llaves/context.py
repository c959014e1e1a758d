"""Lexical context oracle: comments and math-mode depth.

Computes, from the buffer text alone, which positions are inside ``%``
comments and how deeply math mode is nested at every boundary. Math mode is
entered and left by ``$``, ``$$``, ``\\(`` ``\\)``, ``\\[`` ``\\]`` and by
``\\begin``/``\\end`` of the configured math environments.

Depth changes take effect at the end of the toggling token, so for ``$x$``
the depth is 0 at offset 0, 1 at offsets 1 and 2, and 0 again at offset 3.
A toggle token therefore shows different depths on its two sides; an
escaped ``\\$`` shows the same depth on both sides.

The analysis is recomputed lazily whenever the buffer revision changes.
Queries are O(log n) via ``bisect``.

Example:
    >>> from llaves.buffer import StringBuffer
    >>> oracle = LexicalContextOracle(StringBuffer("a $x$ % $"))
    >>> [oracle.math_depth(i) for i in range(6)]
    [0, 0, 0, 1, 1, 0]
    >>> oracle.is_comment(8)
    True

"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterable

from llaves.config import DEFAULT_MATH_ENVIRONMENTS
from llaves.protocols import TextBuffer

_ENV_RE = re.compile(r"\\(begin|end)\{([^{}]*)\}")


class LexicalContextOracle:
    """ContextOracle backed by a lexical scan of the buffer.

    Thread Safety:
        Not thread-safe; bound to one buffer.

    """

    __slots__ = (
        "_buffer",
        "_math_environments",
        "_revision",
        "_comment_starts",
        "_comment_ends",
        "_depth_offsets",
        "_depth_values",
    )

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        math_environments: Iterable[str] = DEFAULT_MATH_ENVIRONMENTS,
    ) -> None:
        self._buffer = buffer
        self._math_environments = frozenset(math_environments)
        self._revision = -1
        self._comment_starts: list[int] = []
        self._comment_ends: list[int] = []
        self._depth_offsets: list[int] = [0]
        self._depth_values: list[int] = [0]

    def is_comment(self, pos: int) -> bool:
        self._refresh()
        idx = bisect_right(self._comment_starts, pos) - 1
        return idx >= 0 and pos < self._comment_ends[idx]

    def math_depth(self, pos: int) -> int:
        self._refresh()
        idx = bisect_right(self._depth_offsets, pos) - 1
        return self._depth_values[idx] if idx >= 0 else 0

    def comment_ranges(self) -> list[tuple[int, int]]:
        """All comment spans as [start, end) pairs."""
        self._refresh()
        return list(zip(self._comment_starts, self._comment_ends, strict=True))

    def _refresh(self) -> None:
        revision = self._buffer.revision
        if revision == self._revision:
            return
        self._analyze(self._buffer.substring(0, len(self._buffer)))
        self._revision = revision

    def _analyze(self, text: str) -> None:
        comment_starts: list[int] = []
        comment_ends: list[int] = []
        offsets = [0]
        values = [0]
        depth = 0
        inline_open = False
        display_open = False

        def record(offset: int) -> None:
            if offsets[-1] == offset:
                values[-1] = depth
            else:
                offsets.append(offset)
                values.append(depth)

        i = 0
        n = len(text)
        while i < n:
            char = text[i]
            if char == "%":
                end = text.find("\n", i)
                if end == -1:
                    end = n
                comment_starts.append(i)
                comment_ends.append(end)
                i = end
                continue
            if char == "\\":
                nxt = text[i + 1 : i + 2]
                if nxt and nxt in "([":
                    depth += 1
                    i += 2
                    record(i)
                    continue
                if nxt and nxt in ")]":
                    depth = max(0, depth - 1)
                    i += 2
                    record(i)
                    continue
                match = _ENV_RE.match(text, i)
                if match is not None:
                    i = match.end()
                    if match.group(2) in self._math_environments:
                        if match.group(1) == "begin":
                            depth += 1
                        else:
                            depth = max(0, depth - 1)
                        record(i)
                    continue
                # Escaped character or control word prefix
                i += 2
                continue
            if char == "$":
                if text.startswith("$$", i) and not inline_open:
                    depth = depth - 1 if display_open else depth + 1
                    depth = max(0, depth)
                    display_open = not display_open
                    i += 2
                else:
                    depth = depth - 1 if inline_open else depth + 1
                    depth = max(0, depth)
                    inline_open = not inline_open
                    i += 1
                record(i)
                continue
            i += 1

        self._comment_starts = comment_starts
        self._comment_ends = comment_ends
        self._depth_offsets = offsets
        self._depth_values = values
