"""Token matcher: nearest delimiter in either direction.

Searching is two-step in both directions:

1. The compiled alternation locates the nearest boundary: the start of the
   nearest token (forward) or the end of the nearest token (backward, by
   searching reversed text with the reversed alternation).
2. The token at that boundary is re-derived as the longest candidate from
   the literal trie and the pattern tokens. A plain bracket is a suffix of
   its sized form (``(`` vs ``\\left(``), so the alternative the regex
   engine happens to try first is not necessarily the right one.

Every candidate passes through the ignore rule before it is returned:
tokens in comments, closing quotes inside math (primes), and math toggles
that do not change the math depth are skipped.

Thread Safety:
    TokenMatcher caches the last text window it read; use one matcher per
    buffer and one call at a time.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from llaves.matching.patterns import ASCII_LETTERS
from llaves.matching.trie import LiteralTrie
from llaves.tokens import DelimiterToken, Direction, TokenKind

if TYPE_CHECKING:
    from llaves.protocols import ContextOracle, TextBuffer
    from llaves.table import DelimiterTable, PatternSet


@dataclass(slots=True)
class _Window:
    """Cached slice of buffer text.

    Forward windows hold buffer[lo:hi]; backward windows hold the reversal
    of buffer[lo:hi], so reversed index j maps to buffer offset hi - j.
    """

    revision: int
    lo: int
    hi: int
    text: str


class TokenMatcher:
    """Finds delimiter tokens around a position.

    Usage:
        >>> matcher = TokenMatcher(table, buffer, oracle)
        >>> matcher.forward_find(0, len(buffer))
        DelimiterToken(SIZED_BRACKET, '\\\\left(', 0:6)

    """

    __slots__ = ("_table", "_buffer", "_oracle", "_ignore_comments", "_forward", "_backward")

    def __init__(
        self,
        table: DelimiterTable,
        buffer: TextBuffer,
        oracle: ContextOracle,
        *,
        ignore_comments: bool = True,
    ) -> None:
        self._table = table
        self._buffer = buffer
        self._oracle = oracle
        self._ignore_comments = ignore_comments
        self._forward: _Window | None = None
        self._backward: _Window | None = None

    @property
    def table(self) -> DelimiterTable:
        return self._table

    def find(
        self,
        pos: int,
        bound: int,
        direction: Direction,
        *,
        with_args: bool = False,
    ) -> DelimiterToken | None:
        """Nearest accepted token from pos toward bound."""
        if direction is Direction.FORWARD:
            return self.forward_find(pos, bound, with_args=with_args)
        return self.backward_find(pos, bound, with_args=with_args)

    # =========================================================================
    # Forward
    # =========================================================================

    def forward_find(
        self, pos: int, bound: int, *, with_args: bool = False
    ) -> DelimiterToken | None:
        """Nearest accepted token lying entirely within [pos, bound)."""
        if pos >= bound:
            return None
        window = self._forward_window(pos, bound)
        table = self._table
        regex = table.general_with_args if with_args else table.general
        patterns = table.forward_patterns_with_args if with_args else table.forward_patterns
        text = window.text
        i = pos - window.lo
        stop = bound - window.lo
        while i < stop:
            match = regex.search(text, i, stop)
            if match is None:
                return None
            token = self._longest_forward(text, match.start(), stop, window.lo, patterns)
            if token is None:
                i = match.start() + 1
                continue
            if self.is_ignored(token):
                i = token.end - window.lo
                continue
            return token
        return None

    def _longest_forward(
        self, text: str, start: int, stop: int, base: int, patterns: PatternSet
    ) -> DelimiterToken | None:
        best = 0
        best_kind: TokenKind | None = None
        trie: LiteralTrie = self._table.forward_trie
        for length in trie.match_lengths(text, start, stop):
            end = start + length
            if text[end - 1] in ASCII_LETTERS:
                if self._char_at(text, end, base) in ASCII_LETTERS:
                    continue
            best = length
            best_kind = self._table.kinds[text[start:end]]
        for pattern, kind in patterns:
            match = pattern.match(text, start, stop)
            if match is not None and match.end() - start > best:
                best = match.end() - start
                best_kind = kind
        if best_kind is None:
            return None
        return DelimiterToken(
            text[start : start + best], base + start, base + start + best, best_kind
        )

    def _char_at(self, text: str, index: int, base: int) -> str:
        """Character at window index, read from the buffer past the window end."""
        if index < len(text):
            return text[index]
        return self._buffer.substring(base + index, base + index + 1)

    def _forward_window(self, pos: int, bound: int) -> _Window:
        revision = self._buffer.revision
        cached = self._forward
        if cached is not None and cached.revision == revision:
            if cached.lo <= pos and bound <= cached.hi:
                return cached
        window = _Window(revision, pos, bound, self._buffer.substring(pos, bound))
        self._forward = window
        return window

    # =========================================================================
    # Backward
    # =========================================================================

    def backward_find(
        self, pos: int, bound: int, *, with_args: bool = False
    ) -> DelimiterToken | None:
        """Nearest accepted token lying entirely within [bound, pos)."""
        if pos <= bound:
            return None
        window = self._backward_window(pos, bound)
        table = self._table
        regex = table.backward_with_args if with_args else table.backward
        patterns = table.backward_patterns_with_args if with_args else table.backward_patterns
        rev = window.text
        i = window.hi - pos
        stop = window.hi - bound
        while i < stop:
            match = regex.search(rev, i, stop)
            if match is None:
                return None
            token = self._longest_backward(rev, match.start(), stop, window.hi, patterns)
            if token is None:
                i = match.start() + 1
                continue
            if self.is_ignored(token):
                i = window.hi - token.start
                continue
            return token
        return None

    def _longest_backward(
        self, rev: str, start: int, stop: int, top: int, patterns: PatternSet
    ) -> DelimiterToken | None:
        best = 0
        best_kind: TokenKind | None = None
        trie: LiteralTrie = self._table.backward_trie
        # The character after the token in reading order comes first in rev
        follows = rev[start - 1] if start > 0 else self._buffer.substring(top, top + 1)
        follows_letter = follows in ASCII_LETTERS
        for length in trie.match_lengths(rev, start, stop):
            if follows_letter and rev[start] in ASCII_LETTERS:
                continue
            best = length
            best_kind = self._table.kinds[rev[start : start + length][::-1]]
        for pattern, kind in patterns:
            match = pattern.match(rev, start, stop)
            if match is not None and match.end() - start > best:
                best = match.end() - start
                best_kind = kind
        if best_kind is None:
            return None
        text = rev[start : start + best][::-1]
        return DelimiterToken(text, top - start - best, top - start, best_kind)

    def _backward_window(self, pos: int, bound: int) -> _Window:
        revision = self._buffer.revision
        cached = self._backward
        if cached is not None and cached.revision == revision:
            if cached.lo <= bound and pos <= cached.hi:
                return cached
        window = _Window(revision, bound, pos, self._buffer.reversed_window(bound, pos))
        self._backward = window
        return window

    # =========================================================================
    # Ignore rule
    # =========================================================================

    def is_ignored(self, token: DelimiterToken) -> bool:
        """True when a candidate must be skipped.

        - it starts inside a comment (when comments are ignored)
        - it is a closing quote inside math, where it is a prime
        - it is a math toggle that leaves the math depth unchanged
        """
        oracle = self._oracle
        if self._ignore_comments and oracle.is_comment(token.start):
            return True
        if token.text in self._table.closing_quotes and oracle.math_depth(token.start) > 0:
            return True
        if token.kind is TokenKind.MATH_TOGGLE:
            return oracle.math_depth(token.start) == oracle.math_depth(token.end)
        return False


def compiled_sources(table: DelimiterTable) -> dict[str, str]:
    """Regex sources of the six matchers, keyed by name."""
    names = (
        "general",
        "general_with_args",
        "open_only",
        "close_only",
        "backward",
        "backward_with_args",
    )
    sources: dict[str, str] = {}
    for name in names:
        pattern: re.Pattern[str] = getattr(table, name)
        sources[name] = pattern.pattern
    return sources
