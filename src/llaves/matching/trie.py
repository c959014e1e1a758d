"""Literal trie for longest-match lookups.

The delimiter vocabulary contains tokens that are prefixes (forward) or
suffixes (backward) of other tokens: ``(`` ends ``\\left(``, ``{`` ends
``\\{``. A regex alternation reports whichever alternative it tries first;
the trie reports every literal that matches at a position, so the caller
can take the longest one.

Thread Safety:
    LiteralTrie is built once and only read afterwards.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

# Key marking the end of a literal inside a node
_END = ""


class LiteralTrie:
    """Character trie over a fixed set of literals.

    Usage:
        >>> trie = LiteralTrie(["(", "\\\\left("])
        >>> list(trie.match_lengths("\\\\left( a", 0))
        [6]

    Complexity:
        - match_lengths(): O(length of the longest literal)

    """

    __slots__ = ("_root", "_size", "_depth")

    def __init__(self, literals: Iterable[str] = ()) -> None:
        self._root: dict[str, dict] = {}
        self._size = 0
        self._depth = 0
        for literal in literals:
            self.add(literal)

    def add(self, literal: str) -> None:
        """Insert a literal. Empty strings are rejected."""
        if not literal:
            raise ValueError("LiteralTrie literals must be non-empty")
        node = self._root
        for char in literal:
            node = node.setdefault(char, {})
        if _END not in node:
            node[_END] = {}
            self._size += 1
            self._depth = max(self._depth, len(literal))

    def __len__(self) -> int:
        return self._size

    def __contains__(self, literal: object) -> bool:
        if not isinstance(literal, str) or not literal:
            return False
        node = self._root
        for char in literal:
            child = node.get(char)
            if child is None:
                return False
            node = child
        return _END in node

    @property
    def depth(self) -> int:
        """Length of the longest literal."""
        return self._depth

    def match_lengths(self, text: str, start: int, stop: int | None = None) -> Iterator[int]:
        """Yield the lengths of all literals that match text at start.

        Lengths are yielded in increasing order.

        Args:
            text: Text to match against
            start: Index where the literal must begin
            stop: Index the literal must not extend past (default len(text))
        """
        if stop is None:
            stop = len(text)
        node = self._root
        i = start
        while i < stop:
            child = node.get(text[i])
            if child is None:
                return
            node = child
            i += 1
            if _END in node:
                yield i - start

    def longest_match(self, text: str, start: int, stop: int | None = None) -> int:
        """Length of the longest literal matching at start, or 0."""
        longest = 0
        for length in self.match_lengths(text, start, stop):
            longest = length
        return longest
