"""Context classifier: open or close, and expected counterparts.

Literal tokens are looked up in the table. Environment markers and command
braces are recognized by the open-only / close-only matchers. Math toggles
are the one case that depends on context: a toggle opens when crossing it
left to right raises the math depth and closes when it lowers it.

Pairing is tolerant. A sized opener may be closed by a plain or differently
sized closer; ``is_compatible`` only feeds diagnostics and never blocks a
pop.

Thread Safety:
    Stateless apart from the table and oracle references.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llaves.matching.patterns import environment_name
from llaves.tokens import DelimiterToken, Role, TokenKind

if TYPE_CHECKING:
    from llaves.protocols import ContextOracle
    from llaves.table import DelimiterTable


class Classifier:
    """Resolves the role of matched tokens."""

    __slots__ = ("_table", "_oracle")

    def __init__(self, table: DelimiterTable, oracle: ContextOracle) -> None:
        self._table = table
        self._oracle = oracle

    def classify(self, token: DelimiterToken) -> Role:
        """Role of a token at its occurrence.

        Math toggles must change the depth; the matcher drops the ones that
        do not before they get here.
        """
        if token.kind is TokenKind.MATH_TOGGLE:
            before = self._oracle.math_depth(token.start)
            after = self._oracle.math_depth(token.end)
            return Role.OPEN if after > before else Role.CLOSE
        text = token.text
        table = self._table
        if text in table.opens:
            return Role.OPEN
        if text in table.closes:
            return Role.CLOSE
        if table.open_only.fullmatch(text):
            return Role.OPEN
        if table.close_only.fullmatch(text):
            return Role.CLOSE
        raise ValueError(f"Not a delimiter token: {text!r}")

    def expected_open(self, close: DelimiterToken) -> str | None:
        """Opening text that lexically corresponds to a closer."""
        if close.kind is TokenKind.MATH_TOGGLE:
            return close.text
        if close.kind is TokenKind.ENVIRONMENT:
            parts = environment_name(close.text)
            if parts is not None:
                return f"\\begin{{{parts[1]}}}"
        return self._table.close_to_open.get(close.text)

    def expected_close(self, open_: DelimiterToken) -> str | None:
        """Closing text that lexically corresponds to an opener."""
        if open_.kind is TokenKind.MATH_TOGGLE:
            return open_.text
        if open_.kind is TokenKind.ENVIRONMENT:
            parts = environment_name(open_.text)
            if parts is not None:
                return f"\\end{{{parts[1]}}}"
        if open_.kind is TokenKind.COMMAND_BRACE:
            return "}"
        return self._table.open_to_close.get(open_.text)

    def is_compatible(self, open_: DelimiterToken, close: DelimiterToken) -> bool:
        expected = self.expected_open(close)
        if expected is None:
            return False
        if open_.text == expected:
            return True
        if open_.kind is TokenKind.COMMAND_BRACE:
            return close.text == "}"
        if open_.kind is TokenKind.ENVIRONMENT:
            # \begin{thm}[Title] still pairs with \end{thm}
            return open_.text.startswith(expected)
        return False
