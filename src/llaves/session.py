"""High-level navigation session.

A Session bundles a buffer with its context oracle, unit scanner and a
navigator, and exposes point-moving commands. Commands commit the new point
only when every requested step succeeds; otherwise point is left exactly
where it was.

Usage:
    >>> session = Session(r"\\left( a + \\bigl[ b \\bigr] \\right)")
    >>> session.forward_sexp().ok
    True
    >>> session.point == len(session.text)
    True

Reconfiguration:
    ``reconfigure()`` swaps in a navigator built for a new NavConfig. It must
    be called between commands, never from inside one; the old table stays
    valid for anyone still holding it.

"""

from __future__ import annotations

from collections.abc import Callable

from llaves.buffer import StringBuffer
from llaves.config import NavConfig, get_nav_config
from llaves.context import LexicalContextOracle
from llaves.editing import (
    EditResult,
    barf_backward,
    barf_forward,
    delete_pair,
    mark_inner,
    mark_sexp,
    raise_sexp,
    slurp_backward,
    slurp_forward,
)
from llaves.navigation.engine import BalancedNavigator
from llaves.navigation.results import NavResult
from llaves.protocols import ContextOracle, TextBuffer, UnitScanner
from llaves.scanner import WordScanner
from llaves.tokens import DelimiterToken, Direction

Step = Callable[[int], NavResult]


class Session:
    """Buffer plus navigation commands.

    Args:
        source: Initial text, or an existing TextBuffer
        point: Initial point (only used when source is a string)
        oracle: Context oracle (default: LexicalContextOracle over the buffer)
        scanner: Unit scanner (default: WordScanner over the buffer)
        config: Navigation config (default: the active NavConfig)

    """

    __slots__ = ("_buffer", "_oracle", "_owns_oracle", "_scanner", "_navigator")

    def __init__(
        self,
        source: str | TextBuffer = "",
        *,
        point: int = 0,
        oracle: ContextOracle | None = None,
        scanner: UnitScanner | None = None,
        config: NavConfig | None = None,
    ) -> None:
        if isinstance(source, str):
            source = StringBuffer(source, point=point)
        config = config if config is not None else get_nav_config()
        self._buffer: TextBuffer = source
        # A default oracle follows the config; a supplied one is left alone
        self._owns_oracle = oracle is None
        self._oracle = (
            oracle
            if oracle is not None
            else LexicalContextOracle(source, math_environments=config.math_environments)
        )
        self._scanner = scanner if scanner is not None else WordScanner(source)
        self._navigator = BalancedNavigator(source, self._oracle, self._scanner, config=config)

    def __repr__(self) -> str:
        return f"Session(len={len(self._buffer)}, point={self._buffer.point})"

    # =========================================================================
    # State
    # =========================================================================

    @property
    def buffer(self) -> TextBuffer:
        return self._buffer

    @property
    def navigator(self) -> BalancedNavigator:
        return self._navigator

    @property
    def oracle(self) -> ContextOracle:
        return self._oracle

    @property
    def config(self) -> NavConfig:
        return self._navigator.config

    @property
    def text(self) -> str:
        return self._buffer.substring(0, len(self._buffer))

    @property
    def point(self) -> int:
        return self._buffer.point

    @point.setter
    def point(self, value: int) -> None:
        self._buffer.point = value

    def reconfigure(self, config: NavConfig) -> None:
        """Use a new configuration for subsequent commands.

        The default context oracle is rebuilt for the new math environments.
        """
        if self._owns_oracle:
            self._oracle = LexicalContextOracle(
                self._buffer, math_environments=config.math_environments
            )
        self._navigator = BalancedNavigator(
            self._buffer, self._oracle, self._scanner, config=config
        )

    # =========================================================================
    # Movement
    # =========================================================================

    def _repeat(self, forward: Step, backward: Step, n: int) -> NavResult:
        """Apply a step |n| times (backward when n < 0), committing on success.

        Stopping at the enclosing group's terminator ends the repetition
        early; the position reached so far is committed.
        """
        step = forward if n >= 0 else backward
        start = self._buffer.point
        position = start
        result = NavResult.success(start)
        for _ in range(abs(n)):
            result = step(position)
            if not result.ok:
                return NavResult.failure(
                    result.status, start, result.token, mismatches=result.mismatches
                )
            position = result.position
            if result.at_boundary:
                break
        self._buffer.point = position
        return NavResult(
            result.status, position, result.token, result.at_boundary, result.mismatches
        )

    def forward_sexp(self, n: int = 1) -> NavResult:
        nav = self._navigator
        return self._repeat(nav.forward_sexp, nav.backward_sexp, n)

    def backward_sexp(self, n: int = 1) -> NavResult:
        return self.forward_sexp(-n)

    def forward_list(self, n: int = 1) -> NavResult:
        nav = self._navigator
        return self._repeat(nav.forward_balanced, nav.backward_balanced, n)

    def backward_list(self, n: int = 1) -> NavResult:
        return self.forward_list(-n)

    def up_list(self, n: int = 1) -> NavResult:
        nav = self._navigator
        return self._repeat(nav.up, nav.backward_up, n)

    def backward_up_list(self, n: int = 1) -> NavResult:
        return self.up_list(-n)

    def down_list(self, n: int = 1) -> NavResult:
        nav = self._navigator
        return self._repeat(nav.down, nav.backward_down, n)

    def backward_down_list(self, n: int = 1) -> NavResult:
        return self.down_list(-n)

    def enclosing_group(self, pos: int | None = None) -> tuple[DelimiterToken, DelimiterToken] | None:
        """Opening and closing tokens of the innermost group around pos (default point)."""
        return self._navigator.enclosing_group(self._buffer.point if pos is None else pos)

    def find_delimiter(
        self, direction: Direction = Direction.FORWARD, pos: int | None = None
    ) -> DelimiterToken | None:
        """Nearest delimiter from pos (default point) within the horizon."""
        pos = self._buffer.point if pos is None else pos
        bound = self._navigator.resolve_bound(pos, direction)
        return self._navigator.matcher.find(pos, bound, direction)

    # =========================================================================
    # Edits
    # =========================================================================

    def slurp_forward(self) -> EditResult:
        return slurp_forward(self._navigator)

    def slurp_backward(self) -> EditResult:
        return slurp_backward(self._navigator)

    def barf_forward(self) -> EditResult:
        return barf_forward(self._navigator)

    def barf_backward(self) -> EditResult:
        return barf_backward(self._navigator)

    def raise_sexp(self, n: int = 1) -> EditResult:
        return raise_sexp(self._navigator, n)

    def delete_pair(self) -> EditResult:
        return delete_pair(self._navigator)

    def mark_sexp(self, n: int = 1) -> EditResult:
        return mark_sexp(self._navigator, n)

    def mark_inner(self) -> EditResult:
        return mark_inner(self._navigator)


__all__ = ["Session"]
