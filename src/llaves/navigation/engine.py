"""Balanced navigation engine.

One stack machine drives every primitive. Scanning forward, openers are
pushed and closers pop; scanning backward the roles swap. The primitives
differ only in where they stop:

- balanced: when a pop empties the stack (position past the closing
  token), or at a closer met with an empty stack, which is the enclosing
  group's own terminator and is not consumed
- up: at the first closer met with an empty stack, consumed (exits one level)
- down: at the first opener, consumed (enters one level); a closer first
  means the scan would leave the enclosing group and fails

Expression steps (``forward_sexp``/``backward_sexp``) first ask the unit
scanner for a single-atom step and take it when it does not reach the
nearest delimiter; otherwise they take a balanced step.

Every search is bounded by the horizon. On failure the result carries the
starting position; nothing in this module moves the buffer's point.

Thread Safety:
    A navigator is bound to one buffer; one call at a time.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llaves.config import NavConfig, get_nav_config
from llaves.matching.classifier import Classifier
from llaves.matching.matcher import TokenMatcher
from llaves.navigation.results import NavResult, NavStatus
from llaves.navigation.stack import MatchStack
from llaves.profiling import get_nav_accumulator
from llaves.table import DelimiterTable, get_delimiter_table
from llaves.tokens import DelimiterToken, Direction, Role
from llaves.utils.logger import get_logger

if TYPE_CHECKING:
    from llaves.protocols import ContextOracle, TextBuffer, UnitScanner

logger = get_logger(__name__)

FORWARD = Direction.FORWARD
BACKWARD = Direction.BACKWARD

# Stop rules for the stack machine
_BALANCED = "balanced"
_UP = "up"
_DOWN = "down"


class BalancedNavigator:
    """Position-level navigation primitives over a buffer.

    Usage:
        >>> nav = BalancedNavigator(buffer, oracle, scanner)
        >>> result = nav.forward_balanced(0)
        >>> result.ok, result.position
        (True, 37)

    Attributes:
        buffer: The text being navigated
        matcher: TokenMatcher bound to the buffer
        classifier: Classifier bound to the oracle

    """

    __slots__ = ("_buffer", "_oracle", "_scanner", "_config", "_table", "_matcher", "_classifier")

    def __init__(
        self,
        buffer: TextBuffer,
        oracle: ContextOracle,
        scanner: UnitScanner,
        *,
        config: NavConfig | None = None,
        table: DelimiterTable | None = None,
    ) -> None:
        self._buffer = buffer
        self._oracle = oracle
        self._scanner = scanner
        self._config = config if config is not None else get_nav_config()
        self._table = table if table is not None else get_delimiter_table(self._config)
        self._matcher = TokenMatcher(
            self._table, buffer, oracle, ignore_comments=self._config.ignore_comments
        )
        self._classifier = Classifier(self._table, oracle)

    @property
    def buffer(self) -> TextBuffer:
        return self._buffer

    @property
    def config(self) -> NavConfig:
        return self._config

    @property
    def table(self) -> DelimiterTable:
        return self._table

    @property
    def matcher(self) -> TokenMatcher:
        return self._matcher

    @property
    def classifier(self) -> Classifier:
        return self._classifier

    def resolve_bound(self, pos: int, direction: Direction, bound: int | None = None) -> int:
        """Search limit: the given bound, or pos +/- horizon clamped to the buffer."""
        size = len(self._buffer)
        if bound is None:
            if direction is FORWARD:
                return min(size, pos + self._config.horizon)
            return max(0, pos - self._config.horizon)
        return max(0, min(size, bound))

    # =========================================================================
    # Balanced groups
    # =========================================================================

    def forward_balanced(self, pos: int, bound: int | None = None) -> NavResult:
        """Move over the next balanced group."""
        return self._run(pos, FORWARD, bound, _BALANCED)

    def backward_balanced(self, pos: int, bound: int | None = None) -> NavResult:
        """Move back over the previous balanced group."""
        return self._run(pos, BACKWARD, bound, _BALANCED)

    def up(self, pos: int, bound: int | None = None) -> NavResult:
        """Move forward out of the enclosing group, past its closer."""
        return self._run(pos, FORWARD, bound, _UP)

    def backward_up(self, pos: int, bound: int | None = None) -> NavResult:
        """Move backward out of the enclosing group, before its opener."""
        return self._run(pos, BACKWARD, bound, _UP)

    def down(self, pos: int, bound: int | None = None) -> NavResult:
        """Move forward into the next group, past its opener."""
        return self._run(pos, FORWARD, bound, _DOWN)

    def backward_down(self, pos: int, bound: int | None = None) -> NavResult:
        """Move backward into the previous group, before its closer."""
        return self._run(pos, BACKWARD, bound, _DOWN)

    def balanced(self, pos: int, direction: Direction, bound: int | None = None) -> NavResult:
        return self._run(pos, direction, bound, _BALANCED)

    def _run(self, pos: int, direction: Direction, bound: int | None, rule: str) -> NavResult:
        limit = self.resolve_bound(pos, direction, bound)
        result, examined = self._scan(pos, direction, limit, rule)
        acc = get_nav_accumulator()
        if acc is not None:
            acc.record_navigation(examined, result.ok)
        if not result.ok:
            logger.debug(
                "%s %s scan from %d failed: %s (%r)",
                rule,
                direction.name.lower(),
                pos,
                result.status.name,
                result.token,
            )
        return result

    def _scan(
        self, pos: int, direction: Direction, limit: int, rule: str
    ) -> tuple[NavResult, int]:
        forward = direction is FORWARD
        push_role = Role.OPEN if forward else Role.CLOSE
        stack = MatchStack(self._classifier, direction)
        matcher = self._matcher
        classify = self._classifier.classify
        with_args = rule == _DOWN
        cursor = pos
        examined = 0

        while True:
            token = matcher.find(cursor, limit, direction, with_args=with_args)
            if token is None:
                break
            examined += 1
            near, far = _edges(token, forward)
            if classify(token) is push_role:
                if rule == _DOWN:
                    return NavResult.success(far, token), examined
                stack.push(token)
            elif not stack:
                if rule == _DOWN:
                    return NavResult.failure(NavStatus.NOT_FOUND, pos, token), examined
                if rule == _UP:
                    return NavResult.success(far, token, mismatches=stack.mismatches), examined
                return (
                    NavResult.success(near, token, at_boundary=True, mismatches=stack.mismatches),
                    examined,
                )
            else:
                stack.pop(token)
                if not stack and rule == _BALANCED:
                    return NavResult.success(far, token, mismatches=stack.mismatches), examined
            cursor = far

        if stack:
            result = NavResult.failure(
                NavStatus.UNMATCHED, pos, stack.top, mismatches=stack.mismatches
            )
        else:
            result = NavResult.failure(NavStatus.NOT_FOUND, pos, mismatches=stack.mismatches)
        return result, examined

    # =========================================================================
    # Expressions: atom or balanced group
    # =========================================================================

    def forward_sexp(self, pos: int, bound: int | None = None) -> NavResult:
        """Move over the next expression (atom or balanced group)."""
        return self.sexp(pos, FORWARD, bound)

    def backward_sexp(self, pos: int, bound: int | None = None) -> NavResult:
        """Move back over the previous expression (atom or balanced group)."""
        return self.sexp(pos, BACKWARD, bound)

    def sexp(self, pos: int, direction: Direction, bound: int | None = None) -> NavResult:
        limit = self.resolve_bound(pos, direction, bound)
        unit = self._scanner.step(pos, direction)
        if unit is not None and self._within(unit, limit, direction):
            token = self._matcher.find(pos, limit, direction)
            if token is None or not self._crosses(unit, token, direction):
                return NavResult.success(unit)
        return self._run(pos, direction, limit, _BALANCED)

    @staticmethod
    def _within(unit: int, limit: int, direction: Direction) -> bool:
        return unit <= limit if direction is FORWARD else unit >= limit

    @staticmethod
    def _crosses(unit: int, token: DelimiterToken, direction: Direction) -> bool:
        """True when the unit step reaches past the token's near edge."""
        if direction is FORWARD:
            return unit > token.start
        return unit < token.end

    # =========================================================================
    # Queries
    # =========================================================================

    def enclosing_group(
        self, pos: int, bound: int | None = None
    ) -> tuple[DelimiterToken, DelimiterToken] | None:
        """Opening and closing tokens of the innermost group around pos."""
        opener = self.backward_up(pos, bound)
        if not opener.ok or opener.token is None:
            return None
        closer = self.up(pos, bound)
        if not closer.ok or closer.token is None:
            return None
        return opener.token, closer.token


def _edges(token: DelimiterToken, forward: bool) -> tuple[int, int]:
    """(near, far) edges of a token in the scan direction."""
    if forward:
        return token.start, token.end
    return token.end, token.start
