"""Structural edits built on the navigation engine.

Every edit runs inside a buffer transaction. A failed precondition raises
MutationAborted inside the transaction, which rolls back text, point and
marks; the operation then returns an aborted EditResult. Callers never see
a partial edit and never need to catch anything.

Operations:
    slurp_forward / slurp_backward  grow the enclosing group by one expression
    barf_forward / barf_backward    shrink it by its outermost expression
    raise_sexp                      replace the enclosing group with n expressions
    delete_pair                     remove the enclosing group's delimiters
    mark_sexp                       mark the end of the next n expressions
    mark_inner                      select the enclosing group's content

Example:
    >>> from llaves import Session
    >>> session = Session("(a) b", point=2)
    >>> slurp_forward(session.navigator).ok
    True
    >>> session.text
    '(a b)'

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from llaves.errors import MutationAborted
from llaves.profiling import get_nav_accumulator
from llaves.utils.logger import get_logger

if TYPE_CHECKING:
    from llaves.navigation.engine import BalancedNavigator
    from llaves.navigation.results import NavResult
    from llaves.protocols import TextBuffer

logger = get_logger(__name__)


class EditStatus(Enum):
    APPLIED = auto()
    ABORTED = auto()


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of a structural edit.

    Attributes:
        status: APPLIED or ABORTED
        operation: Name of the edit
        reason: Why it was aborted (empty when applied)

    """

    status: EditStatus
    operation: str
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is EditStatus.APPLIED


def _run_edit(
    navigator: BalancedNavigator,
    operation: str,
    body: Callable[[BalancedNavigator, TextBuffer], None],
) -> EditResult:
    buffer = navigator.buffer
    acc = get_nav_accumulator()
    try:
        with buffer.transaction():
            body(navigator, buffer)
    except MutationAborted as exc:
        logger.debug("Edit aborted: %s", exc)
        if acc is not None:
            acc.record_edit(applied=False)
        return EditResult(EditStatus.ABORTED, operation, exc.reason)
    if acc is not None:
        acc.record_edit(applied=True)
    return EditResult(EditStatus.APPLIED, operation)


def _require_step(result: NavResult, operation: str, reason: str) -> int:
    """Position of a successful, non-boundary step, or abort."""
    if not result.ok or result.at_boundary:
        raise MutationAborted(operation, reason)
    return result.position


# =============================================================================
# Slurp / barf
# =============================================================================


def slurp_forward(navigator: BalancedNavigator) -> EditResult:
    """Move the enclosing group's closer past the next expression.

    ``(a|) b`` becomes ``(a| b)``.

    Only the closer moves; whitespace stays put. ``(a ) b`` becomes
    ``(a  b)``, and barf_forward then gives ``(a)  b`` rather than the
    original text. Slurp followed by barf restores the text exactly when
    the closer sits directly after the last expression.
    """

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        up = nav.up(buffer.point)
        if not up.ok or up.token is None:
            raise MutationAborted("slurp_forward", "point is not inside a group")
        closer = up.token
        buffer.delete(closer.start, closer.end)
        target = _require_step(
            nav.forward_sexp(closer.start), "slurp_forward", "no expression after the group"
        )
        buffer.insert(target, closer.text)

    return _run_edit(navigator, "slurp_forward", body)


def slurp_backward(navigator: BalancedNavigator) -> EditResult:
    """Move the enclosing group's opener before the previous expression.

    ``a (|b)`` becomes ``(a |b)``.

    Whitespace after the opener stays put, as in slurp_forward.
    """

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        up = nav.backward_up(buffer.point)
        if not up.ok or up.token is None:
            raise MutationAborted("slurp_backward", "point is not inside a group")
        opener = up.token
        buffer.delete(opener.start, opener.end)
        target = _require_step(
            nav.backward_sexp(opener.start), "slurp_backward", "no expression before the group"
        )
        buffer.insert(target, opener.text)

    return _run_edit(navigator, "slurp_backward", body)


def barf_forward(navigator: BalancedNavigator) -> EditResult:
    """Move the enclosing group's closer before its last expression.

    ``(a b|)`` becomes ``(a) b``; a group holding a single expression
    ``(b)`` becomes ``()b``.
    """

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        up = nav.up(buffer.point)
        if not up.ok or up.token is None:
            raise MutationAborted("barf_forward", "point is not inside a group")
        closer = up.token
        buffer.delete(closer.start, closer.end)
        last = _require_step(nav.backward_sexp(closer.start), "barf_forward", "group is empty")
        # A second step tells "one contained expression" from "several"
        previous = nav.backward_sexp(last)
        if not previous.ok:
            raise MutationAborted("barf_forward", "unbalanced group content")
        if previous.at_boundary:
            target = previous.position
        else:
            target = _require_step(
                nav.forward_sexp(previous.position), "barf_forward", "unbalanced group content"
            )
        buffer.insert(target, closer.text)

    return _run_edit(navigator, "barf_forward", body)


def barf_backward(navigator: BalancedNavigator) -> EditResult:
    """Move the enclosing group's opener after its first expression.

    ``(|a b)`` becomes ``a (|b)``; ``(b)`` becomes ``b()``.
    """

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        up = nav.backward_up(buffer.point)
        if not up.ok or up.token is None:
            raise MutationAborted("barf_backward", "point is not inside a group")
        opener = up.token
        buffer.delete(opener.start, opener.end)
        first = _require_step(nav.forward_sexp(opener.start), "barf_backward", "group is empty")
        following = nav.forward_sexp(first)
        if not following.ok:
            raise MutationAborted("barf_backward", "unbalanced group content")
        if following.at_boundary:
            target = following.position
        else:
            target = _require_step(
                nav.backward_sexp(following.position), "barf_backward", "unbalanced group content"
            )
        buffer.insert(target, opener.text)

    return _run_edit(navigator, "barf_backward", body)


# =============================================================================
# Raise / delete pair
# =============================================================================


def raise_sexp(navigator: BalancedNavigator, n: int = 1) -> EditResult:
    """Replace the enclosing group with the next n expressions from point.

    Only the span from the group's opener through its closer changes.
    Point ends at the start of the raised text.
    """
    if n < 1:
        return EditResult(EditStatus.ABORTED, "raise_sexp", f"count must be positive, got {n}")

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        start = buffer.point
        group = nav.enclosing_group(start)
        if group is None:
            raise MutationAborted("raise_sexp", "point is not inside a group")
        opener, closer = group
        end = start
        for _ in range(n):
            end = _require_step(nav.forward_sexp(end), "raise_sexp", "not enough expressions")
        if end > closer.start:
            raise MutationAborted("raise_sexp", "expressions extend past the group")
        captured = buffer.substring(start, end)
        buffer.delete(opener.start, closer.end)
        buffer.insert(opener.start, captured)
        buffer.point = opener.start

    return _run_edit(navigator, "raise_sexp", body)


def delete_pair(navigator: BalancedNavigator) -> EditResult:
    """Remove the enclosing group's opener and closer, keeping the content."""

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        group = nav.enclosing_group(buffer.point)
        if group is None:
            raise MutationAborted("delete_pair", "point is not inside a group")
        opener, closer = group
        buffer.delete(closer.start, closer.end)
        buffer.delete(opener.start, opener.end)

    return _run_edit(navigator, "delete_pair", body)


# =============================================================================
# Marking
# =============================================================================


def mark_sexp(navigator: BalancedNavigator, n: int = 1) -> EditResult:
    """Push a mark at the end of the next n expressions; point stays."""

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        end = buffer.point
        for _ in range(n):
            end = _require_step(nav.forward_sexp(end), "mark_sexp", "not enough expressions")
        buffer.push_mark(end)

    return _run_edit(navigator, "mark_sexp", body)


def mark_inner(navigator: BalancedNavigator) -> EditResult:
    """Select the enclosing group's content.

    Point moves just after the opener; a mark is pushed just before the
    closer.
    """

    def body(nav: BalancedNavigator, buffer: TextBuffer) -> None:
        group = nav.enclosing_group(buffer.point)
        if group is None:
            raise MutationAborted("mark_inner", "point is not inside a group")
        opener, closer = group
        buffer.push_mark(closer.start)
        buffer.point = opener.end

    return _run_edit(navigator, "mark_inner", body)
