"""Llaves NavAccumulator: opt-in profiling for navigation and edits.

This module provides accumulated metrics:
- Navigation calls and how many failed
- Delimiter tokens examined by the stack machine
- Structural edits applied and aborted

Zero overhead when disabled (get_nav_accumulator() returns None).

Example:
    from llaves import Session
    from llaves.profiling import profiled_navigation

    session = Session(source)
    with profiled_navigation() as metrics:
        session.forward_sexp(5)

    print(metrics.summary())
    # {"total_ms": 0.4, "navigation_calls": 5, "tokens_examined": 12, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class NavAccumulator:
    """Accumulated navigation metrics.

    Attributes:
        start_time: Profiling start timestamp.
        navigation_calls: Number of stack-machine runs.
        failures: Runs that ended Unmatched or NotFound.
        tokens_examined: Delimiter tokens classified across all runs.
        edits_applied: Structural edits that completed.
        edits_aborted: Structural edits rolled back.

    """

    start_time: float = field(default_factory=perf_counter)
    navigation_calls: int = 0
    failures: int = 0
    tokens_examined: int = 0
    edits_applied: int = 0
    edits_aborted: int = 0

    def record_navigation(self, tokens_examined: int, ok: bool) -> None:
        """Record one stack-machine run.

        Args:
            tokens_examined: Tokens classified during the run.
            ok: Whether the run succeeded.

        """
        self.navigation_calls += 1
        self.tokens_examined += tokens_examined
        if not ok:
            self.failures += 1

    def record_edit(self, applied: bool) -> None:
        """Record one structural edit."""
        if applied:
            self.edits_applied += 1
        else:
            self.edits_aborted += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of navigation metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "navigation_calls": self.navigation_calls,
            "failures": self.failures,
            "tokens_examined": self.tokens_examined,
            "edits_applied": self.edits_applied,
            "edits_aborted": self.edits_aborted,
        }


# Module-level ContextVar
_accumulator: ContextVar[NavAccumulator | None] = ContextVar(
    "nav_accumulator",
    default=None,
)


def get_nav_accumulator() -> NavAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_navigation() -> Iterator[NavAccumulator]:
    """Context manager for profiled navigation.

    Creates a NavAccumulator and makes it available via
    get_nav_accumulator() for the duration of the with block.

    Yields:
        NavAccumulator that will be populated during navigation calls.

    """
    acc = NavAccumulator()
    token: Token[NavAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
