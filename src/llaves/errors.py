"""Exception classes for Llaves.

Navigation failures are reported as values (see ``llaves.navigation.results``),
never raised. The exceptions here cover configuration problems, which fail
fast while the delimiter table is built, and the internal abort signal used
by structural edits.
"""

from __future__ import annotations


class LlavesError(Exception):
    """Base exception for all Llaves errors.

    Subclass this for specific error categories.
    """

    pass


class DelimiterConfigError(LlavesError):
    """Error in the delimiter configuration.

    Raised while building a DelimiterTable when a literal is empty, too long,
    listed twice, or paired inconsistently.
    """

    def __init__(self, message: str, literal: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Description of the problem
            literal: The offending token literal (optional)
        """
        self.message = message
        self.literal = literal

        suffix = f" ({literal!r})" if literal is not None else ""
        super().__init__(f"{message}{suffix}")


class MutationAborted(LlavesError):
    """A structural edit could not be completed.

    Raised inside a buffer transaction so that every partial edit is rolled
    back. Public edit operations catch it and return an aborted EditResult.
    """

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize abort signal.

        Args:
            operation: Name of the edit (e.g., "slurp_forward")
            reason: Why the precondition failed
        """
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")
