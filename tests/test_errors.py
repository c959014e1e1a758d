"""Error types and where they surface.

Configuration errors are raised while building a table. Navigation failures
are values. MutationAborted never escapes a public edit operation.
"""

import pytest

from llaves import (
    DelimiterConfigError,
    LlavesError,
    MutationAborted,
    NavConfig,
    Session,
    build_delimiter_table,
)


class TestErrorFormatting:
    def test_config_error_with_literal(self) -> None:
        err = DelimiterConfigError("Duplicate opening token", "(")
        assert str(err) == "Duplicate opening token ('(')"
        assert err.literal == "("
        assert err.message == "Duplicate opening token"

    def test_config_error_without_literal(self) -> None:
        err = DelimiterConfigError("math_toggles must hold exactly two tokens")
        assert str(err) == "math_toggles must hold exactly two tokens"
        assert err.literal is None

    def test_mutation_aborted(self) -> None:
        err = MutationAborted("raise_sexp", "point is not inside a group")
        assert str(err) == "raise_sexp: point is not inside a group"
        assert err.operation == "raise_sexp"
        assert err.reason == "point is not inside a group"

    def test_hierarchy(self) -> None:
        assert issubclass(DelimiterConfigError, LlavesError)
        assert issubclass(MutationAborted, LlavesError)


class TestErrorPaths:
    def test_config_error_raised_at_build(self) -> None:
        with pytest.raises(LlavesError):
            build_delimiter_table(NavConfig(solo_brackets=("",)))

    def test_config_error_raised_by_session(self) -> None:
        with pytest.raises(DelimiterConfigError):
            Session("(a)", config=NavConfig(horizon=-1))

    def test_navigation_failure_is_a_value(self) -> None:
        result = Session("\\left( a").forward_list()
        assert not result.ok

    def test_abort_is_a_value(self) -> None:
        result = Session("a", point=0).raise_sexp()
        assert not result.ok
        assert result.reason == "point is not inside a group"
