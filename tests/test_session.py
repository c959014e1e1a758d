"""Tests for Session point-moving commands.

Commands commit the final point only when every step succeeds, stop early
at the enclosing group's terminator, and reverse for negative counts.
"""

import pytest

from llaves import (
    Direction,
    LexicalContextOracle,
    NavConfig,
    NavStatus,
    Session,
    StringBuffer,
)


class TestConstruction:
    def test_from_text(self) -> None:
        session = Session("(a)", point=1)
        assert session.text == "(a)"
        assert session.point == 1
        assert repr(session) == "Session(len=3, point=1)"

    def test_from_buffer(self) -> None:
        buffer = StringBuffer("(a)", point=2)
        session = Session(buffer)
        assert session.buffer is buffer
        assert session.point == 2

    def test_point_validated(self) -> None:
        session = Session("ab")
        with pytest.raises(ValueError):
            session.point = 5


class TestSexpCommands:
    def test_repeat(self) -> None:
        session = Session("a b c d")
        result = session.forward_sexp(3)
        assert result.ok
        assert session.point == 5

    def test_backward_repeat(self) -> None:
        session = Session("a b c d", point=5)
        assert session.backward_sexp(2).ok
        assert session.point == 2

    def test_negative_count_reverses(self) -> None:
        session = Session("a b c d", point=2)
        assert session.forward_sexp(-1).ok
        assert session.point == 0
        assert session.backward_sexp(-2).ok
        assert session.point == 3

    def test_zero_count(self) -> None:
        session = Session("a b", point=1)
        result = session.forward_sexp(0)
        assert result.ok
        assert session.point == 1

    def test_failure_restores_point(self) -> None:
        session = Session("a b", point=0)
        result = session.forward_sexp(5)
        assert not result.ok
        assert result.status is NavStatus.NOT_FOUND
        assert result.position == 0
        assert session.point == 0

    def test_stops_at_group_end(self) -> None:
        session = Session("(a b) c", point=1)
        result = session.forward_sexp(5)
        assert result.ok
        assert result.at_boundary
        assert session.point == 4


class TestListCommands:
    def test_forward_and_backward_list(self) -> None:
        session = Session("(a) (b)")
        assert session.forward_list(2).ok
        assert session.point == 7
        assert session.backward_list().ok
        assert session.point == 4

    def test_up_list(self) -> None:
        session = Session("((a))", point=2)
        assert session.up_list(2).ok
        assert session.point == 5

    def test_up_list_too_far(self) -> None:
        session = Session("((a))", point=2)
        assert not session.up_list(3).ok
        assert session.point == 2

    def test_backward_up_list(self) -> None:
        session = Session("((a))", point=2)
        assert session.backward_up_list().ok
        assert session.point == 1

    def test_down_list(self) -> None:
        session = Session("((a))")
        assert session.down_list(2).ok
        assert session.point == 2

    def test_backward_down_list(self) -> None:
        session = Session("((a))", point=5)
        assert session.backward_down_list().ok
        assert session.point == 4

    def test_unmatched_keeps_point(self) -> None:
        session = Session("\\left( a")
        result = session.forward_list()
        assert result.status is NavStatus.UNMATCHED
        assert session.point == 0


class TestQueries:
    def test_enclosing_group_at_point(self) -> None:
        session = Session("x [a] y", point=3)
        group = session.enclosing_group()
        assert group is not None
        assert (group[0].start, group[1].end) == (2, 5)

    def test_enclosing_group_explicit_position(self) -> None:
        assert Session("x [a] y").enclosing_group(0) is None

    def test_find_delimiter(self) -> None:
        session = Session("a (b)")
        forward = session.find_delimiter()
        backward = session.find_delimiter(Direction.BACKWARD, 5)
        assert forward is not None and forward.text == "("
        assert backward is not None and backward.text == ")"


class TestReconfigure:
    def test_new_config_applies_to_next_command(self) -> None:
        session = Session("(abcdef)")
        held = session.navigator.table
        session.reconfigure(NavConfig(horizon=3))
        assert session.config.horizon == 3
        assert not session.forward_list().ok
        # The previous table is still intact for anyone holding it
        assert "(" in held.opens

    def test_default_oracle_follows_math_environments(self) -> None:
        """A reconfigured session tracks math depth like a freshly built one."""
        text = "\\begin{foo} $x$ \\end{foo}"
        config = NavConfig(math_environments=("foo",))
        session = Session(text)
        assert session.oracle.math_depth(text.index("x")) == 1

        session.reconfigure(config)
        fresh = Session(text, config=config)
        assert session.oracle.math_depth(text.index("x")) == 2
        assert fresh.oracle.math_depth(text.index("x")) == 2

    def test_supplied_oracle_is_kept(self) -> None:
        """An oracle passed in by the caller survives reconfiguration."""
        buffer = StringBuffer("$x$")
        oracle = LexicalContextOracle(buffer)
        session = Session(buffer, oracle=oracle)
        session.reconfigure(NavConfig(math_environments=("foo",)))
        assert session.oracle is oracle
