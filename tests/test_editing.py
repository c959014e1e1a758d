"""Tests for structural edits.

Slurp, barf and raise, the supplementary edits, and the rollback guarantee:
an aborted edit leaves text, point and marks exactly as they were.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from llaves import (
    EditStatus,
    Session,
    barf_forward,
    get_nav_accumulator,
    profiled_navigation,
    slurp_forward,
)


class TestSlurp:
    @pytest.mark.parametrize(
        ("text", "point", "expected"),
        [
            ("(a) b", 2, "(a b)"),
            ("(a) (b c)", 1, "(a (b c))"),
            ("(a (b) c) d", 4, "(a (b c)) d"),
            ("\\left( a\\right) b", 8, "\\left( a b\\right)"),
            ("\\begin{prop} x\\end{prop} y", 13, "\\begin{prop} x y\\end{prop}"),
        ],
    )
    def test_slurp_forward(self, text: str, point: int, expected: str) -> None:
        session = Session(text, point=point)
        result = session.slurp_forward()
        assert result.ok
        assert result.status is EditStatus.APPLIED
        assert session.text == expected
        assert session.point == point

    def test_slurp_backward(self) -> None:
        session = Session("a (b)", point=3)
        assert session.slurp_backward().ok
        assert session.text == "(a b)"
        assert session.point == 3

    def test_slurp_math(self) -> None:
        session = Session("$a$ b", point=1)
        assert session.slurp_forward().ok
        assert session.text == "$a b$"

    def test_nothing_to_slurp(self) -> None:
        session = Session("(a)", point=2)
        result = session.slurp_forward()
        assert not result.ok
        assert result.status is EditStatus.ABORTED
        assert result.operation == "slurp_forward"
        assert "no expression" in result.reason
        assert session.text == "(a)"
        assert session.point == 2

    def test_not_inside_group(self) -> None:
        session = Session("a b", point=1)
        result = session.slurp_forward()
        assert not result.ok
        assert "not inside a group" in result.reason
        assert session.text == "a b"


class TestBarf:
    @pytest.mark.parametrize(
        ("text", "point", "expected"),
        [
            ("(a b)", 2, "(a) b"),
            ("(a (b c))", 2, "(a) (b c)"),
            ("(b)", 1, "()b"),
        ],
    )
    def test_barf_forward(self, text: str, point: int, expected: str) -> None:
        session = Session(text, point=point)
        assert session.barf_forward().ok
        assert session.text == expected

    @pytest.mark.parametrize(
        ("text", "point", "expected"),
        [
            ("(a b)", 1, "a (b)"),
            ("((a b) c)", 1, "(a b) (c)"),
            ("(b)", 1, "b()"),
        ],
    )
    def test_barf_backward(self, text: str, point: int, expected: str) -> None:
        session = Session(text, point=point)
        assert session.barf_backward().ok
        assert session.text == expected

    def test_empty_group(self) -> None:
        session = Session("()", point=1)
        result = session.barf_forward()
        assert not result.ok
        assert result.reason == "group is empty"
        assert session.text == "()"


words = st.lists(st.from_regex(r"[a-z]{1,5}", fullmatch=True), min_size=1, max_size=5)
word = st.from_regex(r"[a-z]{1,5}", fullmatch=True)


class TestSlurpBarfInverse:
    """slurp followed by barf in the same direction restores the text."""

    @given(words, word)
    @settings(max_examples=100)
    def test_forward(self, inner: list[str], outside: str) -> None:
        text = "(" + " ".join(inner) + ") " + outside
        session = Session(text, point=1)
        assert session.slurp_forward().ok
        assert session.barf_forward().ok
        assert session.text == text

    @given(word, words)
    @settings(max_examples=100)
    def test_backward(self, outside: str, inner: list[str]) -> None:
        text = outside + " (" + " ".join(inner) + ")"
        session = Session(text, point=len(text) - 1)
        assert session.slurp_backward().ok
        assert session.barf_backward().ok
        assert session.text == text

    def test_whitespace_before_closer_stays(self) -> None:
        """Only delimiters move, so a gap before the closer is not restored."""
        session = Session("(a ) b", point=1)
        assert session.slurp_forward().ok
        assert session.text == "(a  b)"
        assert session.barf_forward().ok
        assert session.text == "(a)  b"

    def test_sized_brackets(self) -> None:
        text = "\\bigl[ a\\bigr] b"
        session = Session(text, point=7)
        assert slurp_forward(session.navigator).ok
        assert session.text == "\\bigl[ a b\\bigr]"
        assert barf_forward(session.navigator).ok
        assert session.text == text


class TestRaise:
    def test_raise_single_child(self) -> None:
        session = Session("x [(a b)] y", point=3)
        assert session.raise_sexp().ok
        assert session.text == "x (a b) y"
        assert session.point == 2

    def test_raise_atom(self) -> None:
        session = Session("f(\\left( a + b \\right))", point=9)
        assert session.raise_sexp().ok
        assert session.text == "f(a)"

    def test_raise_several(self) -> None:
        session = Session("(a b c)", point=1)
        assert session.raise_sexp(2).ok
        assert session.text == "a b"

    def test_not_enough_expressions(self) -> None:
        session = Session("(a b)", point=1)
        result = session.raise_sexp(3)
        assert not result.ok
        assert result.reason == "not enough expressions"
        assert session.text == "(a b)"

    def test_non_positive_count(self) -> None:
        result = Session("(a)", point=1).raise_sexp(0)
        assert result.status is EditStatus.ABORTED

    def test_top_level(self) -> None:
        session = Session("a b", point=0)
        assert not session.raise_sexp().ok
        assert session.text == "a b"

    @given(
        st.lists(word, max_size=3),
        st.one_of(word, words.map(lambda w: "(" + " ".join(w) + ")")),
        st.lists(word, max_size=3),
    )
    @settings(max_examples=100)
    def test_only_group_changes(self, before: list[str], child: str, after: list[str]) -> None:
        prefix = "".join(w + " " for w in before)
        suffix = "".join(" " + w for w in after)
        text = prefix + "[" + child + "]" + suffix
        session = Session(text, point=len(prefix) + 1)
        assert session.raise_sexp().ok
        assert session.text == prefix + child + suffix


class TestDeletePair:
    def test_delete_sized_pair(self) -> None:
        session = Session("x \\left( a \\right) y", point=9)
        assert session.delete_pair().ok
        assert session.text == "x  a  y"
        assert session.point == 3

    def test_delete_environment(self) -> None:
        session = Session("\\begin{prop}x\\end{prop}", point=12)
        assert session.delete_pair().ok
        assert session.text == "x"

    def test_top_level(self) -> None:
        assert not Session("a", point=0).delete_pair().ok


class TestMarking:
    def test_mark_sexp(self) -> None:
        session = Session("a (b c) d", point=0)
        assert session.mark_sexp(2).ok
        assert session.buffer.pop_mark() == 7
        assert session.point == 0

    def test_mark_sexp_too_many(self) -> None:
        session = Session("a", point=0)
        assert not session.mark_sexp(2).ok
        assert session.buffer.pop_mark() is None

    def test_mark_inner(self) -> None:
        session = Session("x \\bigl[ a b \\bigr]", point=10)
        assert session.mark_inner().ok
        assert session.point == len("x \\bigl[")
        assert session.buffer.pop_mark() == len("x \\bigl[ a b ")


class TestEditProfiling:
    def test_edits_recorded(self) -> None:
        with profiled_navigation() as acc:
            session = Session("(a) b", point=2)
            session.slurp_forward()
            session.slurp_forward()
            assert get_nav_accumulator() is acc
        assert acc.edits_applied == 1
        assert acc.edits_aborted == 1
