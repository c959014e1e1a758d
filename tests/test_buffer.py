"""Tests for the in-memory text buffer."""

import pytest

from llaves import StringBuffer, TextBuffer


class TestReading:
    def test_substring_clamped(self) -> None:
        buffer = StringBuffer("abcdef")
        assert buffer.substring(2, 4) == "cd"
        assert buffer.substring(-5, 2) == "ab"
        assert buffer.substring(4, 100) == "ef"
        assert buffer.substring(4, 2) == ""

    def test_reversed_window(self) -> None:
        assert StringBuffer("abcdef").reversed_window(1, 4) == "dcb"

    def test_char_at(self) -> None:
        buffer = StringBuffer("ab")
        assert buffer.char_at(1) == "b"
        assert buffer.char_at(2) == ""
        assert buffer.char_at(-1) == ""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(StringBuffer(), TextBuffer)


class TestPoint:
    def test_initial_point_validated(self) -> None:
        with pytest.raises(ValueError):
            StringBuffer("ab", point=3)

    def test_insert_before_point_shifts(self) -> None:
        buffer = StringBuffer("abc", point=2)
        buffer.insert(0, "xx")
        assert buffer.point == 4

    def test_insert_at_point_does_not_shift(self) -> None:
        buffer = StringBuffer("abc", point=2)
        buffer.insert(2, "xx")
        assert buffer.point == 2

    def test_delete_around_point(self) -> None:
        buffer = StringBuffer("abcdef", point=3)
        assert buffer.delete(1, 5) == "bcde"
        assert buffer.point == 1
        assert buffer.text == "af"

    def test_delete_before_point(self) -> None:
        buffer = StringBuffer("abcdef", point=5)
        buffer.delete(0, 2)
        assert buffer.point == 3

    def test_out_of_range_edits(self) -> None:
        buffer = StringBuffer("ab")
        with pytest.raises(ValueError):
            buffer.insert(3, "x")
        with pytest.raises(ValueError):
            buffer.delete(1, 3)


class TestMarks:
    def test_push_and_pop(self) -> None:
        buffer = StringBuffer("abc", point=1)
        buffer.push_mark()
        buffer.push_mark(3)
        assert buffer.mark == 3
        assert buffer.pop_mark() == 3
        assert buffer.pop_mark() == 1
        assert buffer.pop_mark() is None

    def test_marks_follow_edits(self) -> None:
        buffer = StringBuffer("abcdef")
        buffer.push_mark(4)
        buffer.insert(1, "xy")
        assert buffer.mark == 6
        buffer.delete(0, 3)
        assert buffer.mark == 3


class TestRevision:
    def test_edits_bump_revision(self) -> None:
        buffer = StringBuffer("ab")
        start = buffer.revision
        buffer.insert(1, "x")
        buffer.delete(0, 1)
        assert buffer.revision == start + 2

    def test_noop_edits_keep_revision(self) -> None:
        buffer = StringBuffer("ab")
        buffer.insert(1, "")
        buffer.delete(1, 1)
        assert buffer.revision == 0


class TestTransaction:
    """transaction() rolls back every edit when the block raises."""

    def test_commit(self) -> None:
        buffer = StringBuffer("(a) b", point=2)
        with buffer.transaction():
            buffer.delete(2, 3)
            buffer.insert(4, ")")
        assert buffer.text == "(a b)"
        assert not buffer.in_transaction

    def test_rollback_restores_text_point_and_marks(self) -> None:
        buffer = StringBuffer("(a) b", point=2)
        buffer.push_mark(5)
        with pytest.raises(RuntimeError):
            with buffer.transaction():
                buffer.delete(0, 3)
                buffer.point = 1
                buffer.push_mark(0)
                raise RuntimeError("boom")
        assert buffer.text == "(a) b"
        assert buffer.point == 2
        assert buffer.pop_mark() == 5
        assert buffer.pop_mark() is None

    def test_rollback_bumps_revision(self) -> None:
        buffer = StringBuffer("abc")
        with pytest.raises(KeyError):
            with buffer.transaction():
                buffer.delete(0, 1)
                raise KeyError("x")
        # Revision moves forward so cached analyses are refreshed
        assert buffer.revision == 2

    def test_nested_rollback(self) -> None:
        buffer = StringBuffer("abc")
        with buffer.transaction():
            buffer.insert(0, "x")
            with pytest.raises(ValueError):
                with buffer.transaction():
                    assert buffer.in_transaction
                    buffer.delete(0, 2)
                    raise ValueError
        assert buffer.text == "xabc"
