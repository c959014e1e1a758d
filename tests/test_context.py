"""Tests for the lexical context oracle."""

from hypothesis import given, settings
from hypothesis import strategies as st

from llaves import ContextOracle, LexicalContextOracle, StringBuffer


def depths(text: str) -> list[int]:
    oracle = LexicalContextOracle(StringBuffer(text))
    return [oracle.math_depth(i) for i in range(len(text) + 1)]


class TestComments:
    """Percent comments run to the end of the line."""

    def test_comment_span(self) -> None:
        oracle = LexicalContextOracle(StringBuffer("a % b\nc"))
        assert not oracle.is_comment(1)
        assert oracle.is_comment(2)
        assert oracle.is_comment(4)
        assert not oracle.is_comment(5)
        assert not oracle.is_comment(6)
        assert oracle.comment_ranges() == [(2, 5)]

    def test_escaped_percent(self) -> None:
        oracle = LexicalContextOracle(StringBuffer("50\\% off"))
        assert oracle.comment_ranges() == []

    def test_comment_to_end_of_buffer(self) -> None:
        oracle = LexicalContextOracle(StringBuffer("x % tail"))
        assert oracle.is_comment(7)

    def test_dollar_in_comment_ignored(self) -> None:
        assert depths("% $\nx")[-1] == 0


class TestMathDepth:
    """Depth changes take effect at the end of the toggling token."""

    def test_inline_dollars(self) -> None:
        assert depths("$x$") == [0, 1, 1, 0]

    def test_display_dollars(self) -> None:
        assert depths("$$x$$") == [0, 0, 1, 1, 1, 0]

    def test_paren_and_bracket_math(self) -> None:
        assert depths("\\(x\\)") == [0, 0, 1, 1, 1, 0]
        assert depths("\\[x\\]")[3] == 1

    def test_math_environment(self) -> None:
        text = "\\begin{equation}x\\end{equation}"
        values = depths(text)
        assert values[16] == 1
        assert values[-1] == 0

    def test_non_math_environment(self) -> None:
        assert max(depths("\\begin{prop}x\\end{prop}")) == 0

    def test_custom_math_environments(self) -> None:
        buffer = StringBuffer("\\begin{prop}x\\end{prop}")
        oracle = LexicalContextOracle(buffer, math_environments=("prop",))
        assert oracle.math_depth(12) == 1

    def test_escaped_dollar(self) -> None:
        assert max(depths("\\$5")) == 0

    def test_nested_text_math(self) -> None:
        """Inline math inside display math nests."""
        values = depths("\\[a $b$ c\\]")
        assert values[5] == 2
        assert values[8] == 1

    def test_depth_never_negative(self) -> None:
        assert min(depths("\\)\\]$$")) == 0


class TestRefresh:
    """Analysis follows buffer revisions."""

    def test_recomputed_after_edit(self) -> None:
        buffer = StringBuffer("x")
        oracle = LexicalContextOracle(buffer)
        assert oracle.math_depth(1) == 0
        buffer.insert(0, "$")
        assert oracle.math_depth(1) == 1

    def test_satisfies_protocol(self) -> None:
        assert isinstance(LexicalContextOracle(StringBuffer()), ContextOracle)


class TestInvariants:
    """Properties that hold for any input."""

    @given(st.text(alphabet="$\\()[]%\nab ", max_size=200))
    @settings(max_examples=200)
    def test_depth_changes_by_at_most_one_per_char(self, text: str) -> None:
        values = depths(text)
        assert all(v >= 0 for v in values)
        for i in range(len(text)):
            # A two-character token moves depth at its end only
            assert abs(values[i + 1] - values[i]) <= 1
