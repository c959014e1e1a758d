"""Regex sources for pattern-recognized delimiters.

Environment markers and command-argument braces are not part of the literal
vocabulary; they are recognized by these patterns. Each pattern has a
reversed twin that matches the character-reversed token, for backward scans
over reversed buffer text.

Usage:
    from llaves.matching.patterns import literal_source

    source = literal_source("\\\\langle")  # escaped, with letter boundary
"""

import re

ASCII_LETTERS: frozenset[str] = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")

# \begin{name} and \end{name}
ENV_BEGIN = r"\\begin\{[^{}\\\s]+\}"
ENV_END = r"\\end\{[^{}\\\s]+\}"

# One optional [..] or {..} argument directly after \begin{name}
ENV_BEGIN_WITH_ARGS = ENV_BEGIN + r"(?:\[[^\[\]]*\]|\{[^{}]*\})?"

# \name{ and \name*{
COMMAND_BRACE = r"\\[A-Za-z@]+\*?\{"

ENV_BEGIN_REVERSED = r"\}[^{}\\\s]+\{nigeb\\"
ENV_END_REVERSED = r"\}[^{}\\\s]+\{dne\\"
ENV_BEGIN_WITH_ARGS_REVERSED = r"(?:\][^\[\]]*\[|\}[^{}]*\{)?" + ENV_BEGIN_REVERSED
COMMAND_BRACE_REVERSED = r"\{\*?[A-Za-z@]+\\"

ENV_NAME_RE = re.compile(r"\\(begin|end)\{([^{}\\\s]+)\}")


def literal_source(literal: str, *, reverse: bool = False) -> str:
    """Regex source for one literal token.

    Literals ending in a letter (``\\langle``) must not run into another
    letter, otherwise ``\\langlex`` would match. In the reversed form the
    guard becomes a lookbehind, since the character after the token comes
    first in reversed text.

    Args:
        literal: Token text in reading order
        reverse: Build the source for the reversed literal

    Returns:
        Regex source string
    """
    text = literal[::-1] if reverse else literal
    source = re.escape(text)
    if literal[-1] in ASCII_LETTERS:
        source = f"(?<![A-Za-z]){source}" if reverse else f"{source}(?![A-Za-z])"
    return source


def compile_alternation(
    literals: frozenset[str], patterns: tuple[str, ...], *, reverse: bool = False
) -> re.Pattern[str]:
    """Compile literals and patterns into one alternation.

    Literals are ordered longest first, then lexically, so the compiled
    source is identical for identical input.
    """
    ordered = sorted(literals, key=lambda lit: (-len(lit), lit))
    parts = list(patterns)
    parts.extend(literal_source(lit, reverse=reverse) for lit in ordered)
    return re.compile("|".join(parts))


def environment_name(token_text: str) -> tuple[str, str] | None:
    """Split an environment marker into ("begin" | "end", name)."""
    match = ENV_NAME_RE.match(token_text)
    if match is None:
        return None
    return match.group(1), match.group(2)
