"""Delimiter table construction.

Derives the full open/close vocabulary from a small configuration:

- irregular pairs and math toggles, verbatim
- base bracket pairs, verbatim
- base pair x modifier pair   (``\\left`` + ``(``  /  ``\\right`` + ``)``)
- base pair x solo modifier    (``\\big`` + ``(``   /  ``\\big`` + ``)``)
- solo bracket x modifier pair (``\\left`` + ``|``  /  ``\\right`` + ``|``)

and compiles six matchers from the result: general, general with optional
environment arguments, open-only, close-only, and the reversed (backward)
forms of the first two.

Thread Safety:
    DelimiterTable is frozen and only read after construction. The table
    cache is guarded by a lock; a rebuilt table never replaces one that a
    caller already holds.

Example:
    >>> from llaves.table import get_delimiter_table
    >>> table = get_delimiter_table()
    >>> table.open_to_close["\\\\bigl["]
    '\\\\bigr]'

"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from llaves.config import NavConfig, get_nav_config
from llaves.errors import DelimiterConfigError
from llaves.matching.patterns import (
    COMMAND_BRACE,
    COMMAND_BRACE_REVERSED,
    ENV_BEGIN,
    ENV_BEGIN_REVERSED,
    ENV_BEGIN_WITH_ARGS,
    ENV_BEGIN_WITH_ARGS_REVERSED,
    ENV_END,
    ENV_END_REVERSED,
    compile_alternation,
)
from llaves.matching.trie import LiteralTrie
from llaves.tokens import TokenKind
from llaves.utils.logger import get_logger

logger = get_logger(__name__)

PatternSet = tuple[tuple[re.Pattern[str], TokenKind], ...]


@dataclass(frozen=True, slots=True)
class DelimiterSpec:
    """One open/close pair of the vocabulary.

    Math toggles are self-paired: open and close are the same literal.

    Attributes:
        open: Opening literal
        close: Closing literal
        kind: Category of the pair

    """

    open: str
    close: str
    kind: TokenKind

    @property
    def is_self_paired(self) -> bool:
        return self.open == self.close


@dataclass(frozen=True, slots=True)
class DelimiterTable:
    """Immutable delimiter vocabulary plus compiled matchers.

    Attributes:
        specs: Every pair, in construction order
        opens: All opening literals (math toggles included)
        closes: All closing literals (math toggles included)
        open_to_close: Opening literal -> closing literal
        close_to_open: Closing literal -> opening literal
        kinds: Literal -> TokenKind
        math_toggles: The self-paired math delimiters
        closing_quotes: Closing quotes that are primes in math
        max_token_length: Configured literal length limit
        general: Forward matcher
        general_with_args: Forward matcher, \\begin{..} with one optional argument
        open_only: Opening tokens only
        close_only: Closing tokens only
        backward: Reversed general matcher
        backward_with_args: Reversed general_with_args matcher
        forward_trie: Trie over the literals
        backward_trie: Trie over the reversed literals
        forward_patterns: Pattern tokens for the general matcher
        forward_patterns_with_args: Pattern tokens for general_with_args
        backward_patterns: Reversed pattern tokens for backward
        backward_patterns_with_args: Reversed pattern tokens for backward_with_args

    """

    specs: tuple[DelimiterSpec, ...]
    opens: frozenset[str]
    closes: frozenset[str]
    open_to_close: Mapping[str, str]
    close_to_open: Mapping[str, str]
    kinds: Mapping[str, TokenKind]
    math_toggles: tuple[str, ...]
    closing_quotes: frozenset[str]
    max_token_length: int
    general: re.Pattern[str]
    general_with_args: re.Pattern[str]
    open_only: re.Pattern[str]
    close_only: re.Pattern[str]
    backward: re.Pattern[str]
    backward_with_args: re.Pattern[str]
    forward_trie: LiteralTrie
    backward_trie: LiteralTrie
    forward_patterns: PatternSet
    forward_patterns_with_args: PatternSet
    backward_patterns: PatternSet
    backward_patterns_with_args: PatternSet

    @property
    def literals(self) -> frozenset[str]:
        """Every literal token (opens and closes)."""
        return self.opens | self.closes

    def is_math_toggle(self, literal: str) -> bool:
        return literal in self.math_toggles


def _check_literal(literal: str, config: NavConfig, what: str) -> None:
    if not isinstance(literal, str) or not literal:
        raise DelimiterConfigError(f"Empty {what} literal", literal if literal else None)
    if len(literal) > config.max_token_length:
        raise DelimiterConfigError(
            f"{what} literal longer than max_token_length={config.max_token_length}", literal
        )


def _check_unique(items: Iterable[object], what: str) -> None:
    seen: set[object] = set()
    for item in items:
        if item in seen:
            raise DelimiterConfigError(f"Duplicate entry in {what}", str(item))
        seen.add(item)


def _validate(config: NavConfig) -> None:
    """Fail fast on malformed configuration literals."""
    for name in ("base_pairs", "modifier_pairs", "irregular_pairs"):
        pairs = getattr(config, name)
        _check_unique(pairs, name)
        for pair in pairs:
            if len(pair) != 2:
                raise DelimiterConfigError(f"{name} entries must be (open, close) pairs", str(pair))
            _check_literal(pair[0], config, name)
            _check_literal(pair[1], config, name)
    for name in ("solo_brackets", "solo_modifiers", "closing_quotes"):
        values = getattr(config, name)
        _check_unique(values, name)
        for value in values:
            _check_literal(value, config, name)
    if len(config.math_toggles) != 2:
        raise DelimiterConfigError("math_toggles must hold exactly two tokens")
    _check_unique(config.math_toggles, "math_toggles")
    for toggle in config.math_toggles:
        _check_literal(toggle, config, "math_toggles")
    if config.horizon <= 0:
        raise DelimiterConfigError(f"horizon must be positive, got {config.horizon}")


def _derive_specs(config: NavConfig) -> list[DelimiterSpec]:
    specs: list[DelimiterSpec] = []
    for open_, close in config.irregular_pairs:
        specs.append(DelimiterSpec(open_, close, TokenKind.IRREGULAR))
    for toggle in config.math_toggles:
        specs.append(DelimiterSpec(toggle, toggle, TokenKind.MATH_TOGGLE))
    for open_, close in config.base_pairs:
        specs.append(DelimiterSpec(open_, close, TokenKind.BRACKET))
    for open_, close in config.base_pairs:
        for mod_open, mod_close in config.modifier_pairs:
            specs.append(
                DelimiterSpec(mod_open + open_, mod_close + close, TokenKind.SIZED_BRACKET)
            )
        for modifier in config.solo_modifiers:
            specs.append(
                DelimiterSpec(modifier + open_, modifier + close, TokenKind.SIZED_BRACKET)
            )
    for bracket in config.solo_brackets:
        for mod_open, mod_close in config.modifier_pairs:
            specs.append(
                DelimiterSpec(mod_open + bracket, mod_close + bracket, TokenKind.SIZED_BRACKET)
            )
    return specs


def build_delimiter_table(config: NavConfig) -> DelimiterTable:
    """Build the delimiter table for a configuration.

    Pure function: identical configuration yields an identical vocabulary,
    pairing maps and matcher sources.

    Args:
        config: Vocabulary configuration

    Returns:
        Frozen DelimiterTable

    Raises:
        DelimiterConfigError: If a literal is empty, too long, duplicated,
            or paired inconsistently.
    """
    _validate(config)
    specs = _derive_specs(config)

    open_to_close: dict[str, str] = {}
    close_to_open: dict[str, str] = {}
    kinds: dict[str, TokenKind] = {}
    toggles = frozenset(config.math_toggles)

    for spec in specs:
        _check_literal(spec.open, config, "derived")
        _check_literal(spec.close, config, "derived")
        if spec.kind is TokenKind.MATH_TOGGLE:
            if spec.open in kinds:
                raise DelimiterConfigError("Math toggle collides with a bracket", spec.open)
        elif spec.open in toggles or spec.close in toggles:
            raise DelimiterConfigError(
                "Math toggle collides with a bracket",
                spec.open if spec.open in toggles else spec.close,
            )
        if spec.open in open_to_close:
            raise DelimiterConfigError("Duplicate opening token", spec.open)
        if spec.close in close_to_open and not spec.is_self_paired:
            raise DelimiterConfigError("Closing token has two openers", spec.close)
        open_to_close[spec.open] = spec.close
        close_to_open[spec.close] = spec.open
        kinds[spec.open] = spec.kind
        kinds[spec.close] = spec.kind

    opens = frozenset(open_to_close)
    closes = frozenset(close_to_open)
    for literal in opens & closes:
        if literal not in toggles:
            raise DelimiterConfigError("Token is both an opener and a closer", literal)

    literals = opens | closes
    env = TokenKind.ENVIRONMENT
    brace = TokenKind.COMMAND_BRACE
    forward_patterns = (ENV_BEGIN, ENV_END, COMMAND_BRACE)
    forward_patterns_with_args = (ENV_BEGIN_WITH_ARGS, ENV_END, COMMAND_BRACE)
    backward_patterns = (ENV_BEGIN_REVERSED, ENV_END_REVERSED, COMMAND_BRACE_REVERSED)
    backward_patterns_with_args = (
        ENV_BEGIN_WITH_ARGS_REVERSED,
        ENV_END_REVERSED,
        COMMAND_BRACE_REVERSED,
    )
    pattern_kinds = (env, env, brace)

    def _pattern_set(sources: tuple[str, ...]) -> PatternSet:
        return tuple(
            (re.compile(source), kind) for source, kind in zip(sources, pattern_kinds, strict=True)
        )

    table = DelimiterTable(
        specs=tuple(specs),
        opens=opens,
        closes=closes,
        open_to_close=MappingProxyType(open_to_close),
        close_to_open=MappingProxyType(close_to_open),
        kinds=MappingProxyType(kinds),
        math_toggles=tuple(config.math_toggles),
        closing_quotes=frozenset(config.closing_quotes),
        max_token_length=config.max_token_length,
        general=compile_alternation(literals, forward_patterns),
        general_with_args=compile_alternation(literals, forward_patterns_with_args),
        open_only=compile_alternation(opens, (ENV_BEGIN_WITH_ARGS, COMMAND_BRACE)),
        close_only=compile_alternation(closes, (ENV_END,)),
        backward=compile_alternation(literals, backward_patterns, reverse=True),
        backward_with_args=compile_alternation(
            literals, backward_patterns_with_args, reverse=True
        ),
        forward_trie=LiteralTrie(sorted(literals)),
        backward_trie=LiteralTrie(sorted(lit[::-1] for lit in literals)),
        forward_patterns=_pattern_set(forward_patterns),
        forward_patterns_with_args=_pattern_set(forward_patterns_with_args),
        backward_patterns=_pattern_set(backward_patterns),
        backward_patterns_with_args=_pattern_set(backward_patterns_with_args),
    )
    logger.debug("Built delimiter table: %d pairs, %d literals", len(specs), len(literals))
    return table


_TABLE_CACHE: dict[NavConfig, DelimiterTable] = {}
_TABLE_LOCK = threading.Lock()


def get_delimiter_table(config: NavConfig | None = None) -> DelimiterTable:
    """Get the (cached) table for a configuration.

    Args:
        config: Configuration to build from (default: the active NavConfig)

    Returns:
        DelimiterTable, built on first request for this configuration
    """
    if config is None:
        config = get_nav_config()
    table = _TABLE_CACHE.get(config)
    if table is not None:
        return table
    with _TABLE_LOCK:
        table = _TABLE_CACHE.get(config)
        if table is None:
            table = build_delimiter_table(config)
            _TABLE_CACHE[config] = table
        return table


def clear_table_cache() -> None:
    """Drop all cached tables."""
    with _TABLE_LOCK:
        _TABLE_CACHE.clear()


__all__ = [
    "DelimiterSpec",
    "DelimiterTable",
    "build_delimiter_table",
    "clear_table_cache",
    "get_delimiter_table",
]
