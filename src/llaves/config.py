"""ContextVar-based navigation configuration for Llaves.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The config describes the delimiter vocabulary (bracket pairs, sizing
modifiers, irregular pairs, math toggles) plus the search horizon and the
comment-ignoring flag. It is read by every navigation call in the context.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from llaves.config import NavConfig, nav_config_context

    with nav_config_context(NavConfig(horizon=2000)):
        session.forward_sexp()

Reconfiguration:
    Installing a new config never mutates a table that is already built.
    Calls in flight keep the table they started with; the next call picks up
    the table for the new config (see ``llaves.table.get_delimiter_table``).

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

Pair = tuple[str, str]

DEFAULT_BASE_PAIRS: tuple[Pair, ...] = (
    ("(", ")"),
    ("[", "]"),
    ("\\{", "\\}"),
    ("\\langle", "\\rangle"),
    ("\\lvert", "\\rvert"),
    ("\\lVert", "\\rVert"),
    ("\\lfloor", "\\rfloor"),
    ("\\lceil", "\\rceil"),
)

# Brackets that look the same on both sides; only valid with a modifier pair
DEFAULT_SOLO_BRACKETS: tuple[str, ...] = ("|", "\\|", "\\vert", "\\Vert", ".")

DEFAULT_MODIFIER_PAIRS: tuple[Pair, ...] = (
    ("\\left", "\\right"),
    ("\\bigl", "\\bigr"),
    ("\\Bigl", "\\Bigr"),
    ("\\biggl", "\\biggr"),
    ("\\Biggl", "\\Biggr"),
)

DEFAULT_SOLO_MODIFIERS: tuple[str, ...] = ("\\big", "\\Big", "\\bigg", "\\Bigg")

# Pairs taken verbatim, never combined with modifiers
DEFAULT_IRREGULAR_PAIRS: tuple[Pair, ...] = (
    ("{", "}"),
    ("\\(", "\\)"),
    ("\\[", "\\]"),
    ("``", "''"),
)

DEFAULT_MATH_TOGGLES: tuple[str, str] = ("$", "$$")

# Closing quotes that are prime marks inside math
DEFAULT_CLOSING_QUOTES: tuple[str, ...] = ("''",)

DEFAULT_MATH_ENVIRONMENTS: tuple[str, ...] = (
    "equation",
    "equation*",
    "align",
    "align*",
    "alignat",
    "alignat*",
    "gather",
    "gather*",
    "multline",
    "multline*",
    "flalign",
    "flalign*",
    "displaymath",
    "math",
)


@dataclass(frozen=True, slots=True)
class NavConfig:
    """Immutable navigation configuration.

    Frozen dataclass with tuple-valued fields, so instances are hashable and
    can key the delimiter table cache.

    Attributes:
        base_pairs: Bracket pairs usable alone or with modifiers
        solo_brackets: Same-glyph brackets, combined with modifier pairs only
        modifier_pairs: Sizing modifier pairs (e.g. \\left / \\right)
        solo_modifiers: Sizing modifiers used on both sides (e.g. \\big)
        irregular_pairs: Pairs never combined with modifiers
        math_toggles: The two self-paired math delimiters (inline, display)
        closing_quotes: Closing quotes treated as primes inside math
        math_environments: Environment names that enter math mode
        max_token_length: Upper bound on the length of any literal token
        horizon: Maximum scan distance in either direction
        ignore_comments: Skip delimiters inside comments

    """

    base_pairs: tuple[Pair, ...] = DEFAULT_BASE_PAIRS
    solo_brackets: tuple[str, ...] = DEFAULT_SOLO_BRACKETS
    modifier_pairs: tuple[Pair, ...] = DEFAULT_MODIFIER_PAIRS
    solo_modifiers: tuple[str, ...] = DEFAULT_SOLO_MODIFIERS
    irregular_pairs: tuple[Pair, ...] = DEFAULT_IRREGULAR_PAIRS
    math_toggles: tuple[str, str] = DEFAULT_MATH_TOGGLES
    closing_quotes: tuple[str, ...] = DEFAULT_CLOSING_QUOTES
    math_environments: tuple[str, ...] = DEFAULT_MATH_ENVIRONMENTS
    max_token_length: int = 32
    horizon: int = 10_000
    ignore_comments: bool = True

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "NavConfig":
        """Create NavConfig from a mapping.

        Useful when the vocabulary comes from JSON or YAML. Lists are
        converted to tuples (pairs to 2-tuples) so the result stays hashable.
        Unknown keys are silently ignored.

        Args:
            config_dict: Mapping with config values. Keys should match
                NavConfig attribute names.

        Returns:
            New NavConfig instance with values from the mapping.

        Example:
            >>> config = NavConfig.from_dict({
            ...     "solo_modifiers": ["\\\\big"],
            ...     "horizon": 500,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.horizon
            500

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            if key not in valid_fields:
                continue
            if isinstance(value, list | tuple):
                value = tuple(
                    tuple(item) if isinstance(item, list | tuple) else item for item in value
                )
            filtered[key] = value
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: NavConfig = NavConfig()

# Thread-local configuration via ContextVar
_nav_config: ContextVar[NavConfig] = ContextVar(
    "nav_config",
    default=_DEFAULT_CONFIG,
)


def get_nav_config() -> NavConfig:
    """Get current navigation configuration (thread-local).

    Returns:
        The active NavConfig for this thread/context.

    """
    return _nav_config.get()


def set_nav_config(config: NavConfig) -> None:
    """Set navigation configuration for current context.

    Args:
        config: NavConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _nav_config.set(config)


def reset_nav_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _nav_config.set(_DEFAULT_CONFIG)


@contextmanager
def nav_config_context(config: NavConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: NavConfig to use within the context.

    Yields:
        None

    Example:
        >>> with nav_config_context(NavConfig(ignore_comments=False)):
        ...     result = session.forward_sexp()
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _nav_config.get()
    _nav_config.set(config)
    try:
        yield
    finally:
        _nav_config.set(previous)


__all__ = [
    "NavConfig",
    "get_nav_config",
    "set_nav_config",
    "reset_nav_config",
    "nav_config_context",
]
