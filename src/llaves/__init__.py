"""
Llaves: balanced delimiter navigation for LaTeX

Finds, classifies and matches LaTeX delimiters (brackets, sized brackets
such as ``\\left(``/``\\bigr]``, ``\\begin{env}``/``\\end{env}``, math
toggles and command braces) and moves over balanced groups the way a
structural editor does. Comments and math context are respected, and
every search is bounded by a horizon.

Quick Start:
    >>> from llaves import Session
    >>> session = Session(r"x = \\left( a + \\bigl[ b \\bigr] \\right) + c", point=4)
    >>> session.forward_sexp().position
    38
    >>> session.up_list().ok  # already at top level
    False

Structural edits:
    >>> session = Session("(a) b", point=2)
    >>> session.slurp_forward().ok
    True
    >>> session.text
    '(a b)'

Custom vocabulary:
    >>> from llaves import NavConfig, nav_config_context
    >>> with nav_config_context(NavConfig(solo_modifiers=())):
    ...     session = Session(r"\\big( x \\big)")

Installation:
    pip install llaves              # zero runtime dependencies
    pip install llaves[test]        # + pytest, hypothesis
"""

from llaves.buffer import StringBuffer
from llaves.config import (
    NavConfig,
    get_nav_config,
    nav_config_context,
    reset_nav_config,
    set_nav_config,
)
from llaves.context import LexicalContextOracle
from llaves.editing import (
    EditResult,
    EditStatus,
    barf_backward,
    barf_forward,
    delete_pair,
    mark_inner,
    mark_sexp,
    raise_sexp,
    slurp_backward,
    slurp_forward,
)
from llaves.errors import DelimiterConfigError, LlavesError, MutationAborted
from llaves.matching import Classifier, LiteralTrie, TokenMatcher
from llaves.navigation import (
    BalancedNavigator,
    MatchStack,
    Mismatch,
    NavResult,
    NavStatus,
    PopOutcome,
)
from llaves.profiling import NavAccumulator, get_nav_accumulator, profiled_navigation
from llaves.protocols import ContextOracle, TextBuffer, UnitScanner
from llaves.scanner import WordScanner
from llaves.session import Session
from llaves.table import (
    DelimiterSpec,
    DelimiterTable,
    build_delimiter_table,
    clear_table_cache,
    get_delimiter_table,
)
from llaves.tokens import DelimiterToken, Direction, Role, TokenKind

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # High-level
    "Session",
    # Configuration (ContextVar-based)
    "NavConfig",
    "get_nav_config",
    "set_nav_config",
    "reset_nav_config",
    "nav_config_context",
    # Delimiter table
    "DelimiterSpec",
    "DelimiterTable",
    "build_delimiter_table",
    "get_delimiter_table",
    "clear_table_cache",
    # Tokens
    "DelimiterToken",
    "Direction",
    "Role",
    "TokenKind",
    # Matching
    "Classifier",
    "LiteralTrie",
    "TokenMatcher",
    # Navigation
    "BalancedNavigator",
    "MatchStack",
    "Mismatch",
    "NavResult",
    "NavStatus",
    "PopOutcome",
    # Editing
    "EditResult",
    "EditStatus",
    "slurp_forward",
    "slurp_backward",
    "barf_forward",
    "barf_backward",
    "raise_sexp",
    "delete_pair",
    "mark_sexp",
    "mark_inner",
    # Collaborators
    "ContextOracle",
    "LexicalContextOracle",
    "StringBuffer",
    "TextBuffer",
    "UnitScanner",
    "WordScanner",
    # Profiling
    "NavAccumulator",
    "get_nav_accumulator",
    "profiled_navigation",
    # Errors
    "LlavesError",
    "DelimiterConfigError",
    "MutationAborted",
]
