"""Balanced navigation over delimiter tokens.

BalancedNavigator drives a single stack machine (see engine.py) for every
primitive: balanced groups, up/down a level, and atom-or-group expression
steps. Results are plain values; nothing here moves the buffer's point.
"""

from llaves.navigation.engine import BalancedNavigator
from llaves.navigation.results import NavResult, NavStatus
from llaves.navigation.stack import MatchStack, Mismatch, PopOutcome

__all__ = [
    "BalancedNavigator",
    "MatchStack",
    "Mismatch",
    "NavResult",
    "NavStatus",
    "PopOutcome",
]
