"""Delimiter matching for Llaves.

Architecture:
matching/
├── __init__.py          # Re-exports TokenMatcher, Classifier, LiteralTrie
├── patterns.py          # Environment / command-brace regex sources
├── trie.py              # LiteralTrie for longest-match lookups
├── matcher.py           # TokenMatcher (forward/backward find, ignore rule)
└── classifier.py        # Classifier (open/close, expected counterparts)

"""

from llaves.matching.classifier import Classifier
from llaves.matching.matcher import TokenMatcher
from llaves.matching.trie import LiteralTrie

__all__ = ["Classifier", "LiteralTrie", "TokenMatcher"]
