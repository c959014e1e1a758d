"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_document() -> str:
    """Generate a large LaTeX document (~100KB) of nested groups."""
    sections = []
    for i in range(200):
        sections.append(
            rf"""
\section{{Part {i}}}
% comment with stray ) and \right] delimiters
\begin{{prop}}[Claim {i}]
Let $f''(x) = \left( a_{i} + \bigl[ b^{{2}} \bigr] \right)$ and
$$\Big\langle u, \frac{{v}}{{w}} \Big\rangle = \{{ x : x > {i} \}}$$
\end{{prop}}
"""
        )
    return "".join(sections)
