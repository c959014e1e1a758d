"""Benchmark balanced navigation over a large document.

Run with:
    pytest benchmarks/benchmark_navigation.py -v --benchmark-only
"""

import pytest

from llaves import NavConfig, Session, clear_table_cache, get_delimiter_table


@pytest.mark.benchmark(group="navigate")
def test_benchmark_forward_sexp_whole_document(benchmark, large_document):
    """Step over every top-level expression from start to end."""

    def walk():
        session = Session(large_document)
        while session.forward_sexp().ok:
            pass

    benchmark(walk)


@pytest.mark.benchmark(group="navigate")
def test_benchmark_backward_sexp_whole_document(benchmark, large_document):
    """Same walk in reverse, exercising the reversed-text search."""

    def walk():
        session = Session(large_document, point=len(large_document))
        while session.backward_sexp().ok:
            pass

    benchmark(walk)


@pytest.mark.benchmark(group="navigate")
def test_benchmark_up_list_from_deep_point(benchmark, large_document):
    """Leave the innermost group near the middle of the document."""
    point = large_document.index(r"b^{2}", len(large_document) // 2)

    def climb():
        session = Session(large_document, point=point)
        session.up_list(3)

    benchmark(climb)


@pytest.mark.benchmark(group="table")
def test_benchmark_table_build(benchmark):
    """Compile the default vocabulary without the cache."""

    def build():
        clear_table_cache()
        get_delimiter_table(NavConfig())

    benchmark(build)
