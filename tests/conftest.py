"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
graphs and helpers available to all test files.
"""

import pytest

from graph import Graph


def _undirected(*edges) -> Graph:
    """Build an undirected graph from (a, b, weight) triples."""
    g = Graph()
    for a, b, _ in edges:
        for vid in (a, b):
            if not g.has_vertex(vid):
                g.create_vertex(vid)
    for a, b, w in edges:
        g.create_edge(a, b, weight=w, edge_id=f"{a}{b}")
    return g


@pytest.fixture
def diamond() -> Graph:
    """A-B(1), B-D(2), A-C(4), C-D(1): shortest A->D is A-B-D, cost 3."""
    return _undirected(("A", "B", 1), ("B", "D", 2), ("A", "C", 4), ("C", "D", 1))


@pytest.fixture
def chain() -> Graph:
    """A-B-C-D, unit weights."""
    return _undirected(("A", "B", 1), ("B", "C", 1), ("C", "D", 1))


@pytest.fixture
def split() -> Graph:
    """Two components: A-B and C-D, plus an isolated vertex E."""
    g = _undirected(("A", "B", 1), ("C", "D", 1))
    g.create_vertex("E")
    return g


@pytest.fixture
def build():
    """Factory fixture: build(("A", "B", 1), ...) -> undirected Graph."""
    return _undirected


@pytest.fixture
def drain():
    """Exhaust an executor generator; returns (items, return value)."""

    def _drain(gen):
        items = []
        while True:
            try:
                items.append(next(gen))
            except StopIteration as stop:
                return items, stop.value

    return _drain
