"""Shared pytest fixtures for graph_matrix tests."""

from __future__ import annotations

import networkx as nx
import pytest

from graph_matrix import BACKENDS


@pytest.fixture(params=sorted(BACKENDS))
def backend(request) -> str:
    """Every registered matrix backend."""
    return request.param


@pytest.fixture
def two_cycles_and_tail() -> nx.DiGraph:
    """Two 2-cycles joined by a bridge, plus a sink: {a,b} -> {c,d} -> e."""
    g = nx.DiGraph()
    g.add_nodes_from("abcde")
    g.add_edges_from([("a", "b"), ("b", "a"), ("b", "c"), ("c", "d"), ("d", "c"), ("d", "e")])
    return g


@pytest.fixture
def random_digraphs() -> list:
    """Deterministic sample of random directed graphs, some with self-loops."""
    graphs = []
    for seed in range(8):
        g = nx.gnp_random_graph(7, 0.25, seed=seed, directed=True)
        if seed % 3 == 0:
            g.add_edge(seed % 7, seed % 7)
        graphs.append(g)
    return graphs
