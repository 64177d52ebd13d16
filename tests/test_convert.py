"""Tests for node indexing and adjacency matrices."""

from __future__ import annotations

import networkx as nx
import pytest

from graph_matrix import (
    DimensionMismatch,
    IndexOutOfRange,
    NodeIndex,
    NodeNotFound,
    identity,
    to_adjacency_matrix,
    to_frame,
)

from graphs import directed_cycle, undirected_path


class TestNodeIndex:
    def test_positions_follow_enumeration_order(self):
        g = nx.DiGraph()
        g.add_nodes_from(["c", "a", "b"])
        idx = NodeIndex.from_graph(g)
        assert [idx.position(v) for v in "cab"] == [0, 1, 2]
        assert idx.node(0) == "c"
        assert list(idx) == ["c", "a", "b"]
        assert len(idx) == 3

    def test_missing_node(self):
        idx = NodeIndex(["a"])
        with pytest.raises(NodeNotFound):
            idx.position("z")
        assert "z" not in idx
        assert "a" in idx

    def test_unhashable_lookup_is_not_found(self):
        idx = NodeIndex(["a"])
        with pytest.raises(NodeNotFound):
            idx.position(["a"])

    def test_position_out_of_range(self):
        with pytest.raises(IndexOutOfRange):
            NodeIndex(["a"]).node(1)

    def test_duplicate_nodes_keep_first_position(self):
        idx = NodeIndex(["a", "b", "a"])
        assert len(idx) == 2
        assert idx.position("a") == 0


class TestAdjacencyMatrix:
    def test_directed_cycle(self, backend):
        A = to_adjacency_matrix(directed_cycle(3), backend=backend)
        assert A.tolist() == [[0, 1, 0], [0, 0, 1], [1, 0, 0]]
        assert len(A.nonzero()) == 3

    def test_undirected_path_is_symmetric(self, backend):
        A = to_adjacency_matrix(undirected_path(3), backend=backend)
        assert A.is_symmetric()
        assert A.tolist() == [[0, 1, 0], [1, 0, 1], [0, 1, 0]]

    def test_self_loops_and_parallel_edges_are_idempotent(self, backend):
        g = nx.MultiDiGraph()
        g.add_edges_from([(0, 1), (0, 1), (0, 1), (1, 1), (1, 1)])
        A = to_adjacency_matrix(g, backend=backend)
        assert A.tolist() == [[0, 1], [0, 1]]

    def test_empty_graph(self, backend):
        A = to_adjacency_matrix(nx.DiGraph(), backend=backend)
        assert A.shape == (0, 0)

    def test_isolated_nodes_get_rows(self, backend):
        g = nx.Graph()
        g.add_nodes_from(range(4))
        assert to_adjacency_matrix(g, backend=backend).nonzero() == []

    def test_precomputed_index_controls_layout(self):
        g = directed_cycle(3)
        idx = NodeIndex([3, 2, 1])
        A = to_adjacency_matrix(g, index=idx)
        # 3 -> 1 is row 0, column 2
        assert A.ref(0, 2) == 1
        assert A.ref(2, 1) == 1

    def test_edge_to_unindexed_node(self):
        with pytest.raises(NodeNotFound):
            to_adjacency_matrix(directed_cycle(3), index=NodeIndex([1, 2]))

    def test_does_not_touch_graph(self):
        g = directed_cycle(4)
        before = sorted(g.edges())
        to_adjacency_matrix(g)
        assert sorted(g.edges()) == before


class TestFrame:
    def test_labels_both_axes(self):
        g = nx.DiGraph([("x", "y")])
        idx = NodeIndex.from_graph(g)
        df = to_frame(to_adjacency_matrix(g, index=idx), idx)
        assert list(df.index) == ["x", "y"]
        assert list(df.columns) == ["x", "y"]
        assert df.loc["x", "y"] == 1
        assert df.loc["y", "x"] == 0

    def test_order_mismatch(self):
        with pytest.raises(DimensionMismatch):
            to_frame(identity(3), NodeIndex(["a", "b"]))
