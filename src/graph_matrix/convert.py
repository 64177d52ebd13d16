from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Tuple

import pandas as pd

from .backends import DEFAULT_BACKEND
from .errors import DimensionMismatch, IndexOutOfRange, NodeNotFound
from .matrix import BackendLike, Matrix, zeros

logger = logging.getLogger(__name__)

Node = Hashable


class GraphLike(Protocol):
    """Read-only graph capability consumed by the matrix algorithms.

    networkx ``Graph``/``DiGraph`` (and their multigraph variants) satisfy it.
    """

    def nodes(self) -> Iterable[Node]:
        ...

    def edges(self) -> Iterable[Tuple[Any, ...]]:
        ...

    def is_directed(self) -> bool:
        ...


class NodeIndex:
    """Bijection between graph nodes and matrix positions ``0..n-1``.

    Positions follow the order in which ``graph.nodes()`` yields the nodes.
    The index is a snapshot: it is not updated when the graph changes.
    """

    def __init__(self, nodes: Iterable[Node]):
        self._nodes: List[Node] = []
        self._positions: Dict[Node, int] = {}
        for node in nodes:
            if node not in self._positions:
                self._positions[node] = len(self._nodes)
                self._nodes.append(node)

    @classmethod
    def from_graph(cls, graph: GraphLike) -> "NodeIndex":
        return cls(graph.nodes())

    def position(self, node: Node) -> int:
        """Matrix row/column of ``node``.

        Raises
        ------
        NodeNotFound
            If ``node`` was not enumerated by the graph.
        """
        try:
            return self._positions[node]
        except (KeyError, TypeError):
            raise NodeNotFound(node) from None

    def node(self, position: int) -> Node:
        if not 0 <= position < len(self._nodes):
            raise IndexOutOfRange(f"Position {position} outside node index of size {len(self._nodes)}")
        return self._nodes[position]

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __contains__(self, node: object) -> bool:
        try:
            return node in self._positions
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"NodeIndex(n={len(self._nodes)})"


def resolve_index(graph: GraphLike, index: Optional[NodeIndex] = None) -> NodeIndex:
    """Return ``index`` if given, otherwise build a fresh one from ``graph``."""
    if index is not None:
        return index
    return NodeIndex.from_graph(graph)


def to_adjacency_matrix(
    graph: GraphLike,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
) -> Matrix:
    """0/1 adjacency matrix of ``graph``.

    Parameters
    ----------
    graph:
        Object providing ``nodes()``, ``edges()`` and ``is_directed()``.
    index:
        Precomputed node index. If None, one is built from ``graph.nodes()``.
    backend:
        Matrix backend name or instance.

    Returns
    -------
    Matrix
        n x n matrix with ``A[idx(u)][idx(v)] = 1`` for every edge ``(u, v)``,
        mirrored to ``A[idx(v)][idx(u)]`` when the graph is undirected.
        Self-loops and parallel edges set a cell to 1 at most once.
    """
    idx = resolve_index(graph, index)
    n = len(idx)
    directed = bool(graph.is_directed())
    A = zeros(n, n, backend=backend)

    m = 0
    for edge in graph.edges():
        # multigraph/data variants carry extra members after the endpoints
        u, v = edge[0], edge[1]
        i, j = idx.position(u), idx.position(v)
        A.set(i, j, 1)
        if not directed:
            A.set(j, i, 1)
        m += 1

    logger.debug("adjacency matrix: n=%d edges=%d directed=%s backend=%s", n, m, directed, A.backend)
    return A


def to_frame(matrix: Matrix, index: NodeIndex) -> pd.DataFrame:
    """Label a square graph matrix with its nodes on both axes."""
    check_order(matrix, index)
    labels = pd.Index(index.nodes, tupleize_cols=False)
    return pd.DataFrame(matrix.to_numpy(), index=labels, columns=labels)


def check_order(matrix: Matrix, index: NodeIndex) -> None:
    """Raise DimensionMismatch unless ``matrix`` is n x n for the n nodes of ``index``."""
    n = len(index)
    if matrix.shape != (n, n):
        raise DimensionMismatch(
            f"Matrix of shape {matrix.shape} does not belong to a graph of {n} nodes",
            matrix.shape,
            (n, n),
        )
