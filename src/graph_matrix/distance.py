from __future__ import annotations

import logging
from collections import deque
from typing import List, Optional

from tqdm.auto import tqdm

from .backends import DEFAULT_BACKEND
from .convert import GraphLike, Node, NodeIndex, check_order, resolve_index, to_adjacency_matrix
from .errors import InvalidArgument
from .matrix import INFINITY, BackendLike, Matrix, filled

logger = logging.getLogger(__name__)

METHODS = ("power", "bfs")


def to_distance_matrix(
    graph: GraphLike,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
    method: str = "power",
    progress: bool = False,
) -> Matrix:
    """All-pairs shortest hop counts.

    ``D[i][j]`` is the minimum number of edges on a path from node i to node j,
    0 on the diagonal and ``INFINITY`` when j is unreachable from i.

    Parameters
    ----------
    graph:
        Object providing ``nodes()``, ``edges()`` and ``is_directed()``.
    index:
        Precomputed node index. If None, one is built from ``graph.nodes()``.
    backend:
        Matrix backend name or instance.
    method:
        ``"power"`` fills D from successive adjacency powers; ``"bfs"`` runs a
        breadth-first search per source. Both give the same matrix.
    progress:
        Show a tqdm progress bar.
    """
    if method not in METHODS:
        raise InvalidArgument(f"Unknown distance method {method!r}; expected one of {METHODS}")
    idx = resolve_index(graph, index)
    A = to_adjacency_matrix(graph, index=idx, backend=backend)
    if method == "bfs":
        return _distance_bfs(A, backend=backend, progress=progress)
    return _distance_power(A, backend=backend, progress=progress)


def _distance_power(A: Matrix, *, backend: BackendLike, progress: bool) -> Matrix:
    n = A.rows
    D = filled(n, n, INFINITY, backend=backend)
    for i, j in A.nonzero():
        D.set(i, j, 1)
    for i in range(n):
        D.set(i, i, 0)

    # a pass with no new pair means no shortest path is longer than k - 1
    power = A
    k = 1
    for k in tqdm(range(2, n), desc="Distance: adjacency powers", disable=not progress):
        power = power.product(A).boolean()
        updated = 0
        for i, j in power.nonzero():
            if D.ref(i, j) == INFINITY:
                D.set(i, j, k)
                updated += 1
        if not updated:
            break

    logger.debug("distance matrix (power): n=%d last hop count=%d", n, k)
    return D


def _distance_bfs(A: Matrix, *, backend: BackendLike, progress: bool) -> Matrix:
    n = A.rows
    out_nbrs: List[List[int]] = [[] for _ in range(n)]
    for i, j in A.nonzero():
        out_nbrs[i].append(j)

    D = filled(n, n, INFINITY, backend=backend)
    for src in tqdm(range(n), desc="Distance: BFS per source", disable=not progress):
        dist = [INFINITY] * n
        dist[src] = 0
        queue = deque([src])
        while queue:
            x = queue.popleft()
            for y in out_nbrs[x]:
                if dist[y] == INFINITY:
                    dist[y] = dist[x] + 1
                    queue.append(y)
        for j, d in enumerate(dist):
            if d != INFINITY:
                D.set(src, j, d)

    logger.debug("distance matrix (bfs): n=%d", n)
    return D


def distance(
    graph: GraphLike,
    distances: Matrix,
    source: Node,
    target: Node,
    *,
    index: Optional[NodeIndex] = None,
) -> int:
    """Hop count from ``source`` to ``target`` read from ``distances`` (``INFINITY`` if unreachable)."""
    idx = resolve_index(graph, index)
    check_order(distances, idx)
    return distances.ref(idx.position(source), idx.position(target))
