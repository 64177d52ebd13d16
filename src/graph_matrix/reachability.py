from __future__ import annotations

import logging
import operator
from typing import Optional, Set

from tqdm.auto import tqdm

from .backends import DEFAULT_BACKEND
from .convert import GraphLike, Node, NodeIndex, check_order, resolve_index, to_adjacency_matrix
from .errors import InvalidArgument
from .matrix import BackendLike, Matrix, identity

logger = logging.getLogger(__name__)


def _check_limit(limit, n: int) -> int:
    try:
        limit = operator.index(limit)
    except TypeError:
        raise InvalidArgument(f"limit must be an integer, got {limit!r}") from None
    if not 2 <= limit <= n - 2:
        raise InvalidArgument(f"limit must satisfy 2 <= limit <= {n - 2} for a graph of {n} nodes, got {limit}")
    return limit


def to_reachability_matrix(
    graph: GraphLike,
    limit: Optional[int] = None,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
    progress: bool = False,
) -> Matrix:
    """Boolean transitive closure of the adjacency matrix, optionally hop-bounded.

    ``R = A^0 + A^1 + ... + A^limit`` summed in the boolean semiring, so
    ``R[i][j] = 1`` iff node j can be reached from node i by a path of at most
    ``limit`` edges. Every node reaches itself.

    Parameters
    ----------
    graph:
        Object providing ``nodes()``, ``edges()`` and ``is_directed()``.
    limit:
        Maximum path length. If None, ``n - 1`` (full transitive closure).
        An explicit limit must satisfy ``2 <= limit <= n - 2``.
    index:
        Precomputed node index. If None, one is built from ``graph.nodes()``.
    backend:
        Matrix backend name or instance.
    progress:
        Show a tqdm progress bar over the adjacency powers.

    Raises
    ------
    InvalidArgument
        If ``limit`` is out of range.
    """
    idx = resolve_index(graph, index)
    n = len(idx)
    limit = n - 1 if limit is None else _check_limit(limit, n)

    A = to_adjacency_matrix(graph, index=idx, backend=backend)
    R = A.sum(identity(n, backend=backend), boolean=True)

    # walk counts grow without bound; only their positivity matters
    power = A
    for k in tqdm(range(2, limit + 1), desc="Reachability: adjacency powers", disable=not progress):
        power = power.product(A).boolean()
        if not power.nonzero():
            logger.debug("reachability: no walks of length %d, stopping early", k)
            break
        R = power.sum(R, boolean=True)

    logger.debug("reachability matrix: n=%d limit=%d backend=%s", n, limit, R.backend)
    return R


def reachable(
    graph: GraphLike,
    reachability: Matrix,
    source: Node,
    target: Node,
    *,
    index: Optional[NodeIndex] = None,
) -> bool:
    """True iff ``target`` is reachable from ``source`` according to ``reachability``."""
    idx = resolve_index(graph, index)
    check_order(reachability, idx)
    return reachability.ref(idx.position(source), idx.position(target)) != 0


def reachable_from(
    graph: GraphLike,
    reachability: Matrix,
    source: Node,
    *,
    index: Optional[NodeIndex] = None,
) -> Set[Node]:
    """Nodes reachable from ``source`` according to ``reachability``."""
    idx = resolve_index(graph, index)
    check_order(reachability, idx)
    i = idx.position(source)
    return {idx.node(j) for j in range(len(idx)) if reachability.ref(i, j) != 0}

