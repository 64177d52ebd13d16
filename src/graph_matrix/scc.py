from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

import numpy as np

from .backends import DEFAULT_BACKEND
from .convert import GraphLike, Node, NodeIndex, check_order, resolve_index
from .errors import DimensionMismatch
from .matrix import BackendLike, Matrix
from .reachability import to_reachability_matrix

logger = logging.getLogger(__name__)


def to_strong_component_matrix(reachability: Matrix) -> Matrix:
    """Mutual-reachability matrix ``S = R * R^T`` (elementwise, boolean).

    ``S[i][j] = 1`` iff i reaches j and j reaches i under ``reachability``.
    The result is symmetric. It encodes strongly connected components only when
    ``reachability`` is the full closure, i.e. ``to_reachability_matrix`` called
    without ``limit``; a hop-bounded matrix gives bounded mutual reachability,
    which need not be transitive.

    Raises
    ------
    DimensionMismatch
        If ``reachability`` is not square.
    """
    if reachability.rows != reachability.cols:
        raise DimensionMismatch(
            f"Reachability matrix must be square, got {reachability.shape}",
            reachability.shape,
        )
    return reachability.elementwise_product(reachability.transpose(), boolean=True)


def component_of(
    node: Node,
    graph: GraphLike,
    components: Matrix,
    *,
    index: Optional[NodeIndex] = None,
) -> Set[Node]:
    """Strongly connected component containing ``node``, read from ``components``."""
    idx = resolve_index(graph, index)
    check_order(components, idx)
    i = idx.position(node)
    return {idx.node(k) for k in range(len(idx)) if components.ref(i, k) != 0}


def strong_components(
    graph: GraphLike,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
) -> Tuple[np.ndarray, List[List[Node]]]:
    """Partition ``graph`` into strongly connected components.

    Always built from the unbounded reachability matrix.

    Returns
    -------
    comp_id:
        np.ndarray of length n mapping node position -> component index in [0, m-1].
    comps:
        list of components; comps[c] lists the nodes of component c in index
        order. Components are numbered by their first node.
    """
    idx = resolve_index(graph, index)
    n = len(idx)
    S = to_strong_component_matrix(to_reachability_matrix(graph, index=idx, backend=backend))

    comp_id = np.full(n, -1, dtype=np.int32)
    comps: List[List[Node]] = []
    for i in range(n):
        if comp_id[i] != -1:
            continue
        cid = len(comps)
        comps.append([])
        for k in range(i, n):
            if S.ref(i, k) != 0:
                comp_id[k] = cid
                comps[cid].append(idx.node(k))

    logger.debug("strong components: n=%d components=%d", n, len(comps))
    return comp_id, comps
