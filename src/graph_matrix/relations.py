"""Peirce-style classification of a graph's edge relation.

The adjacency matrix ``A`` of a graph is read as a binary relation on its
nodes. Seven axioms are evaluated on ``A`` and its transpose, and the first
row of :data:`STRUCTURE_TABLE` whose requirements all hold names the
structure.

Transitivity and intransitivity both require a witness: a graph with no
2-hop path is neither transitive nor intransitive.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .backends import DEFAULT_BACKEND
from .convert import GraphLike, NodeIndex, to_adjacency_matrix
from .errors import DimensionMismatch
from .matrix import BackendLike, Matrix

logger = logging.getLogger(__name__)


class Structure(str, Enum):
    """Named relational structures."""
    DIGRAPH = "digraph"
    GRAPH = "graph"
    ORIENTED_GRAPH = "oriented graph"
    SIMILARITY_RELATION = "similarity relation"
    EQUIVALENCE_RELATION = "equivalence relation"
    PARTIAL_ORDER = "partial order"
    COMPLETE_ORDER = "complete order"
    TOURNAMENT = "tournament"
    PARITY_RELATION = "parity relation"
    ANTIEQUIVALENCE_RELATION = "antiequivalence relation"
    ANTIPARITY_RELATION = "antiparity relation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RelationalProperties:
    """Axioms satisfied by an adjacency relation."""
    reflexive: bool
    irreflexive: bool
    symmetric: bool
    asymmetric: bool
    transitive: bool
    intransitive: bool
    complete: bool

    @classmethod
    def from_adjacency(cls, A: Matrix) -> "RelationalProperties":
        """Evaluate every axiom on a square 0/1 adjacency matrix.

        ``complete`` holds when every pair of distinct nodes is related in
        exactly one direction, i.e. ``(A + A^T)[i][j] == 1`` for all i != j.
        """
        if A.rows != A.cols:
            raise DimensionMismatch(f"Adjacency matrix must be square, got {A.shape}", A.shape)
        n = A.rows
        At = A.transpose()
        diagonal = [A.ref(i, i) for i in range(n)]

        both_ways = A.elementwise_product(At, boolean=True).nonzero()

        two_hop = A.product(A).nonzero()
        direct = set(A.nonzero())

        either_way = A.sum(At)
        complete = all(
            either_way.ref(i, j) == 1
            for i in range(n)
            for j in range(i + 1, n)
        )

        return cls(
            reflexive=all(v == 1 for v in diagonal),
            irreflexive=all(v == 0 for v in diagonal),
            symmetric=A == At,
            asymmetric=all(i == j for i, j in both_ways),
            transitive=bool(two_hop) and all(cell in direct for cell in two_hop),
            intransitive=bool(two_hop) and not any(i != k and (i, k) in direct for i, k in two_hop),
            complete=complete,
        )

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


# First matching row wins. Each row lists required axiom values.
STRUCTURE_TABLE: List[Tuple[Structure, Dict[str, bool]]] = [
    (Structure.DIGRAPH, dict(irreflexive=True, symmetric=False, asymmetric=False,
                             transitive=False, intransitive=False, complete=False)),
    (Structure.GRAPH, dict(irreflexive=True, symmetric=True,
                           transitive=False, intransitive=False, complete=False)),
    (Structure.ORIENTED_GRAPH, dict(irreflexive=True, asymmetric=True,
                                    transitive=False, intransitive=False, complete=False)),
    (Structure.SIMILARITY_RELATION, dict(reflexive=True, symmetric=True, transitive=False)),
    (Structure.EQUIVALENCE_RELATION, dict(reflexive=True, symmetric=True, transitive=True, complete=False)),
    (Structure.PARTIAL_ORDER, dict(irreflexive=True, asymmetric=True, transitive=True, complete=False)),
    (Structure.COMPLETE_ORDER, dict(irreflexive=True, asymmetric=True, transitive=True, complete=True)),
    (Structure.TOURNAMENT, dict(irreflexive=True, asymmetric=True, complete=True,
                                transitive=False, intransitive=False)),
    (Structure.PARITY_RELATION, dict(irreflexive=True, symmetric=True, transitive=True, complete=False)),
    (Structure.ANTIEQUIVALENCE_RELATION, dict(irreflexive=True, asymmetric=True,
                                              intransitive=True, complete=False)),
    (Structure.ANTIPARITY_RELATION, dict(reflexive=True, asymmetric=True, intransitive=True)),
]


def classify(props: RelationalProperties) -> Optional[Structure]:
    """Name of the first structure whose axioms ``props`` satisfies, or None."""
    values = props.as_dict()
    for structure, required in STRUCTURE_TABLE:
        if all(values[name] == want for name, want in required.items()):
            return structure
    return None


def relational_properties(
    graph: GraphLike,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
) -> RelationalProperties:
    return RelationalProperties.from_adjacency(to_adjacency_matrix(graph, index=index, backend=backend))


def relational_structure(
    graph: GraphLike,
    *,
    index: Optional[NodeIndex] = None,
    backend: BackendLike = DEFAULT_BACKEND,
) -> Optional[Structure]:
    """Classify the edge relation of ``graph``.

    Returns None when no structure in :data:`STRUCTURE_TABLE` matches
    ("unclassified").
    """
    props = relational_properties(graph, index=index, backend=backend)
    structure = classify(props)
    logger.debug("relational structure: %s (%s)", structure or "unclassified", props)
    return structure
