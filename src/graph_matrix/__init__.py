"""Matrix-derived structural properties of graphs.

This package provides:
- an integer matrix type with interchangeable dense, numpy and scipy.sparse backends,
- adjacency matrices built from any graph exposing ``nodes()``, ``edges()``, ``is_directed()``,
- (hop-bounded) reachability via boolean sums of adjacency powers,
- strongly-connected-component matrices and extraction,
- all-pairs shortest hop-count distance matrices,
- classification of the edge relation into Peirce's relational structures.
"""

import logging

from .errors import (
    GraphMatrixError,
    DimensionMismatch,
    InvalidArgument,
    IndexOutOfRange,
    NodeNotFound,
    MatrixOverflow,
)
from .backends import BACKENDS, DEFAULT_BACKEND, MatrixBackend, get_backend
from .matrix import INFINITY, Matrix, zeros, ones, identity, filled, from_rows
from .convert import GraphLike, NodeIndex, to_adjacency_matrix, to_frame
from .reachability import to_reachability_matrix, reachable, reachable_from
from .scc import to_strong_component_matrix, component_of, strong_components
from .distance import to_distance_matrix, distance
from .relations import (
    Structure,
    RelationalProperties,
    classify,
    relational_properties,
    relational_structure,
)

__all__ = [
    "GraphMatrixError",
    "DimensionMismatch",
    "InvalidArgument",
    "IndexOutOfRange",
    "NodeNotFound",
    "MatrixOverflow",
    "BACKENDS",
    "DEFAULT_BACKEND",
    "MatrixBackend",
    "get_backend",
    "INFINITY",
    "Matrix",
    "zeros",
    "ones",
    "identity",
    "filled",
    "from_rows",
    "GraphLike",
    "NodeIndex",
    "to_adjacency_matrix",
    "to_frame",
    "to_reachability_matrix",
    "reachable",
    "reachable_from",
    "to_strong_component_matrix",
    "component_of",
    "strong_components",
    "to_distance_matrix",
    "distance",
    "Structure",
    "RelationalProperties",
    "classify",
    "relational_properties",
    "relational_structure",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
