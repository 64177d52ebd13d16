"""Exceptions raised by the matrix algebra and graph-matrix algorithms."""

from __future__ import annotations


class GraphMatrixError(Exception):
    """Base exception class for graph_matrix errors."""
    pass


class DimensionMismatch(GraphMatrixError, ValueError):
    """Raised when two matrices have incompatible shapes for an operation."""

    def __init__(self, message: str, left: tuple = (), right: tuple = ()):
        super().__init__(message)
        self.left = left
        self.right = right


class InvalidArgument(GraphMatrixError, ValueError):
    """Raised when an argument is outside its accepted range."""
    pass


class IndexOutOfRange(GraphMatrixError, IndexError):
    """Raised when a matrix cell or node position lies outside the bounds."""
    pass


class NodeNotFound(GraphMatrixError, KeyError):
    """Raised when a node is absent from the current node index."""

    def __init__(self, node):
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"Node {self.node!r} not found in graph"


class MatrixOverflow(GraphMatrixError, OverflowError):
    """Raised when a stored value or an arithmetic result leaves the int64 range."""
    pass
