"""Fixed-size integer matrices with a small algebra.

A :class:`Matrix` wraps backend storage together with its dimensions and
dispatches every operation to the backend chosen when it was built (see
:mod:`graph_matrix.backends`). Every transforming operation returns a new
matrix; only :meth:`Matrix.set` mutates, and it is meant for matrices the
caller owns (typically a :meth:`Matrix.copy`).
"""

from __future__ import annotations

import operator
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from .backends import DEFAULT_BACKEND, DenseBackend, MatrixBackend, get_backend
from .errors import DimensionMismatch, IndexOutOfRange, InvalidArgument, MatrixOverflow

# Sentinel for "no path"; far above any hop count a graph in memory can produce.
INFINITY = 10**9

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

BackendLike = Union[str, MatrixBackend, None]

# Reference arithmetic on Python ints, used when int64 could overflow.
_EXACT = DenseBackend()


def _check_value(value) -> int:
    value = int(value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise MatrixOverflow(f"Value {value} outside the int64 range [{INT64_MIN}, {INT64_MAX}]")
    return value


class Matrix:
    """A rows x cols grid of integers.

    ``Matrix()`` is the 0x0 matrix with no backing storage. Use the module
    factories (:func:`zeros`, :func:`identity`, :func:`from_rows`, ...) to build
    populated matrices.
    """

    __slots__ = ("_impl", "_data", "_rows", "_cols")

    def __init__(self, rows: int = 0, cols: int = 0, *, backend: BackendLike = DEFAULT_BACKEND):
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise InvalidArgument(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
        self._impl = get_backend(backend)
        self._rows = rows
        self._cols = cols
        self._data = self._impl.zeros(rows, cols) if rows or cols else None

    @classmethod
    def _wrap(cls, impl: MatrixBackend, data: Any, rows: int, cols: int) -> "Matrix":
        m = cls.__new__(cls)
        m._impl = impl
        m._data = data
        m._rows = int(rows)
        m._cols = int(cols)
        return m

    def _new(self, data: Any, rows: Optional[int] = None, cols: Optional[int] = None) -> "Matrix":
        return Matrix._wrap(
            self._impl,
            data,
            self._rows if rows is None else rows,
            self._cols if cols is None else cols,
        )

    # ------------------------------------------------------------------
    # shape and element access

    @property
    def rows(self) -> int:
        return self._rows if self._data is not None else 0

    @property
    def cols(self) -> int:
        return self._cols if self._data is not None else 0

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def backend(self) -> str:
        """Name of the storage backend."""
        return self._impl.name

    def _storage(self) -> Any:
        if self._data is None:
            self._data = self._impl.zeros(0, 0)
        return self._data

    def _check_cell(self, i: int, j: int) -> Tuple[int, int]:
        try:
            i, j = operator.index(i), operator.index(j)
        except TypeError:
            raise IndexOutOfRange(f"Cell ({i!r}, {j!r}) is not an integer position") from None
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexOutOfRange(f"Cell ({i}, {j}) outside {self.rows}x{self.cols} matrix")
        return i, j

    def ref(self, i: int, j: int) -> int:
        """Return the value at row ``i``, column ``j``."""
        i, j = self._check_cell(i, j)
        return self._impl.ref(self._data, i, j)

    def set(self, i: int, j: int, value: int) -> None:
        """Store ``value`` at row ``i``, column ``j`` in place.

        Raises
        ------
        MatrixOverflow
            If ``value`` does not fit in int64.
        """
        i, j = self._check_cell(i, j)
        self._impl.set(self._data, i, j, _check_value(value))

    def __getitem__(self, key: Tuple[int, int]) -> int:
        i, j = key
        return self.ref(i, j)

    # ------------------------------------------------------------------
    # comparison

    def same_size(self, other: "Matrix") -> bool:
        return self.rows == other.rows and self.cols == other.cols

    def _coerce(self, other: "Matrix") -> Any:
        """Return ``other``'s storage in this matrix's backend."""
        if not isinstance(other, Matrix):
            raise TypeError(f"Expected a Matrix, got {type(other).__name__}")
        if other._impl is self._impl:
            return other._storage()
        return self._impl.from_rows(other.tolist(), other.rows, other.cols)

    def _require_same_size(self, other: "Matrix", op: str) -> None:
        if not self.same_size(other):
            raise DimensionMismatch(
                f"{op} requires matrices of the same size, got {self.shape} and {other.shape}",
                self.shape,
                other.shape,
            )

    def entries_differ(self, other: "Matrix") -> List[Tuple[int, int]]:
        """Cells whose values differ, in row-major order.

        Raises
        ------
        DimensionMismatch
            If the matrices are not the same size.
        """
        self._require_same_size(other, "entries_differ")
        return self._impl.differ(self._storage(), self._coerce(other))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if not self.same_size(other):
            return False
        return self._impl.equal(self._storage(), self._coerce(other))

    __hash__ = None

    def is_symmetric(self) -> bool:
        """True iff the matrix is square and equal to its transpose."""
        return self.rows == self.cols and self == self.transpose()

    # ------------------------------------------------------------------
    # algebra

    def copy(self) -> "Matrix":
        return self._new(self._impl.copy(self._storage()))

    def transpose(self) -> "Matrix":
        data = self._impl.transpose(self._storage(), self.rows, self.cols)
        return self._new(data, rows=self.cols, cols=self.rows)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def _magnitude(self) -> int:
        if self._data is None:
            return 0
        return self._impl.magnitude(self._data)

    def _arithmetic(
        self,
        op: str,
        other: "Matrix",
        bound: int,
        shape: Tuple[int, int],
        *args: int,
        clip: Optional[str] = None,
    ) -> Any:
        """Run backend operation ``op`` on ``self`` and ``other``.

        ``bound`` caps the magnitude of any result entry. Past int64 the
        operation is redone on Python ints and the result range-checked, so
        every backend either returns the same cells or raises MatrixOverflow.
        """
        if bound <= INT64_MAX:
            data = getattr(self._impl, op)(self._storage(), self._coerce(other), *args)
            return getattr(self._impl, clip)(data) if clip else data
        values = getattr(_EXACT, op)(self.tolist(), other.tolist(), *args)
        if clip:
            values = getattr(_EXACT, clip)(values)
        else:
            for row in values:
                for v in row:
                    if not INT64_MIN <= v <= INT64_MAX:
                        raise MatrixOverflow(
                            f"{op} of {self.shape} and {other.shape} matrices leaves the int64 range: {v}"
                        )
        return self._impl.from_rows(values, *shape)

    def sum(self, other: "Matrix", boolean: bool = False) -> "Matrix":
        """Elementwise sum.

        With ``boolean=True`` each entry is 1 when the arithmetic sum is
        positive and 0 otherwise (OR over presence).

        Raises
        ------
        MatrixOverflow
            If a non-boolean sum leaves the int64 range.
        """
        self._require_same_size(other, "sum")
        bound = self._magnitude() + other._magnitude()
        clip = "clip_positive" if boolean else None
        return self._new(self._arithmetic("add", other, bound, self.shape, clip=clip))

    def difference(self, other: "Matrix") -> "Matrix":
        """Elementwise ``self - other``."""
        self._require_same_size(other, "difference")
        bound = self._magnitude() + other._magnitude()
        return self._new(self._arithmetic("subtract", other, bound, self.shape))

    def elementwise_product(self, other: "Matrix", boolean: bool = False) -> "Matrix":
        """Elementwise product; ``boolean=True`` maps non-zero products to 1."""
        self._require_same_size(other, "elementwise_product")
        bound = self._magnitude() * other._magnitude()
        clip = "clip_nonzero" if boolean else None
        return self._new(self._arithmetic("multiply", other, bound, self.shape, clip=clip))

    def product(self, other: "Matrix") -> "Matrix":
        """Matrix product ``self @ other``.

        Raises
        ------
        DimensionMismatch
            If ``self.cols != other.rows``.
        MatrixOverflow
            If an entry of the product leaves the int64 range.
        """
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"product requires cols(left) == rows(right), got {self.shape} and {other.shape}",
                self.shape,
                other.shape,
            )
        shape = (self.rows, other.cols)
        bound = self._magnitude() * other._magnitude() * self.cols
        data = self._arithmetic("matmul", other, bound, shape, self.rows, self.cols, other.cols)
        return self._new(data, rows=shape[0], cols=shape[1])

    def __add__(self, other: "Matrix") -> "Matrix":
        return self.sum(other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        return self.difference(other)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return self.product(other)

    def boolean(self) -> "Matrix":
        """Copy with positive entries set to 1 and all others to 0."""
        return self._new(self._impl.clip_positive(self._storage()))

    def nonzero(self) -> List[Tuple[int, int]]:
        """Cells holding a non-zero value, in row-major order."""
        return self._impl.nonzero(self._storage())

    # ------------------------------------------------------------------
    # conversion

    def tolist(self) -> List[List[int]]:
        if self._data is None:
            return []
        return [[int(v) for v in row] for row in self._impl.tolist(self._data)]

    def to_numpy(self) -> np.ndarray:
        return np.asarray(self.tolist(), dtype=np.int64).reshape(self.rows, self.cols)

    def to_backend(self, backend: BackendLike) -> "Matrix":
        """Same cells stored in another backend."""
        impl = get_backend(backend)
        if impl is self._impl:
            return self.copy()
        return Matrix._wrap(impl, impl.from_rows(self.tolist(), self.rows, self.cols), self.rows, self.cols)

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols}, backend={self.backend!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in row) for row in self.tolist())


def zeros(rows: int, cols: int, *, backend: BackendLike = DEFAULT_BACKEND) -> Matrix:
    return filled(rows, cols, 0, backend=backend)


def ones(rows: int, cols: int, *, backend: BackendLike = DEFAULT_BACKEND) -> Matrix:
    return filled(rows, cols, 1, backend=backend)


def filled(rows: int, cols: int, value: int, *, backend: BackendLike = DEFAULT_BACKEND) -> Matrix:
    """A rows x cols matrix with every entry equal to ``value`` (e.g. ``INFINITY``)."""
    rows, cols = int(rows), int(cols)
    value = _check_value(value)
    if rows < 0 or cols < 0:
        raise InvalidArgument(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
    impl = get_backend(backend)
    return Matrix._wrap(impl, impl.filled(rows, cols, value), rows, cols)


def identity(order: int, *, backend: BackendLike = DEFAULT_BACKEND) -> Matrix:
    order = int(order)
    if order < 0:
        raise InvalidArgument(f"Matrix order must be non-negative, got {order}")
    impl = get_backend(backend)
    return Matrix._wrap(impl, impl.identity(order), order, order)


def from_rows(values: Sequence[Sequence[int]], *, backend: BackendLike = DEFAULT_BACKEND) -> Matrix:
    """Build a matrix from a sequence of equal-length rows.

    Raises
    ------
    DimensionMismatch
        If the rows have different lengths.
    MatrixOverflow
        If a value does not fit in int64.
    """
    values = [[_check_value(v) for v in row] for row in values]
    rows = len(values)
    cols = len(values[0]) if rows else 0
    for k, row in enumerate(values):
        if len(row) != cols:
            raise DimensionMismatch(f"Row {k} has {len(row)} entries, expected {cols}")
    impl = get_backend(backend)
    return Matrix._wrap(impl, impl.from_rows(values, rows, cols), rows, cols)
