"""Storage backends for :class:`graph_matrix.matrix.Matrix`.

A backend is any object providing the operations of :class:`MatrixBackend`.
Backends do not share a base class; they conform structurally. Three are
registered:

- ``"dense"``: nested Python lists, the reference implementation;
- ``"numpy"``: dense ``int64`` arrays, the default;
- ``"sparse"``: scipy.sparse LIL storage with CSR arithmetic.

All three produce identical cell values for identical inputs. Shape checks,
bounds checks and the int64 range rule live in ``Matrix``; backends assume
valid arguments and results that fit in int64.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Sequence, Tuple, Union

import numpy as np
from scipy import sparse

from .errors import InvalidArgument

Cell = Tuple[int, int]

DEFAULT_BACKEND = "numpy"


class MatrixBackend(Protocol):
    """Protocol for matrix storage backends."""

    name: str

    def zeros(self, rows: int, cols: int) -> Any:
        ...

    def filled(self, rows: int, cols: int, value: int) -> Any:
        ...

    def identity(self, order: int) -> Any:
        ...

    def from_rows(self, values: Sequence[Sequence[int]], rows: int, cols: int) -> Any:
        ...

    def ref(self, data: Any, i: int, j: int) -> int:
        ...

    def set(self, data: Any, i: int, j: int, value: int) -> None:
        ...

    def copy(self, data: Any) -> Any:
        ...

    def transpose(self, data: Any, rows: int, cols: int) -> Any:
        ...

    def equal(self, a: Any, b: Any) -> bool:
        ...

    def differ(self, a: Any, b: Any) -> List[Cell]:
        ...

    def add(self, a: Any, b: Any) -> Any:
        ...

    def subtract(self, a: Any, b: Any) -> Any:
        ...

    def multiply(self, a: Any, b: Any) -> Any:
        ...

    def matmul(self, a: Any, b: Any, rows: int, inner: int, cols: int) -> Any:
        ...

    def clip_positive(self, data: Any) -> Any:
        ...

    def clip_nonzero(self, data: Any) -> Any:
        ...

    def nonzero(self, data: Any) -> List[Cell]:
        ...

    def magnitude(self, data: Any) -> int:
        ...

    def tolist(self, data: Any) -> List[List[int]]:
        ...


# Every member a backend object must provide.
BACKEND_MEMBERS: Tuple[str, ...] = ("name",) + tuple(
    attr for attr, value in vars(MatrixBackend).items() if callable(value) and not attr.startswith("_")
)


class DenseBackend:
    """Row-major nested lists of Python ints."""

    name = "dense"

    def zeros(self, rows, cols):
        return [[0] * cols for _ in range(rows)]

    def filled(self, rows, cols, value):
        return [[int(value)] * cols for _ in range(rows)]

    def identity(self, order):
        return [[1 if i == j else 0 for j in range(order)] for i in range(order)]

    def from_rows(self, values, rows, cols):
        return [[int(v) for v in row] for row in values]

    def ref(self, data, i, j):
        return data[i][j]

    def set(self, data, i, j, value):
        data[i][j] = int(value)

    def copy(self, data):
        return [row[:] for row in data]

    def transpose(self, data, rows, cols):
        return [[data[i][j] for i in range(rows)] for j in range(cols)]

    def equal(self, a, b):
        return a == b

    def differ(self, a, b):
        return [
            (i, j)
            for i, (ra, rb) in enumerate(zip(a, b))
            for j, (x, y) in enumerate(zip(ra, rb))
            if x != y
        ]

    def add(self, a, b):
        return [[x + y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]

    def subtract(self, a, b):
        return [[x - y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]

    def multiply(self, a, b):
        return [[x * y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]

    def matmul(self, a, b, rows, inner, cols):
        b_cols = self.transpose(b, inner, cols)
        return [[sum(x * y for x, y in zip(row, col)) for col in b_cols] for row in a]

    def clip_positive(self, data):
        return [[1 if v > 0 else 0 for v in row] for row in data]

    def clip_nonzero(self, data):
        return [[1 if v != 0 else 0 for v in row] for row in data]

    def nonzero(self, data):
        return [(i, j) for i, row in enumerate(data) for j, v in enumerate(row) if v != 0]

    def magnitude(self, data):
        return max((abs(v) for row in data for v in row), default=0)

    def tolist(self, data):
        return [row[:] for row in data]


class NumpyBackend:
    """Dense ``int64`` numpy arrays."""

    name = "numpy"
    dtype = np.int64

    def zeros(self, rows, cols):
        return np.zeros((rows, cols), dtype=self.dtype)

    def filled(self, rows, cols, value):
        return np.full((rows, cols), int(value), dtype=self.dtype)

    def identity(self, order):
        return np.eye(order, dtype=self.dtype)

    def from_rows(self, values, rows, cols):
        return np.asarray(values, dtype=self.dtype).reshape(rows, cols)

    def ref(self, data, i, j):
        return int(data[i, j])

    def set(self, data, i, j, value):
        data[i, j] = int(value)

    def copy(self, data):
        return data.copy()

    def transpose(self, data, rows, cols):
        return np.ascontiguousarray(data.T)

    def equal(self, a, b):
        return bool(np.array_equal(a, b))

    def differ(self, a, b):
        return [(int(i), int(j)) for i, j in np.argwhere(a != b)]

    def add(self, a, b):
        return a + b

    def subtract(self, a, b):
        return a - b

    def multiply(self, a, b):
        return a * b

    def matmul(self, a, b, rows, inner, cols):
        return a @ b

    def clip_positive(self, data):
        return (data > 0).astype(self.dtype)

    def clip_nonzero(self, data):
        return (data != 0).astype(self.dtype)

    def nonzero(self, data):
        return [(int(i), int(j)) for i, j in np.argwhere(data != 0)]

    def magnitude(self, data):
        if data.size == 0:
            return 0
        return max(int(data.max()), -int(data.min()))

    def tolist(self, data):
        return data.tolist()


class SparseBackend:
    """scipy.sparse storage: LIL for element access, CSR for arithmetic."""

    name = "sparse"
    dtype = np.int64

    @staticmethod
    def _csr(data) -> sparse.csr_matrix:
        return sparse.csr_matrix(data, dtype=np.int64)

    @staticmethod
    def _cells(m) -> List[Cell]:
        m = sparse.csr_matrix(m, copy=True)
        m.eliminate_zeros()
        coo = m.tocoo()
        return sorted(zip(coo.row.tolist(), coo.col.tolist()))

    def zeros(self, rows, cols):
        return sparse.lil_matrix((rows, cols), dtype=self.dtype)

    def filled(self, rows, cols, value):
        return sparse.lil_matrix(np.full((rows, cols), int(value), dtype=self.dtype))

    def identity(self, order):
        return sparse.lil_matrix(np.eye(order, dtype=self.dtype))

    def from_rows(self, values, rows, cols):
        return sparse.lil_matrix(np.asarray(values, dtype=self.dtype).reshape(rows, cols))

    def ref(self, data, i, j):
        return int(data[i, j])

    def set(self, data, i, j, value):
        data[i, j] = int(value)

    def copy(self, data):
        return data.copy()

    def transpose(self, data, rows, cols):
        return self._csr(data).transpose().tolil()

    def equal(self, a, b):
        return not self.differ(a, b)

    def differ(self, a, b):
        return self._cells(self._csr(a) != self._csr(b))

    def add(self, a, b):
        return (self._csr(a) + self._csr(b)).tolil()

    def subtract(self, a, b):
        return (self._csr(a) - self._csr(b)).tolil()

    def multiply(self, a, b):
        return sparse.lil_matrix(self._csr(a).multiply(self._csr(b)), dtype=self.dtype)

    def matmul(self, a, b, rows, inner, cols):
        return (self._csr(a) @ self._csr(b)).tolil()

    def clip_positive(self, data):
        return (self._csr(data) > 0).astype(self.dtype).tolil()

    def clip_nonzero(self, data):
        return (self._csr(data) != 0).astype(self.dtype).tolil()

    def nonzero(self, data):
        return self._cells(data)

    def magnitude(self, data):
        rows, cols = data.shape
        if rows == 0 or cols == 0:
            return 0
        m = self._csr(data)
        return max(int(m.max()), -int(m.min()))

    def tolist(self, data):
        return data.toarray().tolist()


BACKENDS: Dict[str, MatrixBackend] = {
    "dense": DenseBackend(),
    "numpy": NumpyBackend(),
    "sparse": SparseBackend(),
}


def get_backend(backend: Union[str, MatrixBackend, None] = None) -> MatrixBackend:
    """Resolve a backend name (or instance) to a backend instance.

    ``None`` selects :data:`DEFAULT_BACKEND`. Objects that already provide the
    backend operations are returned unchanged.
    """
    if backend is None:
        backend = DEFAULT_BACKEND
    if isinstance(backend, str):
        try:
            return BACKENDS[backend]
        except KeyError:
            raise InvalidArgument(
                f"Unknown matrix backend {backend!r}; expected one of {sorted(BACKENDS)}"
            ) from None
    missing = [attr for attr in BACKEND_MEMBERS if not hasattr(backend, attr)]
    if missing:
        raise InvalidArgument(f"Object {backend!r} is not a matrix backend; missing {', '.join(missing)}")
    return backend
