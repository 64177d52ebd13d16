"""Tests for the Matrix type and its algebra."""

from __future__ import annotations

import numpy as np
import pytest

from graph_matrix import (
    INFINITY,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidArgument,
    Matrix,
    filled,
    from_rows,
    identity,
    ones,
    zeros,
)


class TestConstruction:
    def test_empty_matrix_reports_zero_dimensions(self):
        m = Matrix()
        assert m.rows == 0
        assert m.cols == 0
        assert m.tolist() == []

    def test_zeros_and_ones(self, backend):
        assert zeros(2, 3, backend=backend).tolist() == [[0, 0, 0], [0, 0, 0]]
        assert ones(2, 2, backend=backend).tolist() == [[1, 1], [1, 1]]

    def test_identity(self, backend):
        assert identity(3, backend=backend).tolist() == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]

    def test_filled_with_infinity(self, backend):
        m = filled(2, 2, INFINITY, backend=backend)
        assert all(v == INFINITY for row in m.tolist() for v in row)

    def test_from_rows_rejects_ragged_input(self):
        with pytest.raises(DimensionMismatch):
            from_rows([[1, 2], [3]])

    def test_negative_dimensions_rejected(self):
        with pytest.raises(InvalidArgument):
            zeros(-1, 2)

    def test_backend_name(self, backend):
        assert zeros(1, 1, backend=backend).backend == backend


class TestElementAccess:
    def test_ref_and_set(self, backend):
        m = zeros(2, 3, backend=backend)
        m.set(1, 2, 7)
        assert m.ref(1, 2) == 7
        assert m[1, 2] == 7
        assert m.ref(0, 0) == 0

    @pytest.mark.parametrize("cell", [(2, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_range_access_fails(self, backend, cell):
        m = zeros(2, 3, backend=backend)
        with pytest.raises(IndexOutOfRange):
            m.ref(*cell)
        with pytest.raises(IndexOutOfRange):
            m.set(*cell, 1)

    @pytest.mark.parametrize("cell", [(1.5, 0), (0, 1.0), ("0", 0), (None, 1)])
    def test_non_integer_positions_fail(self, backend, cell):
        m = zeros(2, 3, backend=backend)
        with pytest.raises(IndexOutOfRange):
            m.ref(*cell)
        with pytest.raises(IndexOutOfRange):
            m.set(*cell, 1)

    def test_numpy_integer_positions(self, backend):
        m = zeros(2, 3, backend=backend)
        m.set(np.int64(1), np.int32(2), 4)
        assert m.ref(np.int64(1), 2) == 4

    def test_ref_on_empty_matrix_fails(self):
        with pytest.raises(IndexOutOfRange):
            Matrix().ref(0, 0)

    def test_copy_shares_no_storage(self, backend):
        m = zeros(2, 2, backend=backend)
        c = m.copy()
        c.set(0, 0, 5)
        assert m.ref(0, 0) == 0
        assert c.ref(0, 0) == 5


class TestComparison:
    def test_same_size(self):
        assert zeros(2, 3).same_size(ones(2, 3))
        assert not zeros(2, 3).same_size(zeros(3, 2))

    def test_equality(self, backend):
        a = from_rows([[1, 2], [3, 4]], backend=backend)
        assert a == from_rows([[1, 2], [3, 4]], backend=backend)
        assert a != from_rows([[1, 2], [3, 5]], backend=backend)
        assert a != zeros(2, 3, backend=backend)

    def test_equality_across_backends(self):
        assert from_rows([[1, 0], [0, 1]], backend="dense") == identity(2, backend="sparse")

    def test_entries_differ_row_major(self, backend):
        a = from_rows([[1, 2, 3], [4, 5, 6]], backend=backend)
        b = from_rows([[1, 0, 3], [0, 5, 0]], backend=backend)
        assert a.entries_differ(b) == [(0, 1), (1, 0), (1, 2)]
        assert a.entries_differ(a.copy()) == []

    def test_entries_differ_on_size_mismatch_raises(self, backend):
        with pytest.raises(DimensionMismatch):
            zeros(2, 2, backend=backend).entries_differ(zeros(2, 3, backend=backend))

    def test_is_symmetric(self, backend):
        assert from_rows([[0, 1], [1, 0]], backend=backend).is_symmetric()
        assert not from_rows([[0, 1], [0, 0]], backend=backend).is_symmetric()
        assert not zeros(2, 3, backend=backend).is_symmetric()


class TestAlgebra:
    def test_transpose(self, backend):
        m = from_rows([[1, 2, 3], [4, 5, 6]], backend=backend)
        t = m.transpose()
        assert t.shape == (3, 2)
        assert t.tolist() == [[1, 4], [2, 5], [3, 6]]

    def test_transpose_is_an_involution(self, backend):
        rng = np.random.default_rng(3)
        for shape in [(1, 1), (2, 5), (4, 4), (6, 1)]:
            m = from_rows(rng.integers(-3, 4, size=shape).tolist(), backend=backend)
            assert m.transpose().transpose() == m

    def test_sum_and_difference(self, backend):
        a = from_rows([[1, 2], [3, 4]], backend=backend)
        b = from_rows([[4, 3], [2, 1]], backend=backend)
        assert (a + b).tolist() == [[5, 5], [5, 5]]
        assert a.difference(b).tolist() == [[-3, -1], [1, 3]]
        assert (a - a) == zeros(2, 2)

    def test_boolean_sum_clips_positive_entries(self, backend):
        a = from_rows([[2, 0], [-1, 1]], backend=backend)
        b = from_rows([[1, 0], [0, -3]], backend=backend)
        assert a.sum(b, boolean=True).tolist() == [[1, 0], [0, 0]]

    def test_boolean_sum_is_idempotent(self, backend):
        edges = from_rows([[0, 1, 1], [0, 0, 1], [1, 0, 0]], backend=backend)
        once = zeros(3, 3, backend=backend).sum(edges, boolean=True)
        twice = once.sum(edges, boolean=True)
        assert once == twice == edges

    def test_elementwise_product(self, backend):
        a = from_rows([[2, 0], [3, 1]], backend=backend)
        b = from_rows([[5, 7], [-1, 1]], backend=backend)
        assert a.elementwise_product(b).tolist() == [[10, 0], [-3, 1]]
        assert a.elementwise_product(b, boolean=True).tolist() == [[1, 0], [1, 1]]

    def test_product(self, backend):
        a = from_rows([[1, 2, 3], [4, 5, 6]], backend=backend)
        b = from_rows([[1, 0], [0, 1], [1, 1]], backend=backend)
        assert (a @ b).tolist() == [[4, 5], [10, 11]]
        assert a.product(b).shape == (2, 2)

    def test_product_with_identity(self, backend):
        a = from_rows([[1, 2], [3, 4]], backend=backend)
        assert a.product(identity(2, backend=backend)) == a

    def test_product_dimension_mismatch(self, backend):
        with pytest.raises(DimensionMismatch):
            zeros(2, 3, backend=backend).product(zeros(2, 3, backend=backend))

    @pytest.mark.parametrize("op", ["sum", "difference", "elementwise_product"])
    def test_elementwise_dimension_mismatch(self, backend, op):
        with pytest.raises(DimensionMismatch):
            getattr(zeros(2, 2, backend=backend), op)(zeros(3, 2, backend=backend))

    def test_operations_do_not_mutate_operands(self, backend):
        a = from_rows([[1, 0], [1, 1]], backend=backend)
        before = a.tolist()
        a.sum(a, boolean=True)
        a.product(a)
        a.transpose()
        a.elementwise_product(a)
        assert a.tolist() == before

    def test_mixed_backends_use_left_operand_backend(self):
        a = identity(2, backend="dense")
        b = ones(2, 2, backend="numpy")
        c = a + b
        assert c.backend == "dense"
        assert c.tolist() == [[2, 1], [1, 2]]

    def test_nonzero_and_boolean(self, backend):
        m = from_rows([[0, 3], [-2, 0]], backend=backend)
        assert m.nonzero() == [(0, 1), (1, 0)]
        assert m.boolean().tolist() == [[0, 1], [0, 0]]


class TestConversion:
    def test_to_numpy(self, backend):
        m = from_rows([[1, 2], [3, 4]], backend=backend)
        arr = m.to_numpy()
        assert arr.dtype == np.int64
        assert arr.tolist() == [[1, 2], [3, 4]]

    def test_to_backend(self):
        m = from_rows([[1, 2], [3, 4]], backend="numpy")
        d = m.to_backend("dense")
        assert d.backend == "dense"
        assert d == m
