"""
============================================================================
Unit Tests - Statistics Calculator
============================================================================

Tests verify:
1. Diagonal predicate on square, non-square, empty and 1x1 matrices
2. Aggregates over the concatenation of original + rotated cells
3. NoNumericValues when both matrices are empty
4. Aggregates that overflow a double raise InvalidMatrixShape
============================================================================
"""

import pytest

from services.matrix_errors import InvalidMatrixShape, NoNumericValues, MatrixErrorKind
from services.matrix_models import MatrixStatistics
from services.matrix_statistics import (
    compute_statistics,
    flatten,
    is_diagonal,
    MSG_NO_NUMERIC_VALUES,
    MSG_AGGREGATE_OVERFLOW,
)


# =============================================================================
# Diagonal Predicate Tests
# =============================================================================

class TestIsDiagonal:

    def test_one_by_one_is_diagonal(self):
        assert is_diagonal([[5]])

    def test_one_by_one_zero_is_diagonal(self):
        assert is_diagonal([[0]])

    def test_identity_like_is_diagonal(self):
        assert is_diagonal([[1, 0], [0, 2]])

    def test_zero_matrix_is_diagonal(self):
        assert is_diagonal([[0, 0, 0], [0, 0, 0], [0, 0, 0]])

    def test_upper_off_diagonal_value(self):
        assert not is_diagonal([[1, 1], [0, 2]])

    def test_lower_off_diagonal_value(self):
        assert not is_diagonal([[1, 0], [0.001, 2]])

    def test_non_square_is_never_diagonal(self):
        assert not is_diagonal([[1, 2, 3]])
        assert not is_diagonal([[1, 0, 0], [0, 1, 0]])

    def test_empty_is_never_diagonal(self):
        assert not is_diagonal([])
        assert not is_diagonal([[]])

    def test_negative_zero_counts_as_zero(self):
        assert is_diagonal([[3, -0.0], [0.0, 4]])


# =============================================================================
# Aggregate Tests
# =============================================================================

class TestComputeStatistics:

    def test_three_by_three_rotation(self):
        original = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
        rotated = [[7, 4, 1], [8, 5, 2], [9, 6, 3]]

        stats = compute_statistics(original, rotated)

        assert stats == MatrixStatistics(
            max_value=9,
            min_value=1,
            average=5,
            total_sum=90,
            is_diagonal_original=False,
            is_diagonal_rotated=False,
        )

    def test_one_by_one(self):
        stats = compute_statistics([[5]], [[5]])

        assert stats.max_value == 5
        assert stats.min_value == 5
        assert stats.total_sum == 10
        assert stats.average == 5
        assert stats.is_diagonal_original is True
        assert stats.is_diagonal_rotated is True

    def test_diagonal_flags_are_independent(self):
        stats = compute_statistics([[1, 0], [0, 2]], [[0, 1], [2, 0]])

        assert stats.is_diagonal_original is True
        assert stats.is_diagonal_rotated is False

    def test_negative_and_fractional_values(self):
        stats = compute_statistics([[-1.5, 2.5]], [[0.5], [-4.0]])

        assert stats.max_value == 2.5
        assert stats.min_value == -4.0
        assert stats.total_sum == pytest.approx(-2.5)
        assert stats.average == pytest.approx(-0.625)

    def test_one_empty_matrix_uses_the_other(self):
        stats = compute_statistics([], [[2, 4]])

        assert stats.total_sum == 6
        assert stats.average == 3
        assert stats.is_diagonal_original is False

    def test_both_empty_raises(self):
        with pytest.raises(NoNumericValues) as exc_info:
            compute_statistics([], [])
        assert exc_info.value.message == MSG_NO_NUMERIC_VALUES
        assert exc_info.value.kind == MatrixErrorKind.NO_NUMERIC_VALUES

    def test_empty_rows_raise(self):
        with pytest.raises(NoNumericValues):
            compute_statistics([[]], [[], []])

    def test_float_sum_overflow_raises(self):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            compute_statistics([[1e308, 1e308]], [[1e308], [1e308]])
        assert exc_info.value.message == MSG_AGGREGATE_OVERFLOW

    def test_large_int_sum_stays_exact(self):
        big = 10 ** 308
        stats = compute_statistics([[big, big]], [[big], [big]])

        assert stats.total_sum == 4 * big
        assert stats.average == pytest.approx(1e308)

    def test_to_dict_uses_wire_names(self):
        stats = compute_statistics([[5]], [[5]])

        assert stats.to_dict() == {
            "maxValue": 5,
            "minValue": 5,
            "average": 5,
            "totalSum": 10,
            "isDiagonalOriginal": True,
            "isDiagonalRotated": True,
        }


def test_flatten_keeps_row_major_order():
    assert flatten([[1, 2], [3, 4]], [[5], [6]]) == [1, 2, 3, 4, 5, 6]
