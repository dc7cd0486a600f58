"""
============================================================================
Unit Tests - Matrix Validator
============================================================================

Tests verify:
1. Well-formed matrices are returned unchanged
2. Empty/malformed input is rejected first
3. Ragged rows are rejected before content checks
4. Non-numeric and non-finite cells are rejected
5. Integers beyond double range are non-numeric
============================================================================
"""

import json
import math

import pytest

from services.matrix_errors import InvalidMatrixShape, MatrixErrorKind
from services.matrix_validator import (
    validate_matrix,
    is_finite_number,
    is_numeric_matrix,
    MSG_EMPTY_OR_MALFORMED,
    MSG_NOT_RECTANGULAR,
    MSG_NON_NUMERIC,
)


class TestValidMatrices:
    """Well-formed matrices pass through untouched."""

    @pytest.mark.parametrize("matrix", [
        [[5]],
        [[1, 2], [3, 4]],
        [[1, 2, 3]],
        [[1], [2], [3]],
        [[0.5, -1.25], [1e10, -0.0]],
    ])
    def test_returns_same_matrix(self, matrix):
        assert validate_matrix(matrix) is matrix

    def test_does_not_mutate_input(self):
        matrix = [[1, 2], [3, 4]]
        validate_matrix(matrix)
        assert matrix == [[1, 2], [3, 4]]


class TestEmptyOrMalformed:
    """Check 1: absent, zero rows, or first row not a sequence."""

    @pytest.mark.parametrize("value", [None, [], [[]], [1, 2, 3], "abc", {"a": 1}, 42])
    def test_rejected_as_empty_or_malformed(self, value):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix(value)
        assert exc_info.value.message == MSG_EMPTY_OR_MALFORMED
        assert exc_info.value.kind == MatrixErrorKind.INVALID_MATRIX_SHAPE

    def test_malformed_wins_over_non_numeric(self):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix(["a", ["b"]])
        assert exc_info.value.message == MSG_EMPTY_OR_MALFORMED


class TestNotRectangular:
    """Check 2: rows of differing length."""

    def test_ragged_rows(self):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix([[1, 2], [3, 4, 5]])
        assert exc_info.value.message == MSG_NOT_RECTANGULAR

    def test_later_row_not_a_sequence(self):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix([[1, 2], 3])
        assert exc_info.value.message == MSG_NOT_RECTANGULAR

    def test_rectangularity_checked_before_content(self):
        # Non-numeric cell in row 0, ragged row 1: shape error wins
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix([["a", 2], [3]])
        assert exc_info.value.message == MSG_NOT_RECTANGULAR


class TestNonNumeric:
    """Check 3: every cell must be a finite number."""

    @pytest.mark.parametrize("bad_cell", ["a", "1", None, True, [1], math.nan, math.inf, -math.inf])
    def test_rejects_bad_cell(self, bad_cell):
        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix([[1, 2], [3, bad_cell]])
        assert exc_info.value.message == MSG_NON_NUMERIC


class TestIsFiniteNumber:

    def test_accepts_int_and_float(self):
        assert is_finite_number(0)
        assert is_finite_number(-3.5)

    def test_rejects_bool(self):
        assert not is_finite_number(False)

    def test_rejects_int_beyond_double_range(self):
        assert not is_finite_number(10 ** 400)
        assert not is_finite_number(-(10 ** 400))

    def test_accepts_int_at_double_range(self):
        assert is_finite_number(10 ** 308)


class TestHugeIntegerLiterals:
    """JSON integer literals too long for a double are non-numeric, not a crash."""

    def test_four_hundred_digit_literal(self):
        matrix = json.loads("[[1" + "0" * 400 + "]]")

        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix(matrix)
        assert exc_info.value.message == MSG_NON_NUMERIC

    def test_huge_literal_among_valid_cells(self):
        matrix = json.loads("[[1, 2], [3, -9" + "9" * 400 + "]]")

        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix(matrix)
        assert exc_info.value.message == MSG_NON_NUMERIC


class TestIsNumericMatrix:

    @pytest.mark.parametrize("matrix", [[], [[]], [[1, 2.5], [3, 4]], [[1], [2, 3]]])
    def test_accepts_lists_of_finite_numbers(self, matrix):
        assert is_numeric_matrix(matrix)

    @pytest.mark.parametrize("matrix", [
        None,
        "abc",
        [1, 2],
        [["x", None], [4, 2]],
        [[1, math.nan]],
        [[True]],
        [(1, 2)],
    ])
    def test_rejects(self, matrix):
        assert not is_numeric_matrix(matrix)
