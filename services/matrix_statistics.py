"""
============================================================================
Matrix Orchestration - Statistics Calculator
============================================================================

Reliability Level: STANDARD
Input Constraints: Two matrices as returned by the processing backend
Side Effects: None (pure computation)

Statistics are computed over the concatenation of every cell of the
original matrix followed by every cell of the rotated matrix:
    max_value, min_value, total_sum, average = total_sum / count

Diagonal flags are evaluated independently per matrix.

============================================================================
"""

import math
from typing import List

from services.matrix_errors import InvalidMatrixShape, NoNumericValues
from services.matrix_models import Matrix, MatrixStatistics, Number


MSG_NO_NUMERIC_VALUES = "No numeric values found in matrices to calculate statistics."
MSG_AGGREGATE_OVERFLOW = "Matrix values are too large to calculate statistics."


def is_diagonal(matrix: Matrix) -> bool:
    """
    Check whether a matrix is diagonal.

    A diagonal matrix is square (row count equals the length of the first
    row) and every cell off the main diagonal is exactly zero. A matrix
    with zero rows is never diagonal; a 1x1 matrix always is.
    """
    if not matrix:
        return False

    size = len(matrix)
    if size != len(matrix[0]):
        return False

    for i, row in enumerate(matrix):
        for j, cell in enumerate(row):
            if i != j and cell != 0:
                return False
    return True


def flatten(*matrices: Matrix) -> List[Number]:
    """Concatenate the cells of each matrix in row-major order."""
    return [cell for matrix in matrices for row in matrix for cell in row]


def compute_statistics(original: Matrix, rotated: Matrix) -> MatrixStatistics:
    """
    Compute aggregate statistics over two matrices.

    Reliability Level: STANDARD
    Input Constraints: Rectangular numeric matrices (may be empty)
    Side Effects: None

    Raises:
        NoNumericValues: If neither matrix contains a single cell
        InvalidMatrixShape: If the sum or average is not a finite double
    """
    values = flatten(original, rotated)
    if not values:
        raise NoNumericValues(MSG_NO_NUMERIC_VALUES)

    total_sum = sum(values)
    try:
        average = total_sum / len(values)
    except OverflowError:
        average = math.inf

    # A float sum overflowing to inf also makes the average inf or nan
    if not math.isfinite(average):
        raise InvalidMatrixShape(MSG_AGGREGATE_OVERFLOW)

    return MatrixStatistics(
        max_value=max(values),
        min_value=min(values),
        average=average,
        total_sum=total_sum,
        is_diagonal_original=is_diagonal(original),
        is_diagonal_rotated=is_diagonal(rotated),
    )


__all__ = [
    "is_diagonal",
    "flatten",
    "compute_statistics",
    "MSG_NO_NUMERIC_VALUES",
    "MSG_AGGREGATE_OVERFLOW",
]
