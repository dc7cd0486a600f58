"""
============================================================================
Matrix Orchestration - Input Matrix Validator
============================================================================

Reliability Level: STANDARD
Input Constraints: Any decoded JSON value
Side Effects: None (pure validation)

Checks are applied in a fixed order; the first failure wins:
    1. Absent, zero rows, or first row not a sequence -> empty/malformed
    2. Rows of differing length                        -> not rectangular
    3. Any cell that is not a finite number            -> non-numeric

============================================================================
"""

import math
from typing import Any

from services.matrix_errors import InvalidMatrixShape
from services.matrix_models import Matrix


MSG_EMPTY_OR_MALFORMED = "Input matrix is empty or malformed."
MSG_NOT_RECTANGULAR = (
    "Matrix must be rectangular (all rows must have the same number of columns)."
)
MSG_NON_NUMERIC = "Matrix must contain only numeric values."


def _is_row(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_finite_number(value: Any) -> bool:
    """
    True for int/float values that are finite as a double.

    bool is rejected even though it subclasses int. An int too large for a
    double counts as infinite, the same as an overflowing JSON number
    literal decoded to a float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_numeric_matrix(value: Any) -> bool:
    """True for a list of lists whose cells all pass is_finite_number."""
    return isinstance(value, list) and all(
        isinstance(row, list) and all(is_finite_number(cell) for cell in row)
        for row in value
    )


def validate_matrix(value: Any) -> Matrix:
    """
    Validate shape and content of an input matrix.

    Reliability Level: STANDARD
    Input Constraints: None (total over all inputs)
    Side Effects: None

    Args:
        value: Candidate matrix, typically the decoded ``matrix`` field

    Returns:
        The same object, unchanged

    Raises:
        InvalidMatrixShape: On the first failed check
    """
    if not _is_row(value) or len(value) == 0 or not _is_row(value[0]):
        raise InvalidMatrixShape(MSG_EMPTY_OR_MALFORMED)

    num_cols = len(value[0])
    if num_cols == 0:
        raise InvalidMatrixShape(MSG_EMPTY_OR_MALFORMED)

    for row in value:
        if not _is_row(row) or len(row) != num_cols:
            raise InvalidMatrixShape(MSG_NOT_RECTANGULAR)

    for row in value:
        if not all(is_finite_number(cell) for cell in row):
            raise InvalidMatrixShape(MSG_NON_NUMERIC)

    return value


__all__ = [
    "validate_matrix",
    "is_finite_number",
    "is_numeric_matrix",
    "MSG_EMPTY_OR_MALFORMED",
    "MSG_NOT_RECTANGULAR",
    "MSG_NON_NUMERIC",
]
