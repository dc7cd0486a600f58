# ============================================================================
# Matrix Orchestration
# Property-Based Tests: Validator, Statistics, Orchestrator
# ============================================================================
#
# Test Framework: Hypothesis
#
# Properties Tested:
#   - Well-formed matrices validate unchanged
#   - Ragged matrices are always rejected as non-rectangular
#   - Arbitrary JSON-like values only ever raise InvalidMatrixShape
#   - Statistics bounds: min <= average <= max, sum == average * count
#   - Diagonal matrices are detected; non-square never are
#   - execute() is deterministic against a deterministic backend
#
# ============================================================================

import asyncio
import math

import pytest
from hypothesis import given, strategies as st, settings, assume

from services.matrix_errors import InvalidMatrixShape
from services.matrix_models import QRFactorization, RemoteProcessingResult
from services.matrix_orchestrator import MatrixOrchestrationService
from services.matrix_statistics import compute_statistics, flatten, is_diagonal
from services.matrix_validator import validate_matrix, MSG_NOT_RECTANGULAR
from services.processor_gateway import RemoteProcessorGateway


# ============================================================================
# Hypothesis Strategies
# ============================================================================

cell_strategy = st.one_of(
    st.integers(min_value=-10**6, max_value=10**6),
    st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False),
)

json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.integers(min_value=10 ** 308, max_value=10 ** 400)
    | st.floats()
    | st.text(max_size=5),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=3), children, max_size=3),
    max_leaves=20,
)


@st.composite
def matrices(draw, min_rows=1, max_rows=6, min_cols=1, max_cols=6):
    rows = draw(st.integers(min_value=min_rows, max_value=max_rows))
    cols = draw(st.integers(min_value=min_cols, max_value=max_cols))
    return draw(st.lists(
        st.lists(cell_strategy, min_size=cols, max_size=cols),
        min_size=rows, max_size=rows,
    ))


@st.composite
def diagonal_matrices(draw):
    size = draw(st.integers(min_value=1, max_value=6))
    diagonal = draw(st.lists(cell_strategy, min_size=size, max_size=size))
    return [
        [diagonal[i] if i == j else 0 for j in range(size)]
        for i in range(size)
    ]


class RotatingGateway(RemoteProcessorGateway):
    """Deterministic backend double: clockwise rotation."""

    async def process_matrix(self, matrix, correlation_id=None):
        rotated = [list(row) for row in zip(*matrix[::-1])]
        return RemoteProcessingResult(
            original_matrix=matrix,
            rotated_matrix=rotated,
            qr_factorization=QRFactorization(Q=[[1.0]], R=[[1.0]]),
        )


# ============================================================================
# Validator Properties
# ============================================================================

class TestValidatorProperties:

    @given(matrix=matrices())
    @settings(max_examples=100)
    def test_well_formed_matrices_validate_unchanged(self, matrix):
        snapshot = [list(row) for row in matrix]

        assert validate_matrix(matrix) is matrix
        assert matrix == snapshot

    @given(matrix=matrices(min_rows=2), extra=cell_strategy, row_index=st.integers(min_value=1))
    @settings(max_examples=100)
    def test_ragged_matrices_are_rejected(self, matrix, extra, row_index):
        ragged = [list(row) for row in matrix]
        ragged[1 + row_index % (len(ragged) - 1)].append(extra)

        with pytest.raises(InvalidMatrixShape) as exc_info:
            validate_matrix(ragged)
        assert exc_info.value.message == MSG_NOT_RECTANGULAR


class TestValidatorTotality:

    @given(value=json_values)
    @settings(max_examples=200)
    def test_only_invalid_matrix_shape_is_raised(self, value):
        try:
            assert validate_matrix(value) is value
        except InvalidMatrixShape:
            pass


# ============================================================================
# Statistics Properties
# ============================================================================

class TestStatisticsProperties:

    @given(original=matrices(), rotated=matrices())
    @settings(max_examples=100)
    def test_bounds_and_sum(self, original, rotated):
        stats = compute_statistics(original, rotated)
        values = flatten(original, rotated)

        assert stats.min_value <= stats.max_value
        assert stats.min_value - 1e-6 <= stats.average <= stats.max_value + 1e-6
        assert math.isclose(stats.total_sum, sum(values), rel_tol=1e-9, abs_tol=1e-9)
        assert math.isclose(
            stats.average * len(values), stats.total_sum, rel_tol=1e-9, abs_tol=1e-6
        )

    @given(matrix=diagonal_matrices())
    @settings(max_examples=100)
    def test_diagonal_matrices_detected(self, matrix):
        assert is_diagonal(matrix)

    @given(matrix=matrices())
    @settings(max_examples=100)
    def test_non_square_never_diagonal(self, matrix):
        assume(len(matrix) != len(matrix[0]))
        assert not is_diagonal(matrix)


# ============================================================================
# Orchestrator Properties
# ============================================================================

class TestOrchestratorProperties:

    @given(matrix=matrices())
    @settings(max_examples=50)
    def test_execute_is_deterministic(self, matrix):
        service = MatrixOrchestrationService(RotatingGateway())

        first = asyncio.run(service.execute(matrix))
        second = asyncio.run(service.execute(matrix))

        assert first == second

    @given(matrix=matrices())
    @settings(max_examples=50)
    def test_rotation_preserves_aggregates(self, matrix):
        service = MatrixOrchestrationService(RotatingGateway())

        result = asyncio.run(service.execute(matrix))

        assert result.statistics.max_value == max(flatten(matrix))
        assert result.statistics.min_value == min(flatten(matrix))
