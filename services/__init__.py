"""
============================================================================
Matrix Orchestration - Services Layer
============================================================================

Validation, statistics and orchestration of the matrix pipeline, plus the
port to the remote processing backend.

Reliability Level: STANDARD
============================================================================
"""

from services.matrix_errors import (
    MatrixErrorKind,
    MatrixServiceError,
    InvalidMatrixShape,
    BackendUnauthorized,
    BackendError,
    NoNumericValues,
)

from services.matrix_models import (
    Matrix,
    QRFactorization,
    RemoteProcessingResult,
    MatrixStatistics,
    ProcessedMatrixResult,
)

from services.matrix_validator import validate_matrix

from services.matrix_statistics import compute_statistics, is_diagonal

from services.processor_gateway import RemoteProcessorGateway, InvalidDimensionsSignal

from services.matrix_orchestrator import MatrixOrchestrationService

__all__ = [
    # Errors
    "MatrixErrorKind",
    "MatrixServiceError",
    "InvalidMatrixShape",
    "BackendUnauthorized",
    "BackendError",
    "NoNumericValues",
    # Models
    "Matrix",
    "QRFactorization",
    "RemoteProcessingResult",
    "MatrixStatistics",
    "ProcessedMatrixResult",
    # Pipeline
    "validate_matrix",
    "compute_statistics",
    "is_diagonal",
    "RemoteProcessorGateway",
    "InvalidDimensionsSignal",
    "MatrixOrchestrationService",
]
