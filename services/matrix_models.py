"""
============================================================================
Matrix Orchestration - Core Data Models
============================================================================

Reliability Level: STANDARD
Input Constraints: Matrices are rectangular lists of finite numbers
Side Effects: None

This module defines the request-scoped value types of the pipeline:
- QRFactorization: Opaque {Q, R} pair produced by the backend
- RemoteProcessingResult: Backend payload for one request
- MatrixStatistics: Aggregates derived from original + rotated matrices
- ProcessedMatrixResult: Final value returned by the orchestrator

All models are frozen. ``to_dict()`` yields the camelCase wire shape
served to HTTP clients.

============================================================================
"""

from dataclasses import dataclass
from typing import List, Dict, Any, Union

Number = Union[int, float]
Matrix = List[List[Number]]


@dataclass(frozen=True)
class QRFactorization:
    """
    QR factors as returned by the backend.

    Not inspected beyond existence: Q is expected orthogonal and R upper
    triangular, but that is the backend's contract.
    """
    Q: Matrix
    R: Matrix

    def to_dict(self) -> Dict[str, Any]:
        return {"Q": self.Q, "R": self.R}


@dataclass(frozen=True)
class RemoteProcessingResult:
    """Backend payload: original, rotated and QR-factorized matrix."""
    original_matrix: Matrix
    rotated_matrix: Matrix
    qr_factorization: QRFactorization


@dataclass(frozen=True)
class MatrixStatistics:
    """
    Aggregates over every cell of the original and rotated matrices.

    Reliability Level: STANDARD
    """
    max_value: Number
    min_value: Number
    average: float
    total_sum: Number
    is_diagonal_original: bool
    is_diagonal_rotated: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire shape."""
        return {
            "maxValue": self.max_value,
            "minValue": self.min_value,
            "average": self.average,
            "totalSum": self.total_sum,
            "isDiagonalOriginal": self.is_diagonal_original,
            "isDiagonalRotated": self.is_diagonal_rotated,
        }


@dataclass(frozen=True)
class ProcessedMatrixResult:
    """
    Result of one orchestration call.

    Reliability Level: STANDARD
    """
    original_matrix: Matrix
    rotated_matrix: Matrix
    qr_factorization: QRFactorization
    statistics: MatrixStatistics

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire shape."""
        return {
            "originalMatrix": self.original_matrix,
            "rotatedMatrix": self.rotated_matrix,
            "qrFactorization": self.qr_factorization.to_dict(),
            "statistics": self.statistics.to_dict(),
        }


__all__ = [
    "Number",
    "Matrix",
    "QRFactorization",
    "RemoteProcessingResult",
    "MatrixStatistics",
    "ProcessedMatrixResult",
]
