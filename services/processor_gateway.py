"""
============================================================================
Matrix Orchestration - Remote Processor Port
============================================================================

Reliability Level: STANDARD
Input Constraints: A validated Matrix
Side Effects: Implementations perform one outbound network call

The orchestrator depends only on this port. The HTTP implementation lives
in app/infra/processor_client.py; tests substitute fakes returning canned
results or failures.

Implementations raise:
    - InvalidDimensionsSignal: backend rejected the matrix dimensions
    - BackendUnauthorized / BackendError: every other failure

============================================================================
"""

from abc import ABC, abstractmethod
from typing import Optional

from services.matrix_models import Matrix, RemoteProcessingResult


# Backend error code for a dimension rejection on HTTP 400
INVALID_DIMENSIONS_ERROR_CODE = "dimensiones_de_matriz_invalidas"


class InvalidDimensionsSignal(Exception):
    """
    Backend rejected the matrix dimensions.

    Not part of the caller-facing taxonomy: the orchestrator re-maps it to
    InvalidMatrixShape using ``details`` as the message.
    """

    def __init__(self, details: Optional[str] = None):
        self.details = details
        super().__init__(details or "Backend rejected matrix dimensions")


class RemoteProcessorGateway(ABC):
    """Port to the remote rotation + QR factorization backend."""

    @abstractmethod
    async def process_matrix(
        self,
        matrix: Matrix,
        correlation_id: Optional[str] = None
    ) -> RemoteProcessingResult:
        """
        Submit a matrix for rotation and QR factorization.

        Single attempt; no internal retry.
        """


__all__ = [
    "RemoteProcessorGateway",
    "InvalidDimensionsSignal",
    "INVALID_DIMENSIONS_ERROR_CODE",
]
