"""
============================================================================
Matrix Orchestration - Error Taxonomy
============================================================================

Reliability Level: STANDARD
Input Constraints: Human-readable message, optional backend code/status
Side Effects: None

Closed set of failures surfaced by MatrixOrchestrationService.execute():

    INVALID_MATRIX_SHAPE   - malformed, non-rectangular, non-numeric or
                             backend-rejected dimensions (client fault)
    BACKEND_UNAUTHORIZED   - our access token was rejected by the backend
    BACKEND_ERROR          - any other backend failure, including network
                             failures (code NETWORK_ERROR)
    NO_NUMERIC_VALUES      - backend returned structurally valid but empty
                             matrices

Each member is a MatrixServiceError tagged with its MatrixErrorKind so the
HTTP boundary can map kinds exhaustively without isinstance chains.

============================================================================
"""

from enum import Enum
from typing import Optional, Dict, Any


class MatrixErrorKind(str, Enum):
    """Tag of a MatrixServiceError."""
    INVALID_MATRIX_SHAPE = "INVALID_MATRIX"
    BACKEND_UNAUTHORIZED = "BACKEND_UNAUTHORIZED"
    BACKEND_ERROR = "BACKEND_ERROR"
    NO_NUMERIC_VALUES = "NO_NUMERIC_VALUES"


# Code attached to BackendError when no response was received at all
NETWORK_ERROR_CODE = "NETWORK_ERROR"

# Code attached to BackendError when a 2xx body is missing its payload
MALFORMED_RESPONSE_CODE = "MALFORMED_RESPONSE"


class MatrixServiceError(Exception):
    """
    Base of the closed matrix error taxonomy.

    Only the four subclasses below are raised. Catch this class at the
    boundary and dispatch on ``kind``.

    Attributes:
        kind: MatrixErrorKind tag
        message: Human-readable message
        code: Backend-supplied or synthesized error code
        status_code: Backend HTTP status, when one was received
    """

    kind: MatrixErrorKind = MatrixErrorKind.BACKEND_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None
    ) -> None:
        self.message = message
        self.code = code or self.kind.value
        self.status_code = status_code
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
        }


class InvalidMatrixShape(MatrixServiceError):
    """Input matrix is empty, malformed, non-rectangular or non-numeric."""
    kind = MatrixErrorKind.INVALID_MATRIX_SHAPE


class BackendUnauthorized(MatrixServiceError):
    """The processing backend rejected this service's access token."""
    kind = MatrixErrorKind.BACKEND_UNAUTHORIZED


class BackendError(MatrixServiceError):
    """Unclassified processing backend failure."""
    kind = MatrixErrorKind.BACKEND_ERROR


class NoNumericValues(MatrixServiceError):
    """No cells were available to compute statistics over."""
    kind = MatrixErrorKind.NO_NUMERIC_VALUES


__all__ = [
    "MatrixErrorKind",
    "MatrixServiceError",
    "InvalidMatrixShape",
    "BackendUnauthorized",
    "BackendError",
    "NoNumericValues",
    "NETWORK_ERROR_CODE",
    "MALFORMED_RESPONSE_CODE",
]
