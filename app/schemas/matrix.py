"""
============================================================================
Matrix Orchestration
Matrix & Auth Schemas - Pydantic Models for the HTTP Surface
============================================================================

Reliability Level: STANDARD
Input Constraints: JSON request bodies
Side Effects: None (pure validation/serialization)

Matrix shape rules are NOT enforced here; the orchestration service owns
them so that every caller gets the same error messages.

============================================================================
"""

from typing import Any, Optional, List, Union

from pydantic import BaseModel, Field, ConfigDict

Cell = Union[int, float]


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class LoginIn(BaseModel):
    """Credentials posted to /api/auth/login."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "testuser", "password": "testpass"}
        }
    )

    username: Optional[str] = Field(None, description="Login name")
    password: Optional[str] = Field(None, description="Login password")


class TokenOut(BaseModel):
    """Issued session token."""
    token: str = Field(..., description="Bearer session token")


# ============================================================================
# MATRIX OUTPUT SCHEMAS
# ============================================================================

class QRFactorizationOut(BaseModel):
    """Backend QR factors, passed through without validation."""
    Q: Any
    R: Any


class MatrixStatisticsOut(BaseModel):
    """Aggregates over the original and rotated matrices."""
    maxValue: Cell
    minValue: Cell
    average: float
    totalSum: Cell
    isDiagonalOriginal: bool
    isDiagonalRotated: bool


class ProcessedMatrixOut(BaseModel):
    originalMatrix: List[List[Cell]]
    rotatedMatrix: List[List[Cell]]
    qrFactorization: QRFactorizationOut
    statistics: MatrixStatisticsOut


class MatrixProcessOut(BaseModel):
    """
    Response of POST /api/matrix/process-matrix.

    Reliability Level: STANDARD
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Matrix processed and statistics generated successfully.",
                "data": {
                    "originalMatrix": [[1, 2], [3, 4]],
                    "rotatedMatrix": [[3, 1], [4, 2]],
                    "qrFactorization": {
                        "Q": [[-0.31, -0.95], [-0.95, 0.31]],
                        "R": [[-3.16, -4.43], [0.0, -0.63]]
                    },
                    "statistics": {
                        "maxValue": 4,
                        "minValue": 1,
                        "average": 2.5,
                        "totalSum": 20,
                        "isDiagonalOriginal": False,
                        "isDiagonalRotated": False
                    }
                }
            }
        }
    )

    message: str
    data: ProcessedMatrixOut
