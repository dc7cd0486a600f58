"""
============================================================================
Matrix Orchestration
Error Responses - Taxonomy to HTTP Mapping
============================================================================

Reliability Level: STANDARD
Input Constraints: MatrixServiceError or SessionTokenError instances
Side Effects: None

STATUS MAPPING:
    INVALID_MATRIX         -> 400 (caller fault)
    BACKEND_UNAUTHORIZED   -> 502 (our backend credential is misconfigured)
    BACKEND_ERROR          -> 503 for NETWORK_ERROR, otherwise 502
    NO_NUMERIC_VALUES      -> 502 (backend contract violation)
    AUTH-*                 -> 401

============================================================================
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi.responses import JSONResponse

from services.matrix_errors import MatrixErrorKind, MatrixServiceError, NETWORK_ERROR_CODE


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 400,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Create standardized error response.

    Returns:
        JSONResponse: {error_code, message, timestamp, details?}
    """
    content = {
        "error_code": error_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)


def status_for_error(error: MatrixServiceError) -> int:
    """HTTP status the boundary answers with for a taxonomy member."""
    if error.kind == MatrixErrorKind.INVALID_MATRIX_SHAPE:
        return 400
    if error.kind == MatrixErrorKind.BACKEND_UNAUTHORIZED:
        return 502
    if error.kind == MatrixErrorKind.BACKEND_ERROR:
        return 503 if error.code == NETWORK_ERROR_CODE else 502
    if error.kind == MatrixErrorKind.NO_NUMERIC_VALUES:
        return 502
    return 500


def matrix_error_response(error: MatrixServiceError) -> JSONResponse:
    """Render a MatrixServiceError as a standardized error response."""
    details = {}
    if error.code != error.kind.value:
        details["backend_code"] = error.code
    if error.status_code is not None:
        details["backend_status"] = error.status_code

    return create_error_response(
        error_code=error.kind.value,
        message=error.message,
        status_code=status_for_error(error),
        details=details or None,
    )
