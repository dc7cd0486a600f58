"""
============================================================================
Matrix Orchestration
Matrix API - Process Matrix Endpoint
============================================================================

Reliability Level: STANDARD
Input Constraints:
    - Bearer session token (require_session)
    - JSON body {"matrix": [[...], ...]}
Side Effects:
    - One call to the processing backend per request
    - Prometheus request outcome counter

FLOW:
1. Read raw body and decode JSON
2. Pre-check presence and type of "matrix"
3. Delegate to MatrixOrchestrationService.execute()
4. Render result, or map the error taxonomy to an HTTP status

============================================================================
"""

import json
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Request

from app.api.auth import get_service_config, require_session
from app.api.errors import create_error_response, matrix_error_response
from app.auth.security import SessionPrincipal
from app.infra.processor_client import HttpRemoteProcessorGateway
from app.observability.metrics import record_matrix_request
from app.schemas.matrix import MatrixProcessOut
from services.matrix_config import MatrixServiceConfig
from services.matrix_errors import MatrixErrorKind, MatrixServiceError
from services.matrix_orchestrator import MatrixOrchestrationService

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# Router Configuration
# ============================================================================

router = APIRouter()

SUCCESS_MESSAGE = "Matrix processed and statistics generated successfully."

_orchestration_service: Optional[MatrixOrchestrationService] = None


def get_orchestration_service(
    config: MatrixServiceConfig = Depends(get_service_config)
) -> MatrixOrchestrationService:
    """
    Dependency returning the process-wide orchestration service.

    Built lazily on first use from configuration.
    """
    global _orchestration_service

    if _orchestration_service is None:
        gateway = HttpRemoteProcessorGateway(
            base_url=config.backend_base_url,
            access_token=config.backend_access_token,
            timeout=config.backend_timeout_seconds,
        )
        _orchestration_service = MatrixOrchestrationService(gateway)

    return _orchestration_service


def reset_orchestration_service() -> None:
    """Drop the cached orchestration service (for tests)."""
    global _orchestration_service
    _orchestration_service = None


def _invalid_matrix(message: str):
    record_matrix_request(MatrixErrorKind.INVALID_MATRIX_SHAPE.value)
    return create_error_response(
        error_code=MatrixErrorKind.INVALID_MATRIX_SHAPE.value,
        message=message,
        status_code=400
    )


# ============================================================================
# PROCESS MATRIX ENDPOINT
# ============================================================================

@router.post(
    "/process-matrix",
    summary="Rotate, factorize and summarize a matrix",
    response_model=MatrixProcessOut,
    responses={
        400: {"description": "Invalid matrix (INVALID_MATRIX) or invalid JSON (VAL-001)"},
        401: {"description": "Missing, invalid or expired session token (AUTH-001..003)"},
        502: {"description": "Processing backend failure or contract violation"},
        503: {"description": "Processing backend unreachable (NETWORK_ERROR)"},
    }
)
async def process_matrix(
    request: Request,
    principal: SessionPrincipal = Depends(require_session),
    service: MatrixOrchestrationService = Depends(get_orchestration_service)
):
    """
    Process a matrix through the validate → delegate → enrich pipeline.

    Returns:
        dict: {message, data: ProcessedMatrixResult}
    """
    correlation_id = str(uuid.uuid4())
    raw_body = await request.body()

    try:
        payload = json.loads(raw_body.decode("utf-8")) if raw_body else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return create_error_response(
            error_code="VAL-001",
            message=f"Invalid JSON payload: {e}",
            status_code=400
        )

    matrix = payload.get("matrix") if isinstance(payload, dict) else None
    if matrix is None:
        return _invalid_matrix("Matrix is required in the request body.")
    if not isinstance(matrix, list):
        return _invalid_matrix("Matrix must be an array.")

    logger.info(
        f"[MATRIX-API] Request received | user={principal.username} | "
        f"correlation_id={correlation_id}"
    )

    try:
        result = await service.execute(matrix, correlation_id=correlation_id)
    except MatrixServiceError as e:
        logger.warning(
            f"[MATRIX-API-ERROR] {e.kind.value}: {e.message} | "
            f"correlation_id={correlation_id}"
        )
        record_matrix_request(e.kind.value, correlation_id)
        return matrix_error_response(e)

    record_matrix_request("success", correlation_id)
    return {"message": SUCCESS_MESSAGE, "data": result.to_dict()}
