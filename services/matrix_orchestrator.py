"""
============================================================================
Matrix Orchestration - Orchestration Service
============================================================================

Reliability Level: STANDARD
Input Constraints: Decoded ``matrix`` value from the request body
Side Effects: One call to the processing backend, diagnostic logging

PIPELINE CHAIN:
Validate → Process (backend) → Statistics → Assemble

ERROR HANDLING:
Each step is an early exit. Nothing is retried or recovered locally:
    - Validation failure      -> InvalidMatrixShape, backend never called
    - InvalidDimensionsSignal -> InvalidMatrixShape(backend details)
    - BackendUnauthorized / BackendError propagate unchanged
    - Non-numeric backend cells -> BackendError MALFORMED_RESPONSE
    - NoNumericValues from statistics propagates unchanged
    - Non-finite sum or average -> InvalidMatrixShape

Instances hold only their gateway, so one instance may serve any number
of concurrent execute() calls.

============================================================================
"""

import uuid
import logging
from typing import Any, Optional

from services.matrix_errors import BackendError, InvalidMatrixShape, MALFORMED_RESPONSE_CODE
from services.matrix_models import ProcessedMatrixResult, RemoteProcessingResult
from services.matrix_statistics import compute_statistics
from services.matrix_validator import validate_matrix, is_numeric_matrix
from services.processor_gateway import RemoteProcessorGateway, InvalidDimensionsSignal

# Configure module logger
logger = logging.getLogger(__name__)


MSG_BACKEND_INVALID_DIMENSIONS = "Matrix dimensions are invalid according to the processing backend."
MSG_BACKEND_NON_NUMERIC = "Processing backend returned matrices with non-numeric cells."


class MatrixOrchestrationService:
    """
    Validate → delegate → enrich pipeline for one matrix.

    USAGE:
        service = MatrixOrchestrationService(gateway)
        result = await service.execute([[1, 2], [3, 4]])
        result.statistics.max_value  # 4
    """

    def __init__(self, gateway: RemoteProcessorGateway) -> None:
        self._gateway = gateway

    async def execute(
        self,
        matrix: Any,
        correlation_id: Optional[str] = None
    ) -> ProcessedMatrixResult:
        """
        Process a matrix end to end.

        Args:
            matrix: Candidate matrix (validated here)
            correlation_id: Audit trail identifier (auto-generated if None)

        Returns:
            ProcessedMatrixResult with backend output and statistics

        Raises:
            InvalidMatrixShape: Local validation, backend dimension rejection,
                or a sum/average too large for a double
            BackendUnauthorized: Backend rejected our access token
            BackendError: Any other backend failure, including non-numeric cells
            NoNumericValues: Backend returned matrices without cells
        """
        if correlation_id is None:
            correlation_id = str(uuid.uuid4())

        # STEP 1: VALIDATE
        validated = validate_matrix(matrix)

        logger.info(
            f"[MATRIX-ORCH-START] rows={len(validated)} cols={len(validated[0])} | "
            f"correlation_id={correlation_id}"
        )

        # STEP 2: PROCESS
        remote_result = await self._process_remote(validated, correlation_id)

        # STEP 3: STATISTICS
        statistics = compute_statistics(
            remote_result.original_matrix,
            remote_result.rotated_matrix,
        )

        # STEP 4: ASSEMBLE
        result = ProcessedMatrixResult(
            original_matrix=remote_result.original_matrix,
            rotated_matrix=remote_result.rotated_matrix,
            qr_factorization=remote_result.qr_factorization,
            statistics=statistics,
        )

        logger.info(
            f"[MATRIX-ORCH-SUCCESS] max={statistics.max_value} min={statistics.min_value} "
            f"avg={statistics.average} | correlation_id={correlation_id}"
        )
        return result

    async def _process_remote(
        self,
        matrix: Any,
        correlation_id: str
    ) -> RemoteProcessingResult:
        try:
            remote_result = await self._gateway.process_matrix(matrix, correlation_id=correlation_id)
        except InvalidDimensionsSignal as e:
            logger.info(
                f"[MATRIX-ORCH-REJECTED] Backend rejected dimensions | "
                f"correlation_id={correlation_id}"
            )
            raise InvalidMatrixShape(e.details or MSG_BACKEND_INVALID_DIMENSIONS) from e

        if not (
            is_numeric_matrix(remote_result.original_matrix)
            and is_numeric_matrix(remote_result.rotated_matrix)
        ):
            raise BackendError(MSG_BACKEND_NON_NUMERIC, code=MALFORMED_RESPONSE_CODE)

        return remote_result


__all__ = [
    "MatrixOrchestrationService",
    "MSG_BACKEND_INVALID_DIMENSIONS",
    "MSG_BACKEND_NON_NUMERIC",
]
