"""
============================================================================
Matrix Orchestration - Processing Backend HTTP Client
============================================================================

Reliability Level: STANDARD
Input Constraints: Backend base URL and access token from configuration
Side Effects: One HTTP POST per call to {base_url}/process-matrix

PROTOCOL:
    Request:  POST /process-matrix  {"matrix": [[...], ...]}
              Authorization: Bearer <access token>
    Success:  {"data": {"original_matrix", "rotated_matrix",
                        "qr_factorization": {"Q", "R"}}}
    Failure:  {"error": <code>, "details"?: str, "message"?: str}

FAILURE CLASSIFICATION (classify_backend_failure):
    no response                              -> BackendError NETWORK_ERROR
    401                                      -> BackendUnauthorized
    400 + dimensiones_de_matriz_invalidas    -> InvalidDimensionsSignal
    any other >= 400                         -> BackendError(status)
    2xx without the expected payload, or     -> BackendError MALFORMED_RESPONSE
    with non-numeric matrix cells

No retry, no backoff. The request timeout bounds every call; a timeout is
reported as the no-response case.

============================================================================
"""

import time
import logging
from typing import Optional, Dict, Any

import httpx

from app.observability.metrics import record_backend_latency, record_backend_failure
from services.matrix_errors import (
    BackendError,
    BackendUnauthorized,
    MatrixServiceError,
    NETWORK_ERROR_CODE,
    MALFORMED_RESPONSE_CODE,
)
from services.matrix_models import Matrix, QRFactorization, RemoteProcessingResult
from services.matrix_validator import is_numeric_matrix
from services.processor_gateway import (
    RemoteProcessorGateway,
    InvalidDimensionsSignal,
    INVALID_DIMENSIONS_ERROR_CODE,
)

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

PROCESS_MATRIX_PATH = "/process-matrix"

DEFAULT_TIMEOUT_SECONDS = 10.0

MSG_UNAUTHORIZED = "Application access token for the processing backend is invalid or expired."
MSG_NO_RESPONSE = "No response received from processing backend. It might be down or unreachable."
MSG_MALFORMED = "Processing backend response data is malformed or missing."


# ============================================================================
# CLASSIFICATION
# ============================================================================

def classify_backend_failure(
    status_code: Optional[int],
    body: Optional[Dict[str, Any]],
    response_received: bool,
    transport_message: Optional[str] = None
) -> Exception:
    """
    Map a failed backend exchange onto the gateway failure taxonomy.

    Reliability Level: STANDARD
    Input Constraints: status_code is required when response_received
    Side Effects: None (pure function)

    Args:
        status_code: HTTP status of the response, if any
        body: Decoded JSON error body, if any
        response_received: False for timeouts, refused connections, DNS errors
        transport_message: Underlying transport error text, for diagnostics

    Returns:
        The exception to raise: InvalidDimensionsSignal, BackendUnauthorized
        or BackendError
    """
    if not response_received:
        message = MSG_NO_RESPONSE
        if transport_message:
            message = f"{message} ({transport_message})"
        return BackendError(message, code=NETWORK_ERROR_CODE)

    body = body if isinstance(body, dict) else {}
    error_code = body.get("error")
    details = body.get("details")

    if status_code == 401:
        return BackendUnauthorized(details or MSG_UNAUTHORIZED, status_code=401)

    if status_code == 400 and error_code == INVALID_DIMENSIONS_ERROR_CODE:
        return InvalidDimensionsSignal(details)

    return BackendError(
        body.get("message") or details or f"Processing backend responded with status {status_code}",
        code=error_code or f"HTTP_STATUS_{status_code}",
        status_code=status_code,
    )


def parse_success_body(body: Any) -> RemoteProcessingResult:
    """
    Build a RemoteProcessingResult from a 2xx response body.

    Raises:
        BackendError: MALFORMED_RESPONSE if any expected field is missing
            or a matrix cell is not a finite number
    """
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        raise BackendError(MSG_MALFORMED, code=MALFORMED_RESPONSE_CODE)

    original = data.get("original_matrix")
    rotated = data.get("rotated_matrix")
    qr = data.get("qr_factorization")

    if not (
        is_numeric_matrix(original)
        and is_numeric_matrix(rotated)
        and isinstance(qr, dict)
        and "Q" in qr
        and "R" in qr
    ):
        raise BackendError(MSG_MALFORMED, code=MALFORMED_RESPONSE_CODE)

    return RemoteProcessingResult(
        original_matrix=original,
        rotated_matrix=rotated,
        qr_factorization=QRFactorization(Q=qr["Q"], R=qr["R"]),
    )


def _decode_json(response: httpx.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


# ============================================================================
# HTTP CLIENT
# ============================================================================

class HttpRemoteProcessorGateway(RemoteProcessorGateway):
    """
    httpx implementation of the processing backend port.

    Reliability Level: STANDARD
    Input Constraints: Non-empty base_url and access_token
    Side Effects: HTTP calls, latency/failure metrics

    A fresh AsyncClient is opened per call, so concurrent calls share
    nothing but immutable configuration.

    USAGE:
        gateway = HttpRemoteProcessorGateway(base_url, token)
        result = await gateway.process_matrix([[1, 2], [3, 4]])
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Raises:
            ValueError: If base_url or access_token is empty
        """
        if not base_url:
            raise ValueError("HttpRemoteProcessorGateway: base_url is required.")
        if not access_token:
            raise ValueError("HttpRemoteProcessorGateway: access_token is required.")

        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

        logger.info(
            f"[PROCESSOR-CLIENT-INIT] base_url={base_url} timeout={timeout}s"
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def process_matrix(
        self,
        matrix: Matrix,
        correlation_id: Optional[str] = None
    ) -> RemoteProcessingResult:
        """
        POST the matrix to the backend and return its parsed payload.

        Raises:
            InvalidDimensionsSignal: Backend rejected the dimensions (400)
            BackendUnauthorized: Backend rejected our token (401)
            BackendError: Any other failure, including no response
        """
        start = time.perf_counter()
        try:
            try:
                async with httpx.AsyncClient(
                    base_url=self._base_url,
                    headers=self._headers,
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.post(PROCESS_MATRIX_PATH, json={"matrix": matrix})
            except httpx.TransportError as e:
                raise classify_backend_failure(
                    None, None, response_received=False,
                    transport_message=f"{type(e).__name__}: {e}"
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise BackendError(f"Error setting up request to processing backend: {e}")
            finally:
                record_backend_latency(time.perf_counter() - start)

            body = _decode_json(response)

            if response.status_code >= 400:
                raise classify_backend_failure(
                    response.status_code, body, response_received=True
                )

            return parse_success_body(body)

        except MatrixServiceError as e:
            record_backend_failure(e.kind.value, correlation_id)
            logger.warning(
                f"[PROCESSOR-CLIENT-ERROR] {e} | "
                f"status={e.status_code} | correlation_id={correlation_id}"
            )
            raise
        except InvalidDimensionsSignal as e:
            record_backend_failure("INVALID_DIMENSIONS", correlation_id)
            logger.info(
                f"[PROCESSOR-CLIENT-DIMENSIONS] Backend rejected dimensions: {e.details} | "
                f"correlation_id={correlation_id}"
            )
            raise


__all__ = [
    "HttpRemoteProcessorGateway",
    "classify_backend_failure",
    "parse_success_body",
    "PROCESS_MATRIX_PATH",
    "DEFAULT_TIMEOUT_SECONDS",
]
