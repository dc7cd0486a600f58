"""
============================================================================
Matrix Orchestration
Observability Module - Prometheus Metrics
============================================================================

Reliability Level: STANDARD
Input Constraints: None
Side Effects: Exposes Prometheus metrics

============================================================================
"""

from app.observability.metrics import (
    MATRIX_REQUESTS,
    BACKEND_LATENCY,
    BACKEND_FAILURES,
    record_matrix_request,
    record_backend_latency,
    record_backend_failure,
)

__all__ = [
    "MATRIX_REQUESTS",
    "BACKEND_LATENCY",
    "BACKEND_FAILURES",
    "record_matrix_request",
    "record_backend_latency",
    "record_backend_failure",
]
