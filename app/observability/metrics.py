"""
============================================================================
Matrix Orchestration - Prometheus Metrics
============================================================================

Reliability Level: STANDARD
Input Constraints: None
Side Effects: Updates Prometheus metrics registry

METRICS EXPOSED
---------------
- matrix_requests_total{outcome}: Orchestration calls by outcome
- matrix_backend_latency_seconds: Processing backend round-trip time
- matrix_backend_failures_total{kind}: Classified backend failures

Recording functions never raise; a failure to record is logged (OBS-001)
and the request carries on.

============================================================================
"""

import logging
from typing import Optional

from prometheus_client import Counter, Histogram

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# PROMETHEUS METRICS DEFINITIONS
# ============================================================================

MATRIX_REQUESTS = Counter(
    "matrix_requests_total",
    "Total number of matrix processing requests by outcome",
    ["outcome"]
)

BACKEND_LATENCY = Histogram(
    "matrix_backend_latency_seconds",
    "Round-trip time of processing backend calls",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

BACKEND_FAILURES = Counter(
    "matrix_backend_failures_total",
    "Processing backend failures by classified kind",
    ["kind"]
)


# ============================================================================
# METRIC UPDATE FUNCTIONS
# ============================================================================

def record_matrix_request(outcome: str, correlation_id: Optional[str] = None) -> None:
    """
    Record the outcome of one orchestration call.

    Args:
        outcome: "success" or a MatrixErrorKind value
        correlation_id: Optional tracking ID
    """
    try:
        MATRIX_REQUESTS.labels(outcome=outcome).inc()
        logger.debug(
            "Metric: matrix_request | outcome=%s | correlation_id=%s",
            outcome, correlation_id
        )
    except Exception as e:
        logger.error(
            "[OBS-001] Failed to record matrix_request metric | error=%s",
            str(e)
        )


def record_backend_latency(seconds: float) -> None:
    """Record a processing backend round-trip time."""
    try:
        BACKEND_LATENCY.observe(seconds)
    except Exception as e:
        logger.error(
            "[OBS-001] Failed to record backend_latency metric | error=%s",
            str(e)
        )


def record_backend_failure(kind: str, correlation_id: Optional[str] = None) -> None:
    """Record a classified processing backend failure."""
    try:
        BACKEND_FAILURES.labels(kind=kind).inc()
        logger.debug(
            "Metric: backend_failure | kind=%s | correlation_id=%s",
            kind, correlation_id
        )
    except Exception as e:
        logger.error(
            "[OBS-001] Failed to record backend_failure metric | error=%s",
            str(e)
        )
