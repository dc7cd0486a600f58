"""
============================================================================
Matrix Orchestration
FastAPI Application Entry Point
============================================================================

Reliability Level: STANDARD
Input Constraints: JSON over HTTP
Side Effects: Outbound calls to the processing backend

ROUTES:
    POST /api/auth/login               - Session token issuance
    POST /api/matrix/process-matrix    - Matrix pipeline (session required)
    GET  /health                       - Liveness
    GET  /metrics                      - Prometheus exposition

STARTUP:
    Configuration is validated before the first request is accepted.
    A MatrixConfigurationError aborts startup.

============================================================================
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response, Depends
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.api.auth import router as auth_router, get_service_config
from app.api.errors import create_error_response, matrix_error_response
from app.api.matrix import router as matrix_router
from services.matrix_config import MatrixServiceConfig, get_matrix_config
from services.matrix_errors import MatrixServiceError

# Configure module logger
logger = logging.getLogger(__name__)

SERVICE_NAME = "matrix-orchestrator"


# ============================================================================
# APPLICATION LIFESPAN
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Validate configuration on startup, log shutdown.

    Raises:
        MatrixConfigurationError: If required configuration is missing
    """
    config: Optional[MatrixServiceConfig] = app.state.config
    if config is None:
        config = get_matrix_config(validate=False)

    config.validate()

    logger.info(
        f"[STARTUP] {SERVICE_NAME} ready | "
        f"backend={config.backend_base_url} | port={config.api_port}"
    )
    yield
    logger.info(f"[SHUTDOWN] {SERVICE_NAME} stopped")


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def create_app(config: Optional[MatrixServiceConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Explicit configuration; loaded from the environment if None
    """
    app = FastAPI(
        title="Matrix Orchestration API",
        description="Validates matrices, delegates rotation and QR factorization, "
                    "and enriches results with statistics.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    if config is not None:
        app.dependency_overrides[get_service_config] = lambda: config

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(matrix_router, prefix="/api/matrix", tags=["matrix"])

    @app.exception_handler(MatrixServiceError)
    async def handle_matrix_error(request: Request, exc: MatrixServiceError):
        logger.warning(f"[MatrixServiceError] {exc} | path={request.url.path}")
        return matrix_error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(
            f"[Unhandled Error] {type(exc).__name__}: {exc} | path={request.url.path}"
        )
        return create_error_response(
            error_code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred.",
            status_code=500
        )

    @app.get("/health", tags=["health"])
    def health(service_config: MatrixServiceConfig = Depends(get_service_config)):
        """Liveness check. Does not contact the processing backend."""
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "backend_base_url": service_config.backend_base_url,
        }

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        """Prometheus metrics exposition."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()
