"""
============================================================================
Matrix Orchestration
Auth API - Session Login and Route Gate
============================================================================

Reliability Level: STANDARD
Input Constraints: JSON {username, password}; Bearer session tokens
Side Effects: None

ENDPOINTS:
    POST /api/auth/login - Exchange credentials for a session token

DEPENDENCIES:
    require_session - Gate for protected routes (401 AUTH-001..003)

============================================================================
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from app.api.errors import create_error_response
from app.auth.security import (
    SessionPrincipal,
    SessionTokenError,
    extract_bearer_token,
    issue_session_token,
    verify_credentials,
    verify_session_token,
)
from app.schemas.matrix import LoginIn, TokenOut
from services.matrix_config import MatrixServiceConfig, get_matrix_config

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# Router Configuration
# ============================================================================

router = APIRouter()

# Subject id carried by tokens issued to the configured login
DEFAULT_USER_ID = "user123"


def get_service_config() -> MatrixServiceConfig:
    """Dependency returning the process-wide configuration."""
    return get_matrix_config()


def require_session(
    authorization: Optional[str] = Header(None, description="Bearer session token"),
    config: MatrixServiceConfig = Depends(get_service_config)
) -> SessionPrincipal:
    """
    Verify the Bearer session token of a request.

    Raises:
        HTTPException: 401 with AUTH-001, AUTH-002 or AUTH-003
    """
    try:
        token = extract_bearer_token(authorization)
        return verify_session_token(token, config.session_secret)
    except SessionTokenError as e:
        logger.warning(f"[{e.error_code}] Session rejected: {e.message}")
        raise HTTPException(
            status_code=401,
            detail={"error_code": e.error_code, "message": e.message},
        )


@router.post(
    "/login",
    summary="Obtain a session token",
    response_model=TokenOut,
    responses={401: {"description": "Invalid username or password (AUTH-004)"}}
)
def login(
    credentials: LoginIn,
    config: MatrixServiceConfig = Depends(get_service_config)
):
    """Exchange username/password for a signed session token."""
    try:
        verify_credentials(
            credentials.username,
            credentials.password,
            config.auth_username,
            config.auth_password,
        )
    except SessionTokenError as e:
        logger.warning(f"[{e.error_code}] Login failed for username={credentials.username!r}")
        return create_error_response(e.error_code, e.message, status_code=401)

    token = issue_session_token(
        user_id=DEFAULT_USER_ID,
        username=config.auth_username,
        secret_key=config.session_secret,
        expires_in_seconds=config.session_expires_in_seconds,
    )
    logger.info(f"[AUTH-LOGIN] Session issued | username={config.auth_username}")
    return {"token": token}
