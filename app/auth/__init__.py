# ============================================================================
# Matrix Orchestration
# Authentication & Security Module
# ============================================================================

from app.auth.security import (
    SessionTokenError,
    SessionPrincipal,
    issue_session_token,
    verify_session_token,
)

__all__ = [
    "SessionTokenError",
    "SessionPrincipal",
    "issue_session_token",
    "verify_session_token",
]
