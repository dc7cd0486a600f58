"""
============================================================================
Matrix Orchestration
Security Module - HMAC-SHA256 Session Tokens
============================================================================

Reliability Level: STANDARD
Input Constraints: Signing secret from configuration
Side Effects: None (pure signing/verification)

TOKEN FORMAT:
    <base64url(JSON payload)>.<hex HMAC-SHA256 of the encoded payload>
    payload = {"sub", "username", "iat", "exp"}

Tokens are issued by POST /api/auth/login and must be presented as
``Authorization: Bearer <token>`` on every /api/matrix route.

Error Codes:
    AUTH-001: Missing or malformed Authorization header / token
    AUTH-002: Signature mismatch
    AUTH-003: Token expired
    AUTH-004: Invalid username or password

============================================================================
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Optional, Dict, Any


# ============================================================================
# CONSTANTS
# ============================================================================

BEARER_PREFIX = "Bearer "


# ============================================================================
# EXCEPTIONS
# ============================================================================

class SessionTokenError(Exception):
    """
    Raised when a session token cannot be issued or verified.

    Error Codes:
        AUTH-001: Missing or malformed token
        AUTH-002: Signature mismatch
        AUTH-003: Token expired
        AUTH-004: Invalid credentials
    """

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")


@dataclass(frozen=True)
class SessionPrincipal:
    """Identity carried by a verified session token."""
    user_id: str
    username: str
    expires_at: int


# ============================================================================
# SIGNING
# ============================================================================

def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)


def compute_token_signature(encoded_payload: str, secret_key: str) -> str:
    """
    Compute the HMAC-SHA256 signature of an encoded payload.

    Returns:
        str: Hexadecimal signature
    """
    signature = hmac.new(
        key=secret_key.encode("utf-8"),
        msg=encoded_payload.encode("utf-8"),
        digestmod=hashlib.sha256
    )
    return signature.hexdigest()


def issue_session_token(
    user_id: str,
    username: str,
    secret_key: str,
    expires_in_seconds: int,
    now: Optional[float] = None
) -> str:
    """
    Issue a signed session token.

    Args:
        user_id: Stable subject identifier
        username: Display name carried in the token
        secret_key: Signing secret
        expires_in_seconds: Token lifetime
        now: Override of the issue time (epoch seconds)
    """
    issued_at = int(now if now is not None else time.time())
    payload: Dict[str, Any] = {
        "sub": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + int(expires_in_seconds),
    }
    encoded = _b64encode(
        json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")
    )
    return f"{encoded}.{compute_token_signature(encoded, secret_key)}"


def verify_session_token(
    token: Optional[str],
    secret_key: str,
    now: Optional[float] = None
) -> SessionPrincipal:
    """
    Verify a session token and return its principal.

    Timing-safe signature comparison. The payload is decoded only after the
    signature has been checked.

    Raises:
        SessionTokenError: AUTH-001, AUTH-002 or AUTH-003
    """
    if not token or token.count(".") != 1:
        raise SessionTokenError("AUTH-001", "Invalid token.")

    encoded, provided_signature = token.split(".")
    expected_signature = compute_token_signature(encoded, secret_key)

    if not hmac.compare_digest(
        expected_signature.encode("ascii"), provided_signature.lower().encode("utf-8")
    ):
        raise SessionTokenError("AUTH-002", "Invalid token.")

    try:
        payload = json.loads(_b64decode(encoded))
        principal = SessionPrincipal(
            user_id=str(payload["sub"]),
            username=str(payload["username"]),
            expires_at=int(payload["exp"]),
        )
    except (ValueError, KeyError, TypeError):
        raise SessionTokenError("AUTH-001", "Invalid token.")

    current = now if now is not None else time.time()
    if current >= principal.expires_at:
        raise SessionTokenError("AUTH-003", "Token expired. Please log in again.")

    return principal


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header value.

    Raises:
        SessionTokenError: AUTH-001 if missing or not a Bearer header
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise SessionTokenError("AUTH-001", "No token provided or malformed token.")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise SessionTokenError("AUTH-001", "No token provided or malformed token.")
    return token


def verify_credentials(
    username: Optional[str],
    password: Optional[str],
    expected_username: str,
    expected_password: str
) -> None:
    """
    Check login credentials with timing-safe comparisons.

    Raises:
        SessionTokenError: AUTH-004 on mismatch
    """
    user_ok = hmac.compare_digest(
        (username or "").encode("utf-8"), expected_username.encode("utf-8")
    )
    pass_ok = hmac.compare_digest(
        (password or "").encode("utf-8"), expected_password.encode("utf-8")
    )
    if not (user_ok and pass_ok):
        raise SessionTokenError("AUTH-004", "Invalid username or password.")
