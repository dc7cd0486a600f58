"""
============================================================================
Matrix Orchestration - Configuration
============================================================================

Reliability Level: STANDARD
Input Constraints: Environment variables (optionally via .env)
Side Effects: Logs configuration on load

This module provides configuration management for the service:
- Environment variable parsing with type safety
- Default values for optional configuration
- Validation of required configuration at startup
- Fail-closed behavior on missing required config (CFG-001)

Validation raises MatrixConfigurationError; it never terminates the
process. The composition root (app/main.py) decides what to do with it.

ENVIRONMENT VARIABLES:
    - GO_API_BASE_URL: Processing backend base URL
    - GO_API_APP_ACCESS_TOKEN: Bearer token for the backend (REQUIRED)
    - GO_API_TIMEOUT_SECONDS: Backend request timeout (default: 10)
    - NODE_API_PORT: HTTP listen port (default: 3000)
    - JWT_SECRET: Session token signing secret
    - JWT_EXPIRES_IN: Session token lifetime, e.g. "1h", "30m", "3600"
    - AUTH_USERNAME / AUTH_PASSWORD: Login credentials

ERROR CODES:
    - CFG-001: Required configuration missing or invalid

============================================================================
"""

from dataclasses import dataclass
from typing import Optional, List
import logging
import os

from dotenv import load_dotenv

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Error Codes
# =============================================================================

class MatrixConfigErrorCode:
    """Configuration error codes for audit logging."""
    CONFIG_INVALID = "CFG-001"


# =============================================================================
# Default Values
# =============================================================================

DEFAULT_API_PORT = 3000
DEFAULT_BACKEND_BASE_URL = "http://localhost:8080/api"
DEFAULT_BACKEND_TIMEOUT_SECONDS = 10.0
DEFAULT_SESSION_SECRET = "supersecretjwtkeyforexample"
DEFAULT_SESSION_EXPIRES_IN_SECONDS = 3600
DEFAULT_AUTH_USERNAME = "testuser"
DEFAULT_AUTH_PASSWORD = "testpass"

_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class MatrixConfigurationError(Exception):
    """
    Raised when configuration is invalid or missing.

    Reliability Level: STANDARD
    """

    def __init__(self, message: str, error_code: str = MatrixConfigErrorCode.CONFIG_INVALID):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")


def parse_duration_seconds(value: str) -> int:
    """
    Parse a lifetime such as "3600", "45s", "30m", "1h" or "7d" into seconds.

    Raises:
        ValueError: If the value cannot be parsed
    """
    text = value.strip().lower()
    if not text:
        raise ValueError("empty duration")

    unit = text[-1]
    if unit in _DURATION_UNITS:
        return int(text[:-1]) * _DURATION_UNITS[unit]
    return int(text)


# =============================================================================
# MatrixServiceConfig Class
# =============================================================================

@dataclass
class MatrixServiceConfig:
    """
    Static, already-resolved service configuration.

    Reliability Level: STANDARD
    Input Constraints: backend_access_token must be non-empty
    Side Effects: None
    """

    backend_base_url: str = DEFAULT_BACKEND_BASE_URL
    backend_access_token: str = ""
    backend_timeout_seconds: float = DEFAULT_BACKEND_TIMEOUT_SECONDS
    api_port: int = DEFAULT_API_PORT
    session_secret: str = DEFAULT_SESSION_SECRET
    session_expires_in_seconds: int = DEFAULT_SESSION_EXPIRES_IN_SECONDS
    auth_username: str = DEFAULT_AUTH_USERNAME
    auth_password: str = DEFAULT_AUTH_PASSWORD

    def validate(self) -> None:
        """
        Validate configuration completeness.

        Raises:
            MatrixConfigurationError: Listing every problem found (CFG-001)
        """
        errors: List[str] = []

        if not self.backend_access_token:
            errors.append("GO_API_APP_ACCESS_TOKEN must be set")

        if not self.backend_base_url.startswith(("http://", "https://")):
            errors.append(
                f"GO_API_BASE_URL must be an http(s) URL, got: {self.backend_base_url!r}"
            )

        if self.backend_timeout_seconds <= 0:
            errors.append(
                f"GO_API_TIMEOUT_SECONDS must be positive, got: {self.backend_timeout_seconds}"
            )

        if not self.session_secret:
            errors.append("JWT_SECRET must not be empty")

        if self.session_expires_in_seconds <= 0:
            errors.append(
                f"JWT_EXPIRES_IN must be positive, got: {self.session_expires_in_seconds}"
            )

        if not (0 < self.api_port < 65536):
            errors.append(f"NODE_API_PORT out of range: {self.api_port}")

        if errors:
            error_msg = "Configuration validation failed: " + "; ".join(errors)
            logger.error(f"[{MatrixConfigErrorCode.CONFIG_INVALID}] {error_msg}")
            raise MatrixConfigurationError(error_msg)

        logger.info(
            f"[MATRIX-CONFIG] Configuration validated | "
            f"backend_base_url={self.backend_base_url} | "
            f"backend_timeout_seconds={self.backend_timeout_seconds} | "
            f"api_port={self.api_port}"
        )

    @classmethod
    def from_environment(cls, validate: bool = True) -> "MatrixServiceConfig":
        """
        Load configuration from environment variables (and .env).

        Unparseable numeric values fall back to their defaults with a
        warning. Missing required values are reported by validate().

        Raises:
            MatrixConfigurationError: If validate is True and config is invalid
        """
        load_dotenv()

        port_str = os.environ.get("NODE_API_PORT", str(DEFAULT_API_PORT))
        try:
            api_port = int(port_str.strip())
        except ValueError:
            logger.warning(
                f"[MATRIX-CONFIG] Invalid NODE_API_PORT value: {port_str}, "
                f"using default: {DEFAULT_API_PORT}"
            )
            api_port = DEFAULT_API_PORT

        timeout_str = os.environ.get(
            "GO_API_TIMEOUT_SECONDS", str(DEFAULT_BACKEND_TIMEOUT_SECONDS)
        )
        try:
            timeout_seconds = float(timeout_str.strip())
        except ValueError:
            logger.warning(
                f"[MATRIX-CONFIG] Invalid GO_API_TIMEOUT_SECONDS value: {timeout_str}, "
                f"using default: {DEFAULT_BACKEND_TIMEOUT_SECONDS}"
            )
            timeout_seconds = DEFAULT_BACKEND_TIMEOUT_SECONDS

        expires_str = os.environ.get("JWT_EXPIRES_IN", "1h")
        try:
            expires_in = parse_duration_seconds(expires_str)
        except ValueError:
            logger.warning(
                f"[MATRIX-CONFIG] Invalid JWT_EXPIRES_IN value: {expires_str}, "
                f"using default: {DEFAULT_SESSION_EXPIRES_IN_SECONDS}s"
            )
            expires_in = DEFAULT_SESSION_EXPIRES_IN_SECONDS

        config = cls(
            backend_base_url=os.environ.get(
                "GO_API_BASE_URL", DEFAULT_BACKEND_BASE_URL
            ).strip().rstrip("/"),
            backend_access_token=os.environ.get("GO_API_APP_ACCESS_TOKEN", "").strip(),
            backend_timeout_seconds=timeout_seconds,
            api_port=api_port,
            session_secret=os.environ.get("JWT_SECRET", DEFAULT_SESSION_SECRET),
            session_expires_in_seconds=expires_in,
            auth_username=os.environ.get("AUTH_USERNAME", DEFAULT_AUTH_USERNAME),
            auth_password=os.environ.get("AUTH_PASSWORD", DEFAULT_AUTH_PASSWORD),
        )

        logger.info(
            f"[MATRIX-CONFIG] Loading configuration from environment | "
            f"GO_API_BASE_URL={config.backend_base_url} | "
            f"GO_API_APP_ACCESS_TOKEN={'set' if config.backend_access_token else 'MISSING'} | "
            f"GO_API_TIMEOUT_SECONDS={config.backend_timeout_seconds}"
        )

        if validate:
            config.validate()

        return config

    def to_dict(self) -> dict:
        """Configuration for logging, with secrets masked."""
        return {
            "backend_base_url": self.backend_base_url,
            "backend_access_token": "***" if self.backend_access_token else "",
            "backend_timeout_seconds": self.backend_timeout_seconds,
            "api_port": self.api_port,
            "session_expires_in_seconds": self.session_expires_in_seconds,
        }


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

_config_instance: Optional[MatrixServiceConfig] = None


def get_matrix_config(validate: bool = True) -> MatrixServiceConfig:
    """
    Get the global configuration instance, loading it on first access.

    Raises:
        MatrixConfigurationError: If required configuration is missing
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = MatrixServiceConfig.from_environment(validate=validate)

    return _config_instance


def reset_matrix_config() -> None:
    """Reset the global configuration instance (for tests)."""
    global _config_instance
    _config_instance = None
    logger.debug("[MATRIX-CONFIG] Configuration instance reset")


__all__ = [
    "MatrixServiceConfig",
    "MatrixConfigurationError",
    "MatrixConfigErrorCode",
    "DEFAULT_API_PORT",
    "DEFAULT_BACKEND_BASE_URL",
    "DEFAULT_BACKEND_TIMEOUT_SECONDS",
    "DEFAULT_SESSION_EXPIRES_IN_SECONDS",
    "parse_duration_seconds",
    "get_matrix_config",
    "reset_matrix_config",
]
