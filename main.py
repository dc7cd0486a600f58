#!/usr/bin/env python3
"""
============================================================================
Matrix Orchestration - Server Launcher
============================================================================

Reliability Level: STANDARD
Side Effects: Binds the configured HTTP port

Loads configuration (fails fast on CFG-001), configures logging and serves
app.main:app with uvicorn.

USAGE:
    python main.py

============================================================================
"""

import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("matrix_orchestrator")


def main() -> int:
    from services.matrix_config import MatrixConfigurationError, get_matrix_config

    try:
        config = get_matrix_config()
    except MatrixConfigurationError as e:
        logger.critical(f"[STARTUP-ABORT] {e}")
        return 1

    logger.info(f"[STARTUP] Listening on port {config.api_port}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=config.api_port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
