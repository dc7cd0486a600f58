# ============================================================================
# Matrix Orchestration
# Pydantic Schemas - HTTP Validation Layer
# ============================================================================

from app.schemas.matrix import LoginIn, TokenOut, MatrixProcessOut

__all__ = ["LoginIn", "TokenOut", "MatrixProcessOut"]
