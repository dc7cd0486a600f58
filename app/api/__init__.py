# ============================================================================
# Matrix Orchestration
# API Routes Module
# ============================================================================

from app.api.auth import router as auth_router
from app.api.matrix import router as matrix_router

__all__ = ["auth_router", "matrix_router"]
