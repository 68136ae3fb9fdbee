"""API routes package."""

from .health_routes import router as health_router
from .function_routes import router as function_router

__all__ = ["health_router", "function_router"]
