"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, function_router
from .dependencies import get_circuit_breaker, get_dispatcher, get_query_cache

__all__ = ["health_router", "function_router", "get_circuit_breaker", "get_dispatcher", "get_query_cache"]
