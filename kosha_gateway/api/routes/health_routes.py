"""헬스 체크 엔드포인트"""
from datetime import datetime

from fastapi import APIRouter, Depends

from kosha_gateway import __version__
from kosha_gateway.api.dependencies import get_circuit_breaker, get_query_cache
from kosha_gateway.engine.circuit_breaker import CircuitBreaker, CircuitState
from kosha_gateway.engine.query_cache import QueryCache
from kosha_gateway.schemas.law_schema import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: QueryCache = Depends(get_query_cache),
):
    """
    헬스 체크 엔드포인트

    - 회로차단기 상태 (closed가 아니면 degraded)
    - 캐시 엔트리 수
    """
    circuit = breaker.snapshot()
    status = "ok" if circuit["state"] == CircuitState.CLOSED.value else "degraded"

    return HealthResponse(
        status=status,
        timestamp=datetime.now(),
        version=__version__,
        circuit=circuit,
        cache_entries=cache.size(),
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "KOSHA 안전보건 법령 검색 게이트웨이",
        "version": __version__,
        "docs": "/docs"
    }
