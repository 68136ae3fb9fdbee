"""프로세스 전역 싱글톤 (회로차단기, 캐시, 디스패처)

회로차단기와 캐시는 모든 요청이 공유하며 프로세스 시작 시 한 번만 만들어집니다.
"""

from typing import Optional

from fastapi import Depends

from kosha_gateway.clients.kosha_client import KoshaSearchClient
from kosha_gateway.core.config import settings
from kosha_gateway.engine.circuit_breaker import CircuitBreaker
from kosha_gateway.engine.dispatcher import FunctionDispatcher
from kosha_gateway.engine.query_cache import QueryCache
from kosha_gateway.engine.resilience import ResiliencePolicy
from kosha_gateway.engine.retry import RetryPolicy
from kosha_gateway.services.law_search_service import LawSearchService

_circuit_breaker: Optional[CircuitBreaker] = None
_query_cache: Optional[QueryCache] = None
_dispatcher: Optional[FunctionDispatcher] = None


def get_circuit_breaker() -> CircuitBreaker:
    """CircuitBreaker 싱글톤"""
    global _circuit_breaker
    if _circuit_breaker is None:
        _circuit_breaker = CircuitBreaker(
            fail_threshold=settings.circuit_fail_threshold,
            open_duration_sec=settings.circuit_open_seconds,
        )
    return _circuit_breaker


def get_query_cache() -> QueryCache:
    """QueryCache 싱글톤"""
    global _query_cache
    if _query_cache is None:
        _query_cache = QueryCache(
            ttl_seconds=settings.cache_ttl,
            max_entries=settings.cache_max_entries,
        )
    return _query_cache


def get_dispatcher(
    breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: QueryCache = Depends(get_query_cache),
) -> FunctionDispatcher:
    """FunctionDispatcher 싱글톤"""
    global _dispatcher
    if _dispatcher is None:
        resilience = ResiliencePolicy(
            breaker=breaker,
            retry_policy=RetryPolicy(
                max_retries=settings.kosha_max_retries,
                base_delay_s=settings.kosha_retry_base_delay_s,
            ),
        )
        search_service = LawSearchService(
            client=KoshaSearchClient(),
            cache=cache,
            resilience=resilience,
        )
        _dispatcher = FunctionDispatcher(search_service)
    return _dispatcher


def reset_singletons() -> None:
    """테스트용: 전역 상태 초기화"""
    global _circuit_breaker, _query_cache, _dispatcher
    _circuit_breaker = None
    _query_cache = None
    _dispatcher = None
