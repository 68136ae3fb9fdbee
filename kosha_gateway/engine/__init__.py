"""Engine Layer - resilience and dispatch core

- CircuitBreaker / RetryPolicy / ResiliencePolicy: 업스트림 호출 보호
- QueryCache: 검색 조건별 TTL 캐시
- Error Classifier: 업스트림 결과 코드 분류
- DispatchResult: 함수 호출 결과 (디스패처는 services에 의존하므로 engine.dispatcher에서 직접 import)
"""

from .circuit_breaker import CircuitBreaker, CircuitState
from .retry import RetryPolicy
from .resilience import ResiliencePolicy
from .error_classifier import ClassifiedError, classify, classify_exception
from .query_cache import QueryCache
from .result import DispatchResult, FunctionName

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "RetryPolicy",
    "ResiliencePolicy",
    "ClassifiedError",
    "classify",
    "classify_exception",
    "QueryCache",
    "DispatchResult",
    "FunctionName",
]
