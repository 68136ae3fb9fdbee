"""Resilience Policy - 회로차단 + 재시도로 업스트림 호출 보호

Flow:
    1. 회로 개방 중이면 전송 시도 없이 즉시 CircuitOpenException
    2. RetryPolicy로 operation 실행 (전송 실패만 재시도)
    3. 결과를 회로차단기에 기록
        - 성공: 카운터 초기화
        - 서버 계열 오류(전송 실패, 비정상 응답, 업스트림 5xx 코드): 실패 집계
        - 클라이언트 계열 오류(잘못된 인자, 인증/쿼터): 집계하지 않음
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, TypeVar

from kosha_gateway.core.exceptions import CircuitOpenException, GatewayException
from kosha_gateway.core.logging import logger

from .circuit_breaker import CircuitBreaker
from .retry import RetryPolicy

T = TypeVar("T")


class ResiliencePolicy:
    """업스트림 호출 보호 정책 (프로세스 전역 회로차단기 공유)"""

    def __init__(
        self,
        breaker: CircuitBreaker,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        if breaker is None:
            raise ValueError("breaker must not be None")
        self.breaker = breaker
        self.retry_policy = retry_policy or RetryPolicy()

    async def call(self, operation: Callable[[], Awaitable[T]]) -> T:
        """보호된 업스트림 호출

        Args:
            operation: 업스트림 1회 왕복 (전송 + 응답 분류)

        Returns:
            operation 결과

        Raises:
            CircuitOpenException: 회로 개방 중
            GatewayException: 분류된 업스트림 오류
        """
        if not self.breaker.allow_request():
            remaining = self.breaker.get_remaining_open_time()
            logger.warning(f"[RESILIENCE] Circuit open, failing fast (remaining={remaining:.1f}s)")
            raise CircuitOpenException(remaining)

        try:
            result = await self.retry_policy.call(operation)
        except GatewayException as e:
            if e.kind.counts_toward_breaker:
                self.breaker.record_failure()
            else:
                logger.info(f"[RESILIENCE] Client-class error not counted: {e.error_code}")
            raise

        self.breaker.record_success()
        return result
