"""Retry Policy - 지수 백오프 재시도

전송 계층 실패(retryable 예외)만 재시도합니다.
업스트림 업무 오류와 4xx는 즉시 전파됩니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, TypeVar

from kosha_gateway.core.logging import logger

T = TypeVar("T")


def is_retryable(error: BaseException) -> bool:
    """재시도 대상 여부 (UpstreamTransportException 등 retryable=True)"""
    return bool(getattr(error, "retryable", False))


@dataclass
class RetryPolicy:
    """재시도 정책

    Attributes:
        max_retries: 최초 시도 이후 추가 재시도 횟수
        base_delay_s: 첫 재시도 대기 시간 (초), 이후 2배씩 증가
        max_delay_s: 대기 시간 상한 (초)
    """

    max_retries: int = 3
    base_delay_s: float = 0.1
    max_delay_s: float = 5.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    def delay_for(self, retry_number: int) -> float:
        """retry_number번째 재시도 전 대기 시간 (1부터 시작)"""
        return min(self.max_delay_s, self.base_delay_s * (2 ** (retry_number - 1)))

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        should_retry: Callable[[BaseException], bool] = is_retryable,
    ) -> T:
        """operation 실행 (재시도 포함)

        Raises:
            마지막 시도의 예외
        """
        last_exception: Optional[BaseException] = None
        max_attempts = self.max_retries + 1

        for attempt in range(1, max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_exception = e
                if not should_retry(e):
                    raise

                if attempt < max_attempts:
                    wait_time = self.delay_for(attempt)
                    logger.warning(
                        f"[RETRY] Attempt {attempt}/{max_attempts} failed: {type(e).__name__}. "
                        f"Retrying in {wait_time:.2f}s..."
                    )
                    await self.sleep(wait_time)
                else:
                    logger.error(
                        f"[RETRY] All {max_attempts} attempts failed. Last error: {type(e).__name__}"
                    )

        if last_exception is not None:
            raise last_exception
        raise RuntimeError("Unexpected state: no exception recorded")
