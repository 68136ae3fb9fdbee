"""Circuit Breaker for the KOSHA upstream."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from kosha_gateway.core.logging import logger


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreakerMetrics:
    """업스트림 호출 결과 집계."""

    successes: int = 0
    failures: int = 0
    rejections: int = 0
    opened: int = 0

    @property
    def success_rate(self) -> float:
        """업스트림 성공률 (0.0~1.0)."""
        total = self.successes + self.failures
        return self.successes / total if total > 0 else 0.0

    def __repr__(self) -> str:
        return (
            f"Metrics({self.successes}S/{self.failures}F={self.success_rate:.1%}, "
            f"rejected={self.rejections}, opened={self.opened})"
        )


class CircuitBreaker:
    """프로세스 전역 회로차단기.

    - 연속 실패가 임계값에 도달하면 회로 개방 (일정 시간 즉시 실패)
    - 개방 시간이 지나면 half-open: 호출을 통과시키고
      성공하면 닫고, 실패하면 즉시 다시 개방
    - 여러 요청이 동시에 접근하므로 Lock으로 보호
    """

    def __init__(
        self,
        fail_threshold: int = 5,
        open_duration_sec: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """초기화.

        Args:
            fail_threshold: 회로 개방 임계값 (연속 실패 횟수)
            open_duration_sec: 개방 상태 유지 시간 (초)
            clock: 단조 증가 시계 (테스트에서 교체)
        """
        if fail_threshold <= 0:
            raise ValueError("fail_threshold must be positive")
        if open_duration_sec <= 0:
            raise ValueError("open_duration_sec must be positive")

        self.fail_threshold = fail_threshold
        self.open_duration_sec = open_duration_sec
        self._clock = clock
        self._lock = threading.Lock()

        self._fail_count = 0
        self._open_until: float = 0.0
        self._half_open = False
        self.metrics = CircuitBreakerMetrics()

    @property
    def consecutive_failures(self) -> int:
        return self._fail_count

    @property
    def state(self) -> CircuitState:
        with self._lock:
            return self._state_locked()

    def _state_locked(self) -> CircuitState:
        if self._open_until > 0.0:
            if self._clock() < self._open_until:
                return CircuitState.OPEN
            # 개방 시간 경과 → half-open
            self._open_until = 0.0
            self._half_open = True
            logger.info("[CIRCUIT_BREAKER] HALF_OPEN (cooldown elapsed)")
        return CircuitState.HALF_OPEN if self._half_open else CircuitState.CLOSED

    def allow_request(self) -> bool:
        """호출 가능 여부. 개방 중이면 False (거절 횟수 집계)."""
        with self._lock:
            if self._state_locked() == CircuitState.OPEN:
                self.metrics.rejections += 1
                return False
            return True

    def is_open(self) -> bool:
        """회로가 개방되었는가?"""
        return self.state == CircuitState.OPEN

    def record_success(self) -> None:
        """성공 기록 → 회로 닫기."""
        with self._lock:
            if self._half_open:
                logger.info("[CIRCUIT_BREAKER] CLOSED (probe succeeded)")
            self._fail_count = 0
            self._open_until = 0.0
            self._half_open = False
            self.metrics.successes += 1

    def record_failure(self) -> None:
        """실패 기록 → 임계값 도달(또는 half-open 중 실패) 시 회로 개방."""
        with self._lock:
            self.metrics.failures += 1
            if self._half_open:
                self._open_locked(reason="probe failed")
                return

            self._fail_count += 1
            if self._fail_count >= self.fail_threshold:
                self._open_locked(reason=f"fail_count={self._fail_count} >= {self.fail_threshold}")

    def _open_locked(self, reason: str) -> None:
        self._open_until = self._clock() + self.open_duration_sec
        self._fail_count = 0
        self._half_open = False
        self.metrics.opened += 1
        logger.warning(
            f"[CIRCUIT_BREAKER] OPEN ({reason}). "
            f"KOSHA API blocked for {self.open_duration_sec}s"
        )

    def get_remaining_open_time(self) -> float:
        """회로 개방 남은 시간 (초)."""
        with self._lock:
            if self._open_until <= 0.0:
                return 0.0
            return max(0.0, self._open_until - self._clock())

    def snapshot(self) -> dict:
        """헬스 체크용 상태 요약."""
        state = self.state
        return {
            "state": state.value,
            "consecutive_failures": self._fail_count,
            "fail_threshold": self.fail_threshold,
            "remaining_open_s": round(self.get_remaining_open_time(), 1),
        }

    def __repr__(self) -> str:
        return (
            f"CircuitBreaker({self.state.value.upper()}, fail_count={self._fail_count}/{self.fail_threshold}, "
            f"open_time={self.get_remaining_open_time():.1f}s)"
        )
