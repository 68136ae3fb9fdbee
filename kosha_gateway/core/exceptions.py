"""커스텀 예외 정의 (Structured Exception Hierarchy)

모든 예외는 ErrorKind를 가지며, ErrorKind가 HTTP 상태 코드와
회로차단기 집계 여부를 결정합니다.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """게이트웨이 오류 분류"""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    MALFORMED_UPSTREAM_RESPONSE = "MALFORMED_UPSTREAM_RESPONSE"
    CIRCUIT_OPEN = "CIRCUIT_OPEN"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def counts_toward_breaker(self) -> bool:
        """업스트림 불안정으로 볼 수 있는 오류인가? (서버 계열만 집계)"""
        return self in (
            ErrorKind.UPSTREAM_UNAVAILABLE,
            ErrorKind.MALFORMED_UPSTREAM_RESPONSE,
        )


_KIND_STATUS = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.UPSTREAM_UNAVAILABLE: 502,
    ErrorKind.MALFORMED_UPSTREAM_RESPONSE: 502,
    ErrorKind.CIRCUIT_OPEN: 503,
    ErrorKind.INTERNAL: 500,
}


# 기본 예외 클래스
class GatewayException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""

    kind: ErrorKind = ErrorKind.INTERNAL
    retryable: bool = False

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.kind.value
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 호출자 입력 오류
class BadRequestException(GatewayException):
    """요청 인자 누락/오류 (재시도 안 함, 회로차단 집계 안 함)"""
    kind = ErrorKind.BAD_REQUEST


# 업스트림 자격 증명/쿼터 오류
class UnauthorizedException(GatewayException):
    """등록되지 않은 서비스 키"""
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenException(GatewayException):
    """활용 기간 만료/접근 거부"""
    kind = ErrorKind.FORBIDDEN


class RateLimitedException(GatewayException):
    """일일 호출 한도 초과"""
    kind = ErrorKind.RATE_LIMITED


# 업스트림 장애
class UpstreamUnavailableException(GatewayException):
    """업스트림 장애 (회로차단 집계 대상)"""
    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class UpstreamTransportException(UpstreamUnavailableException):
    """연결 실패/타임아웃/502·503·504 - 재시도 대상"""
    retryable = True

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Upstream transport failed: {reason}"
        super().__init__(message, "UPSTREAM_TRANSPORT_ERROR", details or {"reason": reason})


class MalformedUpstreamResponseException(UpstreamUnavailableException):
    """JSON이 아니거나 응답 봉투가 깨진 경우"""
    kind = ErrorKind.MALFORMED_UPSTREAM_RESPONSE

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Malformed upstream response: {reason}"
        super().__init__(message, None, details or {"reason": reason})


class CircuitOpenException(UpstreamUnavailableException):
    """회로 개방 중 - 업스트림 호출 없이 즉시 실패"""
    kind = ErrorKind.CIRCUIT_OPEN

    def __init__(self, remaining_s: float):
        super().__init__(
            "KOSHA API temporarily suspended (circuit open).",
            None,
            {"remaining_s": round(remaining_s, 1)},
        )


# 내부 오류
class InternalException(GatewayException):
    """정규화/링크 해석 등 내부 처리 오류"""
    kind = ErrorKind.INTERNAL
