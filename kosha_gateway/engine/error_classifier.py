"""Error Classifier - 업스트림 결과 코드 → 게이트웨이 오류 분류

data.go.kr 공통 결과 코드를 하나의 테이블로 관리합니다.
"""

from dataclasses import dataclass
from typing import Optional

from kosha_gateway.core.exceptions import (
    BadRequestException,
    ErrorKind,
    ForbiddenException,
    GatewayException,
    InternalException,
    MalformedUpstreamResponseException,
    RateLimitedException,
    UnauthorizedException,
    UpstreamUnavailableException,
)

SUCCESS_CODE = "00"

GENERIC_UPSTREAM_MESSAGE = "KOSHA API 서버에 일시적으로 연결할 수 없습니다. 잠시 후 다시 시도해주세요."
MALFORMED_MESSAGE = "KOSHA API에서 비정상 응답이 반환되었습니다."
CIRCUIT_OPEN_MESSAGE = "KOSHA API 호출이 일시적으로 중단되었습니다. 잠시 후 다시 시도해주세요."
INTERNAL_MESSAGE = "Internal Server Error"


@dataclass(frozen=True)
class ClassifiedError:
    """분류된 오류 (상태 코드 + 사용자 메시지)"""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


UPSTREAM_CODE_TABLE: dict[str, ClassifiedError] = {
    "01": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "KOSHA API 애플리케이션 오류가 발생했습니다."),
    "02": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "KOSHA API 데이터베이스 오류가 발생했습니다."),
    "04": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "KOSHA API HTTP 오류가 발생했습니다."),
    "05": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "KOSHA API 서비스 연결에 실패했습니다."),
    "10": ClassifiedError(ErrorKind.BAD_REQUEST, "잘못된 요청 파라미터입니다."),
    "11": ClassifiedError(ErrorKind.BAD_REQUEST, "필수 요청 파라미터가 없습니다."),
    "12": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "해당 Open API 서비스가 없거나 폐기되었습니다."),
    "20": ClassifiedError(ErrorKind.FORBIDDEN, "서비스 접근이 거부되었습니다."),
    "22": ClassifiedError(ErrorKind.RATE_LIMITED, "일일 호출 한도를 초과했습니다."),
    "30": ClassifiedError(ErrorKind.UNAUTHORIZED, "등록되지 않은 서비스 키입니다."),
    "31": ClassifiedError(ErrorKind.FORBIDDEN, "API 활용 기간이 만료되었습니다."),
    "32": ClassifiedError(ErrorKind.FORBIDDEN, "등록되지 않은 IP입니다."),
    "40": ClassifiedError(ErrorKind.BAD_REQUEST, "페이지 번호는 0보다 커야 합니다."),
    "99": ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, "KOSHA API에서 알 수 없는 오류가 발생했습니다."),
}

_EXCEPTION_BY_KIND: dict[ErrorKind, type[GatewayException]] = {
    ErrorKind.BAD_REQUEST: BadRequestException,
    ErrorKind.UNAUTHORIZED: UnauthorizedException,
    ErrorKind.FORBIDDEN: ForbiddenException,
    ErrorKind.RATE_LIMITED: RateLimitedException,
    ErrorKind.UPSTREAM_UNAVAILABLE: UpstreamUnavailableException,
}


def classify(upstream_code: Optional[str]) -> ClassifiedError:
    """업스트림 결과 코드 분류

    Args:
        upstream_code: header.resultCode 또는 returnReasonCode

    Returns:
        ClassifiedError: 알 수 없는 코드는 UPSTREAM_UNAVAILABLE
    """
    code = str(upstream_code).strip() if upstream_code is not None else ""
    known = UPSTREAM_CODE_TABLE.get(code)
    if known is not None:
        return known
    return ClassifiedError(ErrorKind.UPSTREAM_UNAVAILABLE, f"KOSHA API 오류 (code {code or 'unknown'})")


def to_exception(upstream_code: Optional[str]) -> GatewayException:
    """결과 코드를 해당 예외 인스턴스로 변환"""
    classified = classify(upstream_code)
    exc_type = _EXCEPTION_BY_KIND.get(classified.kind, UpstreamUnavailableException)
    return exc_type(
        classified.message,
        f"UPSTREAM_{classified.kind.value}",
        {"upstream_code": str(upstream_code)},
    )


def classify_exception(error: BaseException) -> ClassifiedError:
    """호출자에게 돌려줄 오류로 변환

    업스트림 페이로드/서비스 키가 포함될 수 있는 세부 정보는 노출하지 않습니다.
    """
    if isinstance(error, MalformedUpstreamResponseException):
        return ClassifiedError(error.kind, MALFORMED_MESSAGE)
    if isinstance(error, UpstreamUnavailableException) and error.kind == ErrorKind.CIRCUIT_OPEN:
        return ClassifiedError(error.kind, CIRCUIT_OPEN_MESSAGE)
    if isinstance(error, UpstreamUnavailableException) and error.retryable:
        return ClassifiedError(error.kind, GENERIC_UPSTREAM_MESSAGE)
    if isinstance(error, InternalException):
        return ClassifiedError(ErrorKind.INTERNAL, error.message)
    if isinstance(error, GatewayException):
        return ClassifiedError(error.kind, error.message)
    return ClassifiedError(ErrorKind.INTERNAL, INTERNAL_MESSAGE)
