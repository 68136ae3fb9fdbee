"""Dispatch Result - 함수 호출 결과 표준 포맷"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .error_classifier import ClassifiedError


class FunctionName(str, Enum):
    """호출 가능한 함수"""

    SEARCH_SAFETY_LAW = "search_safety_law"
    SUMMARIZE_LAW_SNIPPETS = "summarize_law_snippets"
    GENERATE_ACTION_PLAN = "generate_action_plan"


@dataclass
class DispatchResult:
    """함수 호출 결과

    Attributes:
        status_code: HTTP 상태 코드
        body: 응답 본문 (성공 시 결과, 실패 시 {"error", "error_code"})
        error_code: 실패 시 ErrorKind 값
    """

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def ok(cls, body: dict[str, Any]) -> "DispatchResult":
        return cls(status_code=200, body=body)

    @classmethod
    def from_error(cls, error: ClassifiedError) -> "DispatchResult":
        return cls(
            status_code=error.status_code,
            body={"error": error.message, "error_code": error.kind.value},
            error_code=error.kind.value,
        )
