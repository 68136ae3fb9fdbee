"""Pydantic 스키마 정의 (업스트림 원본 / 정규화 결과 / 함수 호출)"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawResultItem(BaseModel):
    """KOSHA 스마트검색 원본 항목 (업스트림 필드명 그대로 수신)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    document_id: str = Field(..., alias="doc_id", description="문서 식별자")
    title: str = Field("", description="제목")
    category: str = Field("", description="카테고리 코드")
    body_text: str = Field("", alias="content", description="본문")
    highlight_text: Optional[str] = Field(None, alias="highlight_content", description="하이라이트 본문")
    source_path: Optional[str] = Field(None, alias="filepath", description="업스트림 제공 URL")
    relevance_score: Optional[float] = Field(None, alias="score", description="검색 점수")

    @field_validator("document_id", mode="before")
    @classmethod
    def validate_document_id(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list)):
            raise ValueError("doc_id is required")
        text = str(v).strip()
        if not text:
            raise ValueError("doc_id must not be empty")
        return text

    @field_validator("title", "category", "body_text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """숫자 카테고리(1) 등은 문자열로, None은 빈 문자열로"""
        if v is None:
            return ""
        return str(v).strip() if not isinstance(v, str) else v

    @field_validator("category")
    @classmethod
    def strip_category(cls, v: str) -> str:
        return v.strip()

    @field_validator("relevance_score", mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> Optional[float]:
        if v is None or v == "" or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


class SearchQuery(BaseModel):
    """보정이 끝난 스마트검색 조건 (캐시 키의 재료)"""

    model_config = ConfigDict(frozen=True)

    search_value: str = Field(..., min_length=1)
    category: int = Field(0, ge=0)
    page_no: int = Field(1, ge=1)
    num_of_rows: int = Field(10, ge=1)


class UpstreamSearchPage(BaseModel):
    """업스트림 응답 본문 (문서 목록 + 미디어 목록)"""

    total_count: int = Field(0, ge=0)
    page_no: int = Field(1, ge=0)
    num_of_rows: int = Field(0, ge=0)
    primary: List[RawResultItem] = Field(default_factory=list, description="items.item (법령/문서)")
    secondary: List[RawResultItem] = Field(default_factory=list, description="total_media (미디어)")


class NormalizedResultItem(BaseModel):
    """정규화된 검색 결과 (외부 응답용)"""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(..., alias="documentId")
    title: str
    category: str
    resolved_link: str = Field(..., alias="resolvedLink", description="항상 유효한 절대 URL")
    snippet: str = Field(..., min_length=1, description="표시용 본문")
    relevance_score: Optional[float] = Field(None, alias="relevanceScore")


class SearchResponse(BaseModel):
    """search_safety_law 응답 (캐시 값)"""

    model_config = ConfigDict(populate_by_name=True)

    total_count: int = Field(..., alias="totalCount")
    page_no: int = Field(..., alias="pageNo")
    num_of_rows: int = Field(..., alias="numOfRows")
    items: List[NormalizedResultItem] = Field(default_factory=list)
    retrieved_at: str = Field(..., alias="retrievedAt", description="업스트림 조회 시각 (ISO 8601)")


class SummaryResponse(BaseModel):
    """summarize_law_snippets 응답"""
    summary: str


class ActionPlanStep(BaseModel):
    """조치 계획 단계"""
    step: int = Field(..., ge=1)
    title: str
    action: str
    link: Optional[str] = None


class ActionPlanResponse(BaseModel):
    """generate_action_plan 응답"""
    steps: List[ActionPlanStep] = Field(default_factory=list)


class FunctionCallRequest(BaseModel):
    """함수 호출 요청 (function_name + arguments)"""
    function_name: Optional[str] = Field(None, max_length=100, description="호출할 함수명")
    arguments: Optional[dict[str, Any]] = Field(None, description="함수 인자")


class ErrorResponse(BaseModel):
    """오류 응답"""
    error: str
    error_code: str


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
    circuit: dict[str, Any]
    cache_entries: int
