"""Pydantic 스키마"""

from .law_schema import (
    ActionPlanResponse,
    ActionPlanStep,
    ErrorResponse,
    FunctionCallRequest,
    HealthResponse,
    NormalizedResultItem,
    RawResultItem,
    SearchQuery,
    SearchResponse,
    SummaryResponse,
    UpstreamSearchPage,
)

__all__ = [
    "ActionPlanResponse",
    "ActionPlanStep",
    "ErrorResponse",
    "FunctionCallRequest",
    "HealthResponse",
    "NormalizedResultItem",
    "RawResultItem",
    "SearchQuery",
    "SearchResponse",
    "SummaryResponse",
    "UpstreamSearchPage",
]
