"""검색 결과 후처리 (스니펫 요약, 조치 계획)"""

from typing import Any, Sequence

from kosha_gateway.core.exceptions import BadRequestException
from kosha_gateway.schemas.law_schema import ActionPlanResponse, ActionPlanStep, SummaryResponse
from kosha_gateway.utils.url_utils import is_valid_http_url

MAX_SUMMARY_SNIPPETS = 10
MAX_ACTION_STEPS = 20
SUMMARY_SEPARATOR = " / "


def summarize_snippets(snippets: Any) -> SummaryResponse:
    """앞쪽 스니펫 최대 10개를 ' / '로 이어 붙인 요약"""
    if not isinstance(snippets, list) or not snippets:
        raise BadRequestException("snippets 배열 필요", "SNIPPETS_REQUIRED")

    texts = [s.strip() for s in snippets if isinstance(s, str) and s.strip()]
    if not texts:
        raise BadRequestException("snippets 배열에 유효한 문자열이 없습니다.", "SNIPPETS_REQUIRED")

    return SummaryResponse(summary=SUMMARY_SEPARATOR.join(texts[:MAX_SUMMARY_SNIPPETS]))


def _item_link(item: dict[str, Any]) -> str | None:
    for field in ("resolvedLink", "resolved_link", "link"):
        value = item.get(field)
        if is_valid_http_url(value):
            return value
    return None


def build_action_plan(law_items: Any) -> ActionPlanResponse:
    """
    검색 결과 항목 → 순서 있는 점검 목록

    제목이 없는 항목은 건너뛰고, 단계 번호는 1부터 연속으로 부여합니다.
    """
    if not isinstance(law_items, list) or not law_items:
        raise BadRequestException("lawItems 배열 필요", "LAW_ITEMS_REQUIRED")

    steps: list[ActionPlanStep] = []
    for item in _iter_dicts(law_items):
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            continue
        title = title.strip()
        steps.append(
            ActionPlanStep(
                step=len(steps) + 1,
                title=title,
                action=f"'{title}' 관련 사업장 준수 여부를 점검하고 필요한 안전조치를 시행하세요.",
                link=_item_link(item),
            )
        )
        if len(steps) >= MAX_ACTION_STEPS:
            break

    if not steps:
        raise BadRequestException("lawItems에 제목이 있는 항목이 없습니다.", "LAW_ITEMS_REQUIRED")
    return ActionPlanResponse(steps=steps)


def _iter_dicts(items: Sequence[Any]):
    return (item for item in items if isinstance(item, dict))
