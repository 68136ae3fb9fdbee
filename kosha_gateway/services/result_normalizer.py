"""Result Normalizer - 문서/미디어 목록 병합, 중복 제거, 필터링"""

from typing import Iterable, Optional, Sequence

from kosha_gateway.core.logging import logger
from kosha_gateway.schemas.law_schema import NormalizedResultItem, RawResultItem
from kosha_gateway.utils.resource_loader import load_placeholder_markers
from kosha_gateway.utils.text_utils import contains_placeholder

from .link_resolver import LinkResolver


class ResultNormalizer:
    """업스트림 원본 → 외부 응답용 항목

    - primary(법령/문서) 다음 secondary(미디어) 순서로 병합
    - 같은 documentId는 처음 나온 항목만 유지 (primary 우선)
    - 링크가 없거나 본문이 비면 제외
    - 점수로 재정렬하지 않음
    """

    def __init__(
        self,
        link_resolver: Optional[LinkResolver] = None,
        placeholder_markers: Optional[Iterable[str]] = None,
    ):
        self.link_resolver = link_resolver or LinkResolver()
        markers = placeholder_markers if placeholder_markers is not None else load_placeholder_markers()
        self.placeholder_markers = tuple(m for m in markers if m)

    def normalize(
        self,
        primary: Sequence[RawResultItem],
        secondary: Sequence[RawResultItem],
    ) -> list[NormalizedResultItem]:
        seen: set[str] = set()
        normalized: list[NormalizedResultItem] = []
        dropped = 0

        for item in [*primary, *secondary]:
            if item.document_id in seen:
                continue
            seen.add(item.document_id)

            snippet = self.snippet_for(item)
            link = self.link_resolver.resolve(item)
            if not link or not snippet:
                dropped += 1
                continue

            normalized.append(
                NormalizedResultItem(
                    document_id=item.document_id,
                    title=item.title,
                    category=item.category,
                    resolved_link=link,
                    snippet=snippet,
                    relevance_score=item.relevance_score,
                )
            )

        if dropped:
            logger.debug(f"[NORMALIZE] dropped {dropped} item(s) without link or snippet")
        return normalized

    def snippet_for(self, item: RawResultItem) -> str:
        """하이라이트 우선, 자리표시자/공백이면 빈 문자열"""
        source = item.highlight_text if item.highlight_text and item.highlight_text.strip() else item.body_text
        source = source or ""
        if not source.strip() or contains_placeholder(source, self.placeholder_markers):
            return ""
        return source
