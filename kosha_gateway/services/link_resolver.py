"""Link Resolver - 검색 결과의 정식 문서 링크 결정

우선순위:
    1. 법령 카테고리(조회 테이블) 또는 행정규칙 카테고리(제목에서 법령명 유추)
       → 국가법령정보센터 링크 (업스트림 filepath보다 우선)
    2. 업스트림 filepath가 http/https 절대 URL이면 그대로 사용
    3. 그 외에는 None (항목은 정규화 단계에서 제외)

NOTE: 과거에 있던 '문서 ID로 뷰어 URL 생성' 폴백은 상세 페이지가 없는
카테고리에서 깨진 링크를 만들었기 때문에 제거했습니다.
"""

from typing import Mapping, Optional

from kosha_gateway.core.config import settings
from kosha_gateway.schemas.law_schema import RawResultItem
from kosha_gateway.utils.resource_loader import (
    load_administrative_rule_categories,
    load_statute_names,
)
from kosha_gateway.utils.text_utils import split_title
from kosha_gateway.utils.url_utils import build_registry_url, is_valid_http_url

STATUTE_KIND = "법령"
ADMINISTRATIVE_RULE_KIND = "행정규칙"


class LinkResolver:
    """검색 결과 → 역참조 가능한 문서 URL"""

    def __init__(
        self,
        statute_names: Optional[Mapping[str, str]] = None,
        administrative_rule_categories: Optional[set[str]] = None,
        registry_base: Optional[str] = None,
    ):
        self.statute_names = dict(statute_names if statute_names is not None else load_statute_names())
        self.administrative_rule_categories = (
            set(administrative_rule_categories)
            if administrative_rule_categories is not None
            else load_administrative_rule_categories()
        )
        self.registry_base = (registry_base or settings.law_registry_base).rstrip("/")

    def resolve(self, item: RawResultItem) -> Optional[str]:
        """
        정식 링크 결정

        Args:
            item: 업스트림 원본 항목

        Returns:
            절대 URL 또는 None
        """
        law_url = self.build_law_url(item)
        if law_url:
            return law_url

        if is_valid_http_url(item.source_path):
            return item.source_path

        return None

    def build_law_url(self, item: RawResultItem) -> Optional[str]:
        """법령/행정규칙 링크 생성 (해당 카테고리가 아니면 None)"""
        article, inferred_name = split_title(item.title)

        if item.category in self.statute_names:
            law_name = self.statute_names[item.category]
            kind = STATUTE_KIND
        elif item.category in self.administrative_rule_categories:
            law_name = inferred_name
            kind = ADMINISTRATIVE_RULE_KIND
        else:
            return None

        if not law_name:
            return None

        return build_registry_url(self.registry_base, kind, law_name, article)
