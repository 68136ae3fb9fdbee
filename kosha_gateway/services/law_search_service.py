"""법령 검색 파이프라인 - Cache → Resilience(Upstream) → Normalize → Cache"""

from datetime import datetime, timezone
from typing import Optional

from kosha_gateway.clients.kosha_client import KoshaSearchClient
from kosha_gateway.core.logging import logger, sanitize_for_log
from kosha_gateway.engine.query_cache import QueryCache
from kosha_gateway.engine.resilience import ResiliencePolicy
from kosha_gateway.schemas.law_schema import SearchQuery, SearchResponse

from .result_normalizer import ResultNormalizer


class LawSearchService:
    """search_safety_law 처리

    캐시 미스일 때만 업스트림을 호출하고, 정규화 결과가 0건이면 캐시하지 않습니다.
    """

    def __init__(
        self,
        client: KoshaSearchClient,
        cache: QueryCache,
        resilience: ResiliencePolicy,
        normalizer: Optional[ResultNormalizer] = None,
    ):
        self.client = client
        self.cache = cache
        self.resilience = resilience
        self.normalizer = normalizer or ResultNormalizer()

    async def search(self, query: SearchQuery) -> SearchResponse:
        """
        스마트검색 실행

        Args:
            query: 보정된 검색 조건

        Returns:
            SearchResponse

        Raises:
            GatewayException: 분류된 업스트림/내부 오류
        """
        key = self.cache.build_key(query.search_value, query.category, query.page_no, query.num_of_rows)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        logger.info(
            f"[SEARCH] upstream call: query='{sanitize_for_log(query.search_value, 50)}', "
            f"category={query.category}, page={query.page_no}, rows={query.num_of_rows}"
        )
        page = await self.resilience.call(lambda: self.client.search(query))

        items = self.normalizer.normalize(page.primary, page.secondary)
        response = SearchResponse(
            total_count=page.total_count,
            page_no=page.page_no,
            num_of_rows=page.num_of_rows,
            items=items,
            retrieved_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            f"[SEARCH] normalized {len(items)} of {len(page.primary) + len(page.secondary)} item(s)"
        )

        self.cache.put(key, response)
        return response
