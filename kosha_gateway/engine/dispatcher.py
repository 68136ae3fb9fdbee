"""Function Dispatcher - function_name별 핸들러 라우팅

Flow:
    1. function_name 검증 (누락/미지원 → BAD_REQUEST)
    2. 기본값 보정 (pageNo=1, numOfRows=10, category=0)
    3. 핸들러 실행
    4. 예외는 분류해서 {error, error_code}로 반환 (업스트림 원문/서비스 키 노출 금지)
"""

from typing import Any, Awaitable, Callable, Mapping, Optional

from kosha_gateway.core.config import settings
from kosha_gateway.core.exceptions import BadRequestException, GatewayException
from kosha_gateway.core.logging import logger
from kosha_gateway.schemas.law_schema import SearchQuery
from kosha_gateway.services.law_search_service import LawSearchService
from kosha_gateway.services.report_service import build_action_plan, summarize_snippets
from kosha_gateway.utils.text_utils import coerce_positive_int

from .error_classifier import classify_exception
from .result import DispatchResult, FunctionName

DEFAULT_PAGE_NO = 1
DEFAULT_NUM_OF_ROWS = 10
DEFAULT_CATEGORY = 0
VALID_CATEGORIES = frozenset({0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 11})

Handler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


def coerce_search_arguments(args: Mapping[str, Any], max_num_of_rows: Optional[int] = None) -> dict[str, Any]:
    """
    검색 인자 기본값 보정

    유한한 양수로 해석되지 않는 값은 기본값으로 대체합니다.
    numOfRows는 상한(기본 100)으로 자르고, 목록에 없는 category는 0으로 둡니다.
    """
    limit = max_num_of_rows or settings.max_num_of_rows
    coerced = dict(args)
    coerced["pageNo"] = coerce_positive_int(args.get("pageNo"), DEFAULT_PAGE_NO)
    coerced["numOfRows"] = min(coerce_positive_int(args.get("numOfRows"), DEFAULT_NUM_OF_ROWS), limit)
    category = coerce_positive_int(args.get("category"), DEFAULT_CATEGORY)
    coerced["category"] = category if category in VALID_CATEGORIES else DEFAULT_CATEGORY
    return coerced


class FunctionDispatcher:
    """함수 호출 디스패처"""

    def __init__(self, search_service: LawSearchService):
        if search_service is None:
            raise ValueError("search_service must not be None")
        self.search_service = search_service
        self._handlers: dict[str, Handler] = {
            FunctionName.SEARCH_SAFETY_LAW.value: self._search_safety_law,
            FunctionName.SUMMARIZE_LAW_SNIPPETS.value: self._summarize_law_snippets,
            FunctionName.GENERATE_ACTION_PLAN.value: self._generate_action_plan,
        }

    @property
    def function_names(self) -> list[str]:
        return list(self._handlers)

    async def handle(self, function_name: Optional[str], args: Optional[Mapping[str, Any]] = None) -> DispatchResult:
        """
        함수 호출 처리

        Args:
            function_name: 호출할 함수명
            args: 함수 인자

        Returns:
            DispatchResult (실패도 예외 대신 결과로 반환)
        """
        try:
            if not function_name:
                raise BadRequestException("`function_name` is required.", "FUNCTION_NAME_REQUIRED")

            handler = self._handlers.get(function_name)
            if handler is None:
                raise BadRequestException(f"Unknown function: {function_name}", "UNKNOWN_FUNCTION")

            if args is not None and not isinstance(args, Mapping):
                raise BadRequestException("`arguments` must be an object.", "INVALID_ARGUMENTS")

            body = await handler(coerce_search_arguments(args or {}))
            return DispatchResult.ok(body)

        except GatewayException as e:
            classified = classify_exception(e)
            log = logger.warning if classified.kind.is_client_error else logger.error
            log(f"[DISPATCH] {function_name} failed: {e.error_code} (status={classified.status_code})")
            return DispatchResult.from_error(classified)
        except Exception as e:
            logger.error(f"[DISPATCH] {function_name} failed unexpectedly", exc_info=True)
            return DispatchResult.from_error(classify_exception(e))

    async def _search_safety_law(self, args: dict[str, Any]) -> dict[str, Any]:
        search_value = args.get("searchValue")
        if not isinstance(search_value, str) or not search_value.strip():
            raise BadRequestException("`searchValue` is required.", "SEARCH_VALUE_REQUIRED")

        query = SearchQuery(
            search_value=search_value,
            category=args["category"],
            page_no=args["pageNo"],
            num_of_rows=args["numOfRows"],
        )
        response = await self.search_service.search(query)
        return response.model_dump(by_alias=True)

    async def _summarize_law_snippets(self, args: dict[str, Any]) -> dict[str, Any]:
        return summarize_snippets(args.get("snippets")).model_dump()

    async def _generate_action_plan(self, args: dict[str, Any]) -> dict[str, Any]:
        return build_action_plan(args.get("lawItems")).model_dump()
