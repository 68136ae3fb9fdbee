"""KOSHA 스마트검색 Open API 클라이언트

업스트림 1회 왕복(전송 + 응답 봉투 해석 + 오류 분류)을 담당합니다.
재시도/회로차단은 ResiliencePolicy가 이 클라이언트를 감싸서 처리합니다.

응답 형태:
    {"response": {"header": {"resultCode": "00", "resultMsg": "..."},
                  "body": {"totalCount": 1, "pageNo": 1, "numOfRows": 10,
                           "items": {"item": [...]}, "total_media": [...]}}}

data.go.kr 게이트웨이 오류(키 미등록 등)는 XML(OpenAPI_ServiceResponse)로 내려옵니다.
"""

from __future__ import annotations

import json
import re
from typing import Any, NoReturn, Optional
from urllib.parse import unquote

from pydantic import ValidationError

from kosha_gateway.core.config import settings
from kosha_gateway.core.exceptions import (
    BadRequestException,
    ForbiddenException,
    GatewayException,
    InternalException,
    MalformedUpstreamResponseException,
    RateLimitedException,
    UnauthorizedException,
    UpstreamTransportException,
    UpstreamUnavailableException,
)
from kosha_gateway.core.logging import logger
from kosha_gateway.engine.error_classifier import SUCCESS_CODE, to_exception
from kosha_gateway.schemas.law_schema import RawResultItem, SearchQuery, UpstreamSearchPage

from .http_client import SharedHttpClient, get_shared_http_client

RETRYABLE_STATUSES = frozenset({502, 503, 504})

_XML_CODE_PATTERNS = (
    re.compile(r"<returnReasonCode>\s*(\d+)\s*</returnReasonCode>"),
    re.compile(r"<resultCode>\s*(\d+)\s*</resultCode>"),
)

_STATUS_EXCEPTIONS: dict[int, tuple[type[GatewayException], str]] = {
    400: (BadRequestException, "KOSHA API가 요청을 거부했습니다."),
    401: (UnauthorizedException, "등록되지 않은 서비스 키입니다."),
    403: (ForbiddenException, "KOSHA API 접근이 거부되었습니다."),
    429: (RateLimitedException, "일일 호출 한도를 초과했습니다."),
}


def extract_xml_result_code(text: str) -> Optional[str]:
    """XML 오류 응답에서 결과 코드 추출"""
    for pattern in _XML_CODE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_item_list(value: Any) -> list[Any]:
    """item이 배열/단일 객체/빈 문자열 중 무엇으로 와도 리스트로"""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []


class KoshaSearchClient:
    """스마트검색 호출 및 응답 해석"""

    def __init__(
        self,
        http_client: Optional[SharedHttpClient] = None,
        base_url: Optional[str] = None,
        search_path: Optional[str] = None,
        service_key: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self.http = http_client or get_shared_http_client()
        self.base_url = (base_url or settings.kosha_api_base).rstrip("/")
        self.search_path = search_path or settings.kosha_search_path
        raw_key = settings.kosha_service_key if service_key is None else service_key
        if raw_key and settings.kosha_service_key_encoded:
            raw_key = unquote(raw_key)
        self._service_key = raw_key
        self.timeout_s = timeout_s or settings.kosha_timeout_s

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{self.search_path.lstrip('/')}"

    def build_params(self, query: SearchQuery) -> dict[str, Any]:
        return {
            "serviceKey": self._service_key,
            "searchValue": query.search_value,
            "category": query.category,
            "pageNo": query.page_no,
            "numOfRows": query.num_of_rows,
            "dataType": "JSON",
        }

    async def search(self, query: SearchQuery) -> UpstreamSearchPage:
        """
        스마트검색 1회 호출

        Raises:
            InternalException: 서비스 키 미설정
            UpstreamTransportException: 연결 실패/타임아웃/502·503·504/빈 응답 (재시도 대상)
            MalformedUpstreamResponseException: JSON 아님/봉투 누락
            GatewayException: 결과 코드 분류 결과
        """
        if not self._service_key:
            raise InternalException("KOSHA 서비스 키가 설정되지 않았습니다.", "SERVICE_KEY_MISSING")

        response = await self.http.get(
            self.search_url,
            params=self.build_params(query),
            timeout_s=self.timeout_s,
        )
        logger.debug(f"[KOSHA] smartSearch status={response.status_code}")
        return self.parse_response(response.status_code, response.text)

    def parse_response(self, status_code: int, text: str) -> UpstreamSearchPage:
        """상태 코드 + 본문 → UpstreamSearchPage (실패 시 분류된 예외)"""
        if status_code in RETRYABLE_STATUSES:
            raise UpstreamTransportException(f"HTTP {status_code}", {"status_code": status_code})

        if not text or not text.strip():
            self._raise_for_status(status_code)
            raise UpstreamTransportException("empty body", {"status_code": status_code})

        try:
            payload = json.loads(text)
        except ValueError:
            self._raise_for_non_json(status_code, text)

        if not isinstance(payload, dict) or not isinstance(payload.get("response"), dict):
            self._raise_for_status(status_code)
            raise MalformedUpstreamResponseException("missing response envelope")

        envelope = payload["response"]
        header = envelope.get("header")
        result_code = header.get("resultCode") if isinstance(header, dict) else None
        if result_code is None:
            self._raise_for_status(status_code)
            raise MalformedUpstreamResponseException("missing result code")
        if str(result_code).strip() != SUCCESS_CODE:
            logger.warning(f"[KOSHA] resultCode={result_code}")
            raise to_exception(str(result_code).strip())

        body = envelope.get("body")
        if not isinstance(body, dict):
            self._raise_for_status(status_code)
            raise MalformedUpstreamResponseException("missing response body")

        self._raise_for_status(status_code)
        return self.parse_body(body)

    def parse_body(self, body: dict[str, Any]) -> UpstreamSearchPage:
        items = body.get("items")
        primary_raw = _as_item_list(items.get("item")) if isinstance(items, dict) else []
        secondary_raw = _as_item_list(body.get("total_media"))

        return UpstreamSearchPage(
            total_count=max(0, _to_int(body.get("totalCount"), 0)),
            page_no=max(0, _to_int(body.get("pageNo"), 1)),
            num_of_rows=max(0, _to_int(body.get("numOfRows"), 0)),
            primary=self._parse_items(primary_raw, "items.item"),
            secondary=self._parse_items(secondary_raw, "total_media"),
        )

    @staticmethod
    def _parse_items(raw_items: list[Any], source: str) -> list[RawResultItem]:
        parsed: list[RawResultItem] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                logger.warning(f"[KOSHA] skipped non-object item in {source}")
                continue
            try:
                parsed.append(RawResultItem.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"[KOSHA] skipped invalid item in {source}: {e.error_count()} error(s)")
        return parsed

    def _raise_for_non_json(self, status_code: int, text: str) -> NoReturn:
        code = extract_xml_result_code(text)
        if code is not None and code != SUCCESS_CODE:
            logger.warning(f"[KOSHA] XML error response, code={code}")
            raise to_exception(code)
        self._raise_for_status(status_code)
        raise MalformedUpstreamResponseException("non-JSON payload", {"status_code": status_code})

    @staticmethod
    def _raise_for_status(status_code: int) -> None:
        """봉투로 해석할 수 없는 4xx/5xx 응답 처리 (재시도 대상 아님)"""
        if status_code < 400:
            return
        mapped = _STATUS_EXCEPTIONS.get(status_code)
        if mapped is not None:
            exc_type, message = mapped
            raise exc_type(message, f"UPSTREAM_HTTP_{status_code}", {"status_code": status_code})
        raise UpstreamUnavailableException(
            f"KOSHA API HTTP {status_code}", f"UPSTREAM_HTTP_{status_code}", {"status_code": status_code}
        )
