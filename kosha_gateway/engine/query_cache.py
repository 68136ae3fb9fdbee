"""Query Cache - 검색 조건별 TTL 인메모리 캐시

- 키: (searchValue, category, pageNo, numOfRows)의 순수 함수
- 만료: 생성 시점부터 고정 TTL, 조회 시 지연 삭제
- 결과가 0건이면 저장하지 않음 (일시적 업스트림 공백을 캐시하지 않기 위함)
- 최대 엔트리 수 초과 시 가장 오래 저장된 항목부터 제거
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from kosha_gateway.core.logging import logger
from kosha_gateway.schemas.law_schema import SearchResponse
from kosha_gateway.utils.hash_utils import generate_search_cache_key


@dataclass(frozen=True)
class CacheEntry:
    value: SearchResponse
    expires_at: float


class QueryCache:
    """스마트검색 결과 캐시"""

    def __init__(
        self,
        ttl_seconds: float = 600,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    @staticmethod
    def build_key(search_value: str, category: int, page_no: int, num_of_rows: int) -> str:
        """검색 조건으로 캐시 키 생성"""
        return generate_search_cache_key(search_value, category, page_no, num_of_rows)

    def get(self, key: str) -> Optional[SearchResponse]:
        """
        캐시된 검색 결과 조회

        Args:
            key: build_key()로 만든 키

        Returns:
            SearchResponse 또는 None (미스/만료)
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"[CACHE] miss: {key}")
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug(f"[CACHE] expired: {key}")
                return None
            logger.info(f"[CACHE] hit: {key}")
            return entry.value

    def put(self, key: str, value: SearchResponse) -> bool:
        """
        검색 결과 저장

        Returns:
            저장 여부 (결과 0건이면 False)
        """
        if not value.items:
            logger.info(f"[CACHE] skip empty result: {key}")
            with self._lock:
                self._entries.pop(key, None)
            return False

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"[CACHE] evicted: {evicted}")
        logger.info(f"[CACHE] set: {key}, TTL: {self.ttl_seconds}s")
        return True

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
