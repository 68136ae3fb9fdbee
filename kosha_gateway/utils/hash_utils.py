"""해싱 유틸리티"""
import hashlib


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환

    Args:
        text: 해시할 문자열

    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def generate_search_cache_key(search_value: str, category: int, page_no: int, num_of_rows: int) -> str:
    """
    스마트검색 조건으로 캐시 키 생성

    검색어는 공백/대소문자 정규화 없이 그대로 사용합니다 (정확 일치).

    Args:
        search_value: 검색어
        category: 카테고리 코드
        page_no: 페이지 번호
        num_of_rows: 페이지당 건수

    Returns:
        캐시 키
    """
    raw = f"{search_value}|{category}|{page_no}|{num_of_rows}"
    return f"kosha:search:{hash_string(raw)}"
