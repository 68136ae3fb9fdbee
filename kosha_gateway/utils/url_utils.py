"""URL 유틸리티"""
from typing import Optional
from urllib.parse import quote, urlparse

from pydantic import HttpUrl, TypeAdapter, ValidationError

_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)


def is_valid_http_url(url: Optional[str]) -> bool:
    """
    호스트가 있는 http/https 절대 URL인지 확인

    공백 포함, 빈 호스트, 범위를 벗어난 포트는 거부합니다.

    Examples:
        >>> is_valid_http_url("https://www.kosha.or.kr/a.pdf")
        True
        >>> is_valid_http_url("/upload/a.pdf")
        False
        >>> is_valid_http_url("https://a.com:99999/x")
        False
    """
    if not url or not isinstance(url, str):
        return False
    if any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
        parsed.port  # 범위를 벗어난 포트는 ValueError
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    try:
        _HTTP_URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def build_registry_url(base_url: str, kind: str, law_name: str, article: Optional[str] = None) -> str:
    """
    국가법령정보센터 링크 생성

    {base}/{kind}/{법령명}[/제N조] 형태이며 모든 경로 구간은 퍼센트 인코딩됩니다.
    """
    segments = [quote(kind, safe=""), quote(law_name, safe="")]
    if article:
        segments.append(quote(f"제{article}조", safe=""))
    return f"{base_url.rstrip('/')}/" + "/".join(segments)
