"""텍스트 유틸리티 (법령 제목 분해, 자리표시자 판별, 숫자 인자 보정)"""
import math
import re
from typing import Any, Iterable, Optional

_ARTICLE_PATTERN = re.compile(r"제\s*(\d+)\s*조")
_ARTICLE_TAIL_PATTERN = re.compile(r"제\s*\d+\s*조.*$")


def split_title(title: str) -> tuple[Optional[str], str]:
    """
    법령 제목에서 조문 번호와 법령명 추출

    첫 번째 '제N조'만 사용합니다.

    Examples:
        >>> split_title("산업안전보건법 시행규칙 제5조(정의)")
        ('5', '산업안전보건법 시행규칙')
        >>> split_title("위험기계기구 안전인증 고시")
        (None, '위험기계기구 안전인증 고시')
    """
    if not title:
        return None, ""
    match = _ARTICLE_PATTERN.search(title)
    article = match.group(1) if match else None
    law_name = _ARTICLE_TAIL_PATTERN.sub("", title, count=1).strip()
    return article, law_name


def contains_placeholder(text: str, markers: Iterable[str]) -> bool:
    """본문이 '내용 없음' 자리표시자와 같거나 포함하는지 확인 (빈 마커는 무시)"""
    return any(marker and marker in text for marker in markers)


def coerce_positive_int(value: Any, default: int) -> int:
    """
    유한한 양수로 해석되면 그 값을, 아니면 기본값 반환

    Examples:
        >>> coerce_positive_int("3", 1)
        3
        >>> coerce_positive_int("abc", 1)
        1
        >>> coerce_positive_int(-5, 10)
        10
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number) or number <= 0:
        return default
    coerced = int(number)
    return coerced if coerced > 0 else default
