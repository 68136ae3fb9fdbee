"""리소스 파일(YAML) 로더 유틸리티"""
import os
from functools import lru_cache
from typing import Any, Dict

import yaml

from kosha_gateway.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """패키지 resources/ 기준 리소스 절대 경로 반환"""
    # kosha_gateway/utils/resource_loader.py -> kosha_gateway/utils -> kosha_gateway
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """YAML 리소스 로드 및 캐싱"""
    path = get_resource_path(relative_path)
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}


def load_statute_names() -> Dict[str, str]:
    """카테고리 코드 → 법령명 매핑 로드"""
    data = load_yaml_resource("law/statutes.yaml")
    return {str(code): str(name) for code, name in (data.get("statutes") or {}).items()}


def load_administrative_rule_categories() -> set[str]:
    """제목에서 법령명을 유추하는 행정규칙 카테고리 코드"""
    data = load_yaml_resource("law/statutes.yaml")
    return {str(code) for code in data.get("administrative_rule_categories", [])}


def load_placeholder_markers() -> tuple[str, ...]:
    """'내용 없음' 자리표시자 목록 로드"""
    data = load_yaml_resource("law/placeholders.yaml")
    return tuple(str(m) for m in data.get("placeholders", []) if m)
