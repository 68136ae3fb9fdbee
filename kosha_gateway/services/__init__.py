"""비즈니스 로직 서비스 - export only."""

from .link_resolver import LinkResolver
from .result_normalizer import ResultNormalizer
from .law_search_service import LawSearchService
from .report_service import build_action_plan, summarize_snippets

__all__ = [
    "LinkResolver",
    "ResultNormalizer",
    "LawSearchService",
    "build_action_plan",
    "summarize_snippets",
]
