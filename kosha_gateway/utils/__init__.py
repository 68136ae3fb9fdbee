"""Utilities package"""

from .hash_utils import hash_string, generate_search_cache_key
from .url_utils import is_valid_http_url, build_registry_url
from .text_utils import split_title, contains_placeholder, coerce_positive_int

__all__ = [
    "hash_string",
    "generate_search_cache_key",
    "is_valid_http_url",
    "build_registry_url",
    "split_title",
    "contains_placeholder",
    "coerce_positive_int",
]
