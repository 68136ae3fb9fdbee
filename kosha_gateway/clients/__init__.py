"""업스트림 클라이언트 - export only."""

from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .kosha_client import KoshaSearchClient

__all__ = [
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
    "KoshaSearchClient",
]
