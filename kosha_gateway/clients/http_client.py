"""공유 HTTP 클라이언트 (httpx)

- 요청마다 AsyncClient를 만들면 커넥션 오버헤드가 커지므로
  프로세스 단위로 클라이언트를 재사용합니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from kosha_gateway import __version__
from kosha_gateway.core.config import settings
from kosha_gateway.core.exceptions import UpstreamTransportException
from kosha_gateway.core.logging import logger


class SharedHttpClient:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._lock = asyncio.Lock()
        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._lock:
            if self._client is not None:
                return self._client
            self._client = httpx.AsyncClient(
                headers=self.default_headers(),
                timeout=httpx.Timeout(settings.kosha_timeout_s),
                follow_redirects=True,
                transport=self._transport,
            )
            return self._client

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": f"kosha-gateway/{__version__}",
            "Accept": "application/json, application/xml;q=0.9, */*;q=0.8",
            "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8",
        }

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: float,
    ) -> httpx.Response:
        """GET 요청. 연결 실패/타임아웃은 UpstreamTransportException으로 변환.

        예외 메시지에는 URL(서비스 키 포함)을 남기지 않습니다.
        """
        client = await self._ensure_client()
        try:
            return await client.get(url, params=params, timeout=timeout_s)
        except httpx.TimeoutException as e:
            logger.info(f"[HTTP_CLIENT] GET timeout: {type(e).__name__}")
            raise UpstreamTransportException("timeout", {"error": type(e).__name__}) from None
        except httpx.TransportError as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}")
            raise UpstreamTransportException("connection error", {"error": type(e).__name__}) from None

    async def close(self) -> None:
        async with self._lock:
            if self._client is None:
                return
            try:
                await self._client.aclose()
            except (httpx.HTTPError, RuntimeError) as e:
                logger.warning(f"[HTTP_CLIENT] close failed: {type(e).__name__}")
            self._client = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
