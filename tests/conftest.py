"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 가짜 시계/가짜 업스트림 주입
- 전역 싱글톤 초기화
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx
import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("ENVIRONMENT", "test")

from kosha_gateway.api.dependencies import reset_singletons  # noqa: E402
from kosha_gateway.clients.http_client import SharedHttpClient  # noqa: E402
from kosha_gateway.clients.kosha_client import KoshaSearchClient  # noqa: E402
from kosha_gateway.engine.circuit_breaker import CircuitBreaker  # noqa: E402
from kosha_gateway.engine.dispatcher import FunctionDispatcher  # noqa: E402
from kosha_gateway.engine.query_cache import QueryCache  # noqa: E402
from kosha_gateway.engine.resilience import ResiliencePolicy  # noqa: E402
from kosha_gateway.engine.retry import RetryPolicy  # noqa: E402
from kosha_gateway.services.law_search_service import LawSearchService  # noqa: E402
from kosha_gateway.services.link_resolver import LinkResolver  # noqa: E402
from kosha_gateway.services.result_normalizer import ResultNormalizer  # noqa: E402
from tests.fixtures.kosha_payloads import TEST_SERVICE_KEY  # noqa: E402


@dataclass
class FakeClock:
    """수동으로 진행시키는 단조 시계"""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def no_sleep(_: float) -> None:
    return None


@dataclass
class FakeUpstream:
    """httpx.MockTransport 핸들러 - 응답을 순서대로 돌려주고 요청을 기록"""

    responses: list[Callable[[httpx.Request], httpx.Response]] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def queue(self, *responses: Callable[[httpx.Request], httpx.Response]) -> "FakeUpstream":
        self.responses.extend(responses)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("unexpected upstream call")
        responder = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture(autouse=True)
def _reset_singletons():
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def link_resolver() -> LinkResolver:
    return LinkResolver(registry_base="https://www.law.go.kr")


@pytest.fixture
def normalizer(link_resolver) -> ResultNormalizer:
    return ResultNormalizer(link_resolver=link_resolver)


@pytest.fixture
def kosha_client(fake_upstream) -> KoshaSearchClient:
    http_client = SharedHttpClient(transport=httpx.MockTransport(fake_upstream))
    return KoshaSearchClient(
        http_client=http_client,
        base_url="http://kosha.test/B552468/srch",
        service_key=TEST_SERVICE_KEY,
        timeout_s=1.0,
    )


@pytest.fixture
def breaker(clock) -> CircuitBreaker:
    return CircuitBreaker(fail_threshold=5, open_duration_sec=60.0, clock=clock)


@pytest.fixture
def query_cache(clock) -> QueryCache:
    return QueryCache(ttl_seconds=600, max_entries=100, clock=clock)


@pytest.fixture
def resilience(breaker) -> ResiliencePolicy:
    return ResiliencePolicy(breaker=breaker, retry_policy=RetryPolicy(max_retries=3, base_delay_s=0.1, sleep=no_sleep))


@pytest.fixture
def search_service(kosha_client, query_cache, resilience, normalizer) -> LawSearchService:
    return LawSearchService(client=kosha_client, cache=query_cache, resilience=resilience, normalizer=normalizer)


@pytest.fixture
def dispatcher(search_service) -> FunctionDispatcher:
    return FunctionDispatcher(search_service)
