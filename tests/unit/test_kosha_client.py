"""KoshaSearchClient 단위 테스트 (httpx.MockTransport)"""
import pytest

from kosha_gateway.clients.http_client import SharedHttpClient
from kosha_gateway.clients.kosha_client import KoshaSearchClient, extract_xml_result_code
from kosha_gateway.core.exceptions import (
    ErrorKind,
    ForbiddenException,
    InternalException,
    MalformedUpstreamResponseException,
    RateLimitedException,
    UnauthorizedException,
    UpstreamTransportException,
    UpstreamUnavailableException,
)
from kosha_gateway.schemas.law_schema import SearchQuery

from tests.fixtures.kosha_payloads import (
    TEST_SERVICE_KEY,
    XML_KEY_NOT_REGISTERED,
    connect_error,
    envelope,
    error_envelope,
    json_response,
    raw_item,
    read_timeout,
    status_response,
    text_response,
)

QUERY = SearchQuery(search_value="사다리", category=0, page_no=1, num_of_rows=10)


@pytest.mark.asyncio
async def test_request_parameters(kosha_client, fake_upstream):
    fake_upstream.queue(json_response(envelope(items=[raw_item("A")])))

    await kosha_client.search(QUERY)

    request = fake_upstream.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/B552468/srch/smartSearch"
    assert request.url.params["serviceKey"] == TEST_SERVICE_KEY
    assert request.url.params["searchValue"] == "사다리"
    assert request.url.params["category"] == "0"
    assert request.url.params["pageNo"] == "1"
    assert request.url.params["numOfRows"] == "10"


@pytest.mark.asyncio
async def test_parses_items_and_media(kosha_client, fake_upstream):
    fake_upstream.queue(json_response(envelope(
        items=[raw_item("A"), raw_item("B")],
        media=[raw_item("M", category="6", filepath="https://kosha.or.kr/m.mp4")],
        total_count=42,
    )))

    page = await kosha_client.search(QUERY)

    assert page.total_count == 42
    assert [i.document_id for i in page.primary] == ["A", "B"]
    assert [i.document_id for i in page.secondary] == ["M"]
    assert page.secondary[0].source_path == "https://kosha.or.kr/m.mp4"


@pytest.mark.asyncio
async def test_missing_service_key_fails_before_call(fake_upstream):
    client = KoshaSearchClient(
        http_client=SharedHttpClient(),
        base_url="http://kosha.test/B552468/srch",
        service_key="",
    )

    with pytest.raises(InternalException) as exc_info:
        await client.search(QUERY)

    assert exc_info.value.error_code == "SERVICE_KEY_MISSING"
    assert fake_upstream.call_count == 0


@pytest.mark.asyncio
async def test_connection_error_is_transport_failure(kosha_client, fake_upstream):
    fake_upstream.queue(connect_error)

    with pytest.raises(UpstreamTransportException) as exc_info:
        await kosha_client.search(QUERY)

    assert exc_info.value.retryable
    assert TEST_SERVICE_KEY not in str(exc_info.value)


@pytest.mark.asyncio
async def test_timeout_is_transport_failure(kosha_client, fake_upstream):
    fake_upstream.queue(read_timeout)

    with pytest.raises(UpstreamTransportException):
        await kosha_client.search(QUERY)


@pytest.mark.asyncio
async def test_xml_error_code_is_classified(kosha_client, fake_upstream):
    fake_upstream.queue(text_response(XML_KEY_NOT_REGISTERED))

    with pytest.raises(UnauthorizedException) as exc_info:
        await kosha_client.search(QUERY)

    assert exc_info.value.status_code == 401


class TestParseResponse:
    """전송 없이 응답 해석만 검증"""

    @pytest.fixture
    def client(self):
        return KoshaSearchClient(http_client=SharedHttpClient(), base_url="http://kosha.test", service_key="k")

    @pytest.mark.parametrize("status", [502, 503, 504])
    def test_gateway_statuses_are_retryable(self, client, status):
        with pytest.raises(UpstreamTransportException):
            client.parse_response(status, "<html>Bad Gateway</html>")

    @pytest.mark.parametrize("body", ["", "\n", "   "])
    def test_blank_body_is_retryable(self, client, body):
        with pytest.raises(UpstreamTransportException):
            client.parse_response(200, body)

    def test_blank_body_with_client_status_is_not_retried(self, client):
        with pytest.raises(ForbiddenException):
            client.parse_response(403, "")

    def test_non_json_is_malformed(self, client):
        with pytest.raises(MalformedUpstreamResponseException) as exc_info:
            client.parse_response(200, "<html>maintenance</html>")
        assert exc_info.value.kind == ErrorKind.MALFORMED_UPSTREAM_RESPONSE

    def test_missing_envelope_is_malformed(self, client):
        with pytest.raises(MalformedUpstreamResponseException):
            client.parse_response(200, '{"foo": 1}')

    def test_missing_body_is_malformed(self, client):
        with pytest.raises(MalformedUpstreamResponseException):
            client.parse_response(200, '{"response": {"header": {"resultCode": "00"}}}')

    def test_missing_header_is_malformed(self, client):
        import json

        payload = {"response": {"body": {"totalCount": 1, "items": {"item": [raw_item("A")]}}}}
        with pytest.raises(MalformedUpstreamResponseException):
            client.parse_response(200, json.dumps(payload))

    def test_missing_result_code_is_malformed(self, client):
        import json

        payload = {"response": {"header": {"resultMsg": "NORMAL SERVICE."},
                                "body": {"totalCount": 1, "items": {"item": [raw_item("A")]}}}}
        with pytest.raises(MalformedUpstreamResponseException) as exc_info:
            client.parse_response(200, json.dumps(payload))
        assert exc_info.value.details == {"reason": "missing result code"}

    def test_header_result_code(self, client):
        import json

        with pytest.raises(RateLimitedException):
            client.parse_response(200, json.dumps(error_envelope("22")))

    def test_unknown_result_code(self, client):
        import json

        with pytest.raises(UpstreamUnavailableException) as exc_info:
            client.parse_response(200, json.dumps(error_envelope("77")))
        assert exc_info.value.message == "KOSHA API 오류 (code 77)"

    def test_plain_http_error(self, client):
        with pytest.raises(UpstreamUnavailableException) as exc_info:
            client.parse_response(500, "Internal Error")
        assert exc_info.value.error_code == "UPSTREAM_HTTP_500"
        assert not exc_info.value.retryable

    def test_items_empty_string(self, client):
        body = {"totalCount": 0, "pageNo": 1, "numOfRows": 10, "items": ""}
        page = client.parse_body(body)
        assert page.primary == [] and page.secondary == []

    def test_single_item_object(self, client):
        body = {"totalCount": "1", "items": {"item": raw_item("ONLY")}}
        page = client.parse_body(body)
        assert page.total_count == 1
        assert [i.document_id for i in page.primary] == ["ONLY"]

    def test_invalid_items_skipped(self, client):
        body = {"items": {"item": [raw_item("A"), {"title": "no id"}, "junk", raw_item("B")]}}
        page = client.parse_body(body)
        assert [i.document_id for i in page.primary] == ["A", "B"]

    def test_numeric_fields_tolerated(self, client):
        item = raw_item("A")
        item["category"] = 1
        item["score"] = "not-a-number"
        page = client.parse_body({"items": {"item": [item]}})
        assert page.primary[0].category == "1"
        assert page.primary[0].relevance_score is None


def test_extract_xml_result_code():
    assert extract_xml_result_code(XML_KEY_NOT_REGISTERED) == "30"
    assert extract_xml_result_code("<resultCode>22</resultCode>") == "22"
    assert extract_xml_result_code("<html/>") is None


def test_build_params_and_url():
    client = KoshaSearchClient(http_client=SharedHttpClient(), base_url="http://kosha.test/srch/",
                               search_path="/smartSearch", service_key="k")
    assert client.search_url == "http://kosha.test/srch/smartSearch"
    assert client.build_params(QUERY)["searchValue"] == "사다리"
