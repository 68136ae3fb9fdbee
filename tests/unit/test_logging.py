"""로그 마스킹 테스트"""
from kosha_gateway.core.logging import sanitize_for_log


def test_service_key_query_param_masked():
    url = "http://apis.data.go.kr/B552468/srch/smartSearch?serviceKey=abc%2Bdef&searchValue=x"
    assert sanitize_for_log(url, 200) == "http://apis.data.go.kr/B552468/srch/smartSearch?serviceKey=***&searchValue=x"


def test_truncates_long_values():
    assert sanitize_for_log("가" * 10, 5) == "가가가가가..."


def test_empty_value():
    assert sanitize_for_log("") == "[empty]"
