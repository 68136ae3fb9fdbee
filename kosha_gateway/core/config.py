"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # KOSHA 스마트검색 Open API (data.go.kr)
    kosha_api_base: str = "http://apis.data.go.kr/B552468/srch"
    kosha_search_path: str = "/smartSearch"
    kosha_service_key: str = ""
    # 포털에서 발급한 'Encoding' 키를 그대로 넣은 경우 True (이중 인코딩 방지)
    kosha_service_key_encoded: bool = False
    kosha_timeout_s: float = 5.0

    # 재시도 (지수 백오프: base * 2**(n-1))
    kosha_max_retries: int = 3
    kosha_retry_base_delay_s: float = 0.1

    # 회로차단(CB): 연속 실패 시 일정 시간 업스트림 호출 차단
    circuit_fail_threshold: int = 5
    circuit_open_seconds: float = 60.0

    # 인메모리 캐시
    cache_ttl: int = 600  # 10분
    cache_max_entries: int = 1000

    # 법령 링크
    law_registry_base: str = "https://www.law.go.kr"

    max_num_of_rows: int = 100

    # API
    api_title: str = "KOSHA 안전보건 법령 검색 게이트웨이"
    api_version: str = "1.0.0"
    api_description: str = "캐시/재시도/회로차단을 갖춘 KOSHA 스마트검색 프록시입니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl", "cache_max_entries")
    @classmethod
    def validate_cache(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache settings must be positive")
        return v

    @field_validator("kosha_timeout_s", "circuit_open_seconds")
    @classmethod
    def validate_durations(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("durations must be positive")
        return v

    @field_validator("kosha_max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("kosha_max_retries must be >= 0")
        return v

    @field_validator("kosha_retry_base_delay_s")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("kosha_retry_base_delay_s must be >= 0")
        return v

    @field_validator("circuit_fail_threshold", "max_num_of_rows")
    @classmethod
    def validate_thresholds(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("thresholds must be positive")
        return v

    @field_validator("kosha_api_base", "law_registry_base")
    @classmethod
    def validate_base_urls(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base URLs must start with http:// or https://")
        return v.rstrip("/")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
