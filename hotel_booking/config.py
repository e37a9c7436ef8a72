from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    use_in_memory: bool = True  # stub supplier instead of the HTTP gateway
    log_level: str = "INFO"

    supplier_base_url: str = "http://api.tbotechnology.in/TBOHolidays_HotelAPI"
    supplier_username: str | None = None
    supplier_password: str | None = None
    supplier_timeout_seconds: float = 10.0
    supplier_retry_attempts: int = 3
    supplier_retry_base_delay_seconds: float = 1.0
    supplier_retry_max_delay_seconds: float = 8.0
    supplier_payment_mode: str = "Limit"
    supplier_breaker_fail_max: int = 5
    supplier_breaker_reset_timeout: int = 60

    session_ttl_minutes: int = 30
    hotel_details_cache_seconds: int = 1800
    search_fallback_enabled: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
