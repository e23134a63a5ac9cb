"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from trial_finder.constants import (
    CLINICAL_TRIALS_API_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_SEARCH_PAGE_SIZE,
    DEFAULT_TIMEOUT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Registry
    clinical_trials_base_url: str = CLINICAL_TRIALS_API_URL
    request_timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    requests_per_second: float = 5.0
    rate_limit_burst: int = 10

    # Search defaults
    default_page_size: int = DEFAULT_SEARCH_PAGE_SIZE

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
