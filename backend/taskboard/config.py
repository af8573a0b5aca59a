"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - create_app() accepts an explicit Settings so tests never mutate the cache

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Defaults provided for every setting: works out-of-the-box locally
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables (prefix TASKBOARD_)."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TASKBOARD_", case_sensitive=False,
    )

    # Application
    app_name: str = "Taskboard API"
    app_version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    http_log_enabled: bool = True
    http_log_headers: bool = False

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Content-Type", "Authorization"]

    # Rate limiting (token bucket per client)
    rate_limit_enabled: bool = True
    rate_limit_requests_per_minute: int = 60
    rate_limit_burst: int = 20

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("rate_limit_requests_per_minute", "rate_limit_burst")
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("rate limit values must be >= 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
