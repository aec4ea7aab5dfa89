import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from holodex.constants import DEFAULT_BASE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOLODEX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated keys in a shared .env
    )

    # API access
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL

    # HTTP client
    http_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
