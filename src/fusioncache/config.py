"""Configuration module using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings loaded from FUSIONCACHE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FUSIONCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = "INFO"

    # Remote tier
    redis_url: str | None = None  # e.g. redis://localhost:6379/0
    redis_prefix: str = ""  # Key prefix for namespacing
    redis_max_connections: int = 10  # Used only when the URL leaves it unset
    redis_socket_timeout: float = 5.0
    redis_socket_connect_timeout: float = 5.0

    # Local tier (seconds; <= 0 disables)
    memory_default_expiration: float = 0
    memory_cleanup_interval: float = 0
    memory_max_size: int | None = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function for quick access
settings = get_settings()
