"""
Configuration management using Pydantic.

Every setting can be overridden with an environment variable carrying the
``BTC_MATCHER_`` prefix, e.g. ``BTC_MATCHER_LOG_LEVEL=DEBUG``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="BTC_MATCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string for log records",
    )

    # Web server
    host: str = Field(default="127.0.0.1", description="Web server host")
    port: int = Field(default=8000, description="Web server port")

    # Book display
    book_depth: int = Field(default=5, ge=1, description="Price levels shown for the resting sells")
    seed_sample_data: bool = Field(
        default=False,
        description="Load the sample sell orders when the web app starts or resets",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
