"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Revision provider (Gemini generateContent API)
    gemini_api_key: str | None = None
    revision_model: str = "gemini-2.5-flash"
    revision_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    revision_timeout_seconds: float = 60.0
    revision_temperature: float = 0.7
    revision_top_k: int = 40
    revision_top_p: float = 0.95
    revision_max_output_tokens: int = 8192

    # Revision retry policy
    revision_max_retries: int = 3
    revision_retry_delay_seconds: float = 1.0
    revision_retry_backoff_multiplier: float = 2.0
    revision_max_retry_delay_seconds: float = 10.0

    # Prompt assembly
    prompt_max_content_chars: int = 15000

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
