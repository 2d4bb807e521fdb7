"""
SupportFlow Configuration

Centralized configuration management using Pydantic Settings.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SupportFlow"
    app_version: str = "0.1.0"
    debug: bool = False

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug(cls, v: Any) -> bool:
        """Parse debug value, handling non-boolean strings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return bool(v)

    log_level: str = "INFO"
    environment: str = "development"

    # Azure OpenAI
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment_name: str = "gpt-4o-mini"
    azure_openai_api_version: str = "2024-08-01-preview"

    # OpenAI Direct
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-sonnet-20241022"

    # Model Settings
    default_model: str = "gpt-4o-mini"
    llm_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1000, ge=1)
    llm_request_timeout: float = Field(default=60.0, gt=0)

    # Classification Configuration
    classification_confidence_threshold: int = Field(default=70, ge=0, le=100)
    retry_attempts: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=2.0, ge=0)
    attempt_timeout_seconds: float = Field(default=120.0, gt=0)
    batch_item_delay_seconds: float = Field(default=0.1, ge=0)
    memory_window: int = Field(default=5, ge=1)

    @property
    def has_llm_credentials(self) -> bool:
        """Whether any supported LLM provider is configured."""
        return bool(
            (self.azure_openai_api_key and self.azure_openai_endpoint)
            or self.openai_api_key
            or self.anthropic_api_key
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
