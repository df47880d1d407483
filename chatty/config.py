"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SYSTEM_INSTRUCTION = "You are a sassy AI chatbot that loves to talk."


class Settings(BaseSettings):
    """Strongly typed, read-only application configuration.

    The API key is optional at startup; a missing key is reported per request
    so the service can still answer health checks.
    """

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    model: str = Field(default="gpt-3.5-turbo", alias="MODEL")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL"
    )
    chat_timeout: float = Field(default=30.0, alias="CHAT_TIMEOUT", description="Seconds")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @property
    def api_key_configured(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
