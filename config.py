"""Application configuration."""

from functools import lru_cache
from typing import Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    environment: str = "development"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8080

    # OpenRouter
    openrouter_api_key: Optional[SecretStr] = None
    default_model: str = "openai/gpt-4o"
    temperature: float = 0.7

    # Chat UI
    chat_api_url: str = "http://localhost:8080"
    request_timeout: float = 60.0
    stream_responses: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:8501", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
