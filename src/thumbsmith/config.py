"""Service configuration.

All environment reads happen here. Settings are built once at start-up and
passed into the app factory and gateway as a dependency.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Image provider
    OPENAI_API_KEY: str | None = Field(default=None, description="Provider API credential")
    OPENAI_BASE_URL: str = Field(
        default="https://api.openai.com/v1", description="Provider API base URL"
    )
    IMAGE_MODEL: str = Field(default="dall-e-3", description="Image model identifier")
    IMAGE_PROVIDER: Literal["openai", "mock"] = Field(
        default="openai", description="Provider adapter to use"
    )
    PROVIDER_TIMEOUT_SECONDS: float = Field(
        default=60.0, gt=0, description="Timeout for the outbound provider call"
    )

    # Quota store
    QUOTA_STORE_URL: str | None = Field(
        default=None,
        description="Durable quota store URL (redis://, rediss:// or an SQLAlchemy URL)",
    )
    QUOTA_STORE_TOKEN: str | None = Field(
        default=None, description="Password/token for the Redis quota store"
    )
    QUOTA_KEY_PREFIX: str = Field(default="thumbsmith:usage", description="Redis key prefix")
    DAILY_FREE_LIMIT: int = Field(default=3, ge=1, description="Requests per identity per day")

    # Origin allow-list
    SITE_URL: str | None = Field(default=None, description="Canonical public site URL")
    DEV_URL: str | None = Field(
        default="http://localhost:3000", description="Local development URL"
    )

    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    @property
    def allowed_origins(self) -> list[str]:
        """Origins accepted by the origin guard and CORS middleware."""
        return [url.rstrip("/") for url in (self.SITE_URL, self.DEV_URL) if url]

    @property
    def provider_configured(self) -> bool:
        """Whether the selected provider has what it needs to run."""
        if self.IMAGE_PROVIDER == "mock":
            return True
        return bool(self.OPENAI_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """Return process-wide settings, read from the environment once."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
