"""Application configuration for the Rent&Home web front."""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    backend_base_url: str = Field(default="http://localhost:3000")
    backend_timeout_seconds: float = Field(default=10.0, gt=0)

    default_locale: str = Field(default="en")
    supported_locales: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["en", "es", "pt"])

    session_cookie_name: str = Field(default="renthome_session")
    session_ttl_seconds: int = Field(default=60 * 60 * 24, ge=60)

    booking_submit_delay_seconds: float = Field(default=1.0, ge=0)
    similar_listings_limit: int = Field(default=5, ge=1, le=50)

    @field_validator("supported_locales", "cors_allow_origins", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> object:
        """Allow comma-separated env values for list settings."""

        if isinstance(value, str):
            parts = [item.strip() for item in value.split(",") if item.strip()]
            return parts
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
