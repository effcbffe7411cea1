"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""  # Empty disables signature checks
    slack_api_url: str = "https://slack.com/api/"

    # Studio
    studio_url: str = "https://studio.bannerflow.com"
    sandbox_studio_url: str = "https://sandbox-studio.bannerflow.com"
    image_optimizer_url: str = "https://c.bannerflow.net"
    unfurl_title: str = "Creative Preview - Bannerflow"

    # Outbound HTTP
    http_timeout_seconds: int = 10

    # App
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: PositiveInt = Field(
        default=3000,
        validation_alias=AliasChoices("FUNCTIONS_CUSTOMHANDLER_PORT", "PORT"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
