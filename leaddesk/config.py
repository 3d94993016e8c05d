"""Runtime settings for the leaddesk API, read from the environment or `.env`."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Settings shared by the API and the maintenance scripts."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="SQLAlchemy URL of the leads database",
        min_length=1,
    )
    secret_key: str = Field(
        description="HMAC key used to sign access tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of an access token in minutes",
        gt=0,
    )
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="IANA timezone (or UTC offset) used for timestamps",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    push_endpoint_url: str | None = Field(
        default=None,
        description="Endpoint that relays push notifications to subscribed devices",
    )
    push_api_key: str | None = Field(
        default=None,
        description="Bearer token sent to the push endpoint",
    )
    push_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied by the HTTP client used for push delivery",
        gt=0,
    )
    number_locale: str = Field(
        default="en_IN",
        description="Locale used to group loan amounts in notification text",
    )
    currency_symbol: str = Field(default="₹", min_length=1)
    toast_duration_ms: int = Field(
        default=8000,
        description="How long in-app toasts stay visible",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_push_pair(self) -> "Settings":
        if self.push_api_key and not self.push_endpoint_url:
            raise ValueError("PUSH_API_KEY requires PUSH_ENDPOINT_URL to be configured")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load the settings once per process."""

    return Settings()


def reset_settings_cache() -> None:
    """Forget the loaded settings; the next call re-reads the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
