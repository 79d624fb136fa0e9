"""Relay configuration — env-driven, read once at process start.

Environment variable names match the ones the relay has always been deployed
with (HEROKU_API_KEY, HEROKU_PIPELINE_ID, WEBHOOK_PATH, ...). Values can also
come from a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HEROKU_API_URL = "https://api.heroku.com/"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class RelaySettings(BaseSettings):
    """Immutable settings shared by every component of the relay."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Control plane (Heroku Platform API)
    heroku_api_key: str = ""
    heroku_pipeline_id: str = ""
    heroku_api_url: str = HEROKU_API_URL

    # Inbound listener
    host: str = "0.0.0.0"
    port: int = 8000
    inbound_path: str = "/webhook"

    # Stripe signature check
    stripe_endpoint_secret: str = ""
    stripe_verify_webhook_signature: bool = False
    stripe_signature_tolerance: int = 300

    # Delivery
    webhook_path: str = ""
    test_proxy_url: str | None = None

    # Outbound limits (seconds / connections)
    request_timeout: float = 10.0
    batch_timeout: float = 30.0
    max_connections: int = 100

    log_level: str = "INFO"

    @field_validator("test_proxy_url", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("heroku_api_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        level = value.strip().upper()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    """Return the process-wide settings instance."""
    return RelaySettings()
