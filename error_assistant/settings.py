"""
Application settings loaded from environment variables.
Uses pydantic-settings so every value can be overridden via env vars or a .env file.

``API_KEY`` is mandatory: constructing ``Settings`` without it raises a
``ValidationError``, which aborts application startup.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration. Immutable once built."""

    # ── Gemini ──────────────────────────────────────────────
    api_key: str
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_api_version: str = "v1beta"
    gemini_model: str = "gemini-2.0-flash"

    # ── Webhook ─────────────────────────────────────────────
    web_hook_url: str | None = None

    # ── HTTP client ─────────────────────────────────────────
    http_connect_timeout: float = 5.0
    http_read_timeout: float = 120.0

    # ── Server ──────────────────────────────────────────────
    cors_allow_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("API_KEY must be set")
        return value

    @field_validator("web_hook_url")
    @classmethod
    def _blank_webhook_is_disabled(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once."""
    return Settings()
