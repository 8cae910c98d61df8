"""Pydantic Settings — typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    service_port: int = 5000
    cors_origins: list[str] = ["*"]
    debug: bool = False

    # ── Record Store ─────────────────────────────────────────
    record_store_base_url: str = "http://localhost:8080"
    record_store_api_prefix: str = "/api"
    record_store_access_token: str = ""
    record_store_timeout: int = 15  # seconds
    use_mock_data: bool = False  # in-memory store seeded with sample records

    # ── Display policy ───────────────────────────────────────
    default_lesson_time: str = "9:00 AM"
    upcoming_window_days: int = 7
    upcoming_display_limit: int = 5
    dashboard_list_limit: int = 5
    default_class_days: list[int] = [1, 2, 3, 4, 5]  # Monday to Friday
    avatar_base_url: str = "https://ui-avatars.com/api/"
    avatar_background: str = "2E7D32"


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
