# backend/salesboard/core/config.py

from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"
STRICT_ENVIRONMENTS = {"staging", "production"}

# query params libpq understands but asyncpg.connect() rejects
_ASYNCPG_REJECTED_PARAMS = {"sslmode", "channel_binding"}


def clean_async_url(url: str) -> str:
    """Drop libpq-only query params from a postgresql+asyncpg URL; other URLs pass through."""
    parts = urlsplit(url)
    if not parts.query or not parts.scheme.startswith("postgresql+asyncpg"):
        return url

    kept = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in _ASYNCPG_REJECTED_PARAMS]
    return urlunsplit(parts._replace(query=urlencode(kept, doseq=True)))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # development | staging | production (anything else behaves like development)
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # Database
    # -----------------------------
    DATABASE_URL_ASYNC: str
    # only alembic needs this one
    DATABASE_URL_SYNC: str = ""

    # -----------------------------
    # Auth tokens
    # -----------------------------
    JWT_SECRET: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    # one working day
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # -----------------------------
    # Reporting
    # -----------------------------
    # monthly windows are cut at local midnight in this zone
    REPORTING_TIMEZONE: str = "UTC"

    # -----------------------------
    # Slack + scheduled jobs
    # -----------------------------
    SLACK_WEBHOOK_URL: str | None = None
    DIGEST_TOKEN: str | None = None

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("REPORTING_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown REPORTING_TIMEZONE={v!r}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL={v!r}")
        return level

    @property
    def is_strict_environment(self) -> bool:
        return (self.ENVIRONMENT or "").strip().lower() in STRICT_ENVIRONMENTS

    @property
    def DATABASE_URL_ASYNC_CLEAN(self) -> str:
        return clean_async_url(self.DATABASE_URL_ASYNC)

    def model_post_init(self, __context) -> None:  # pydantic v2 hook
        if self.JWT_ALGORITHM != "HS256":
            raise ValueError(f"Unsupported JWT_ALGORITHM={self.JWT_ALGORITHM!r}. Allowed: HS256")

        if not self.is_strict_environment:
            return

        secret = (self.JWT_SECRET or "").strip()
        if not secret or secret == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set to a strong value in staging/production.")
        if len(secret) < 32:
            raise ValueError("JWT_SECRET is too short; use at least 32 characters in staging/production.")


settings = Settings()
