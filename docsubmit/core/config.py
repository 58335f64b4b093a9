"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from docsubmit.adapters.rate_limit.base import TimeUnit

APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_path = PROJECT_ROOT / ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_file = str(_env_path) if _env_path.is_file() else None

# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


DEFAULT_SUBMITTER_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"


class RateLimitSettings(BaseSettings):
    """Fixed-window limiter in front of the document submitter.

    Values are deliberately not range-checked here: the limiter rejects
    non-positive values with its own stable error message.
    """

    request_limit: int = Field(
        10,
        description="Documents admitted per window",
    )
    window_unit: TimeUnit = Field(
        TimeUnit.SECONDS,
        description="Unit of the window length (milliseconds, seconds, minutes, hours, days)",
    )
    window_count: int = Field(
        1,
        description="Window length expressed as a count of window_unit",
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class SubmitterSettings(BaseSettings):
    """Downstream document-submission endpoint."""

    api_url: str = Field(
        DEFAULT_SUBMITTER_URL,
        description="URL the documents are POSTed to",
    )
    timeout_seconds: float = Field(
        30.0,
        description="HTTP timeout for a single submission in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="SUBMITTER_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="json or plain")
    output: str = Field("stdout", description="stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
    )
    backup_count: int = Field(5, description="Rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable FastAPI debug mode (tracebacks in 500 responses)",
    )
    max_concurrent_submissions: int = Field(
        1000,
        description="Worker threads reserved for submissions waiting on the rate limiter",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=AppSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    submitter: SubmitterSettings = Field(default_factory=SubmitterSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
