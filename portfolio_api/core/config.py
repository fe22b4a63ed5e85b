"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Mail credentials are optional at startup. A missing key is reported per
request (HTTP 500) so the share endpoint keeps working without them.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (serverless hosts inject env vars directly)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=False)


DEFAULT_CORS_ALLOWED_ORIGINS = ",".join(
    [
        "https://www.mattheneus.com",
        "https://mattheneus.com",
        "https://paul-mattheneus-portfolio.vercel.app",
        "https://folio-site-pro-git-main-paul-mattheneus-projects.vercel.app",
        "http://localhost:5000",
    ]
)


def _build_mail_settings() -> "MailSettings":
    """Build mail settings from environment.

    Pydantic Settings (v2) can populate values from environment variables.
    However, static type checkers often treat required fields as required
    constructor arguments, which is not how BaseSettings is intended to be used.
    """

    return MailSettings()  # type: ignore[call-arg]


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    See _build_mail_settings() for rationale about the type ignore.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class MailSettings(BaseSettings):
    """Outbound mail configuration.

    Variable names match the hosting dashboard (RESEND_API_KEY, TO_EMAIL,
    FROM_EMAIL), so no prefix is applied to them.
    """

    resend_api_key: str | None = Field(
        None,
        description="Resend API key; absence is a hard configuration error at request time",
    )
    to_email: str | None = Field(
        None,
        description="Destination address receiving contact notifications",
    )
    from_email: str | None = Field(
        None,
        description="Verified sender address (defaults to to_email)",
    )
    mail_provider: str = Field(
        "resend",
        description="Mail backend name (currently: resend)",
    )
    mail_site_name: str = Field(
        "Paul Mattheneus Portfolio",
        description="Site name shown in the notification footer",
    )
    mail_timeout_seconds: float = Field(
        10.0,
        description="Upper bound for a single send call in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    cors_allowed_origins: str = Field(
        DEFAULT_CORS_ALLOWED_ORIGINS,
        description="Comma-separated origins allowed to call the contact endpoint (prefix match)",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on the contact endpoint",
    )
    rate_limit_requests: int = Field(
        3,
        description="Maximum number of submissions allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        15 * 60,
        description="Sliding window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(0, description="Rotate log file after this many bytes (0 disables)")
    backup_count: int = Field(5, description="Rotated files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to accept and echo request correlation ids",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.

    Environments:
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    mail: MailSettings = Field(default_factory=_build_mail_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
