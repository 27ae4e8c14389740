"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Every integration (database, realtime, email, search, translate worker,
captcha) owns a prefix-scoped settings class so deployments can inject
them independently.
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

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(10_485_760, description="Rotate log file after this size (0 disables rotation)")
    backup_count: int = Field(5, description="Number of rotated log files to keep")
    request_id_header: str = Field("X-Request-ID", description="Header used for request correlation")

    model_config = SettingsConfigDict(env_prefix="LOG_", case_sensitive=False)


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    url: str = Field("sqlite:///./xeoos.db", description="SQLAlchemy database URL")
    echo: bool = Field(False, description="Echo SQL statements to the log")
    create_tables: bool = Field(True, description="Create missing tables on startup")

    model_config = SettingsConfigDict(env_prefix="DB_", case_sensitive=False)


class AuthSettings(BaseSettings):
    """JWT signing and password hashing configuration."""

    jwt_private_key: str | None = Field(None, description="PEM private key used to sign JWTs")
    jwt_public_key: str | None = Field(None, description="PEM public key used to verify JWTs")
    jwt_algorithm: str = Field("RS512", description="JWT signing algorithm")
    token_lifetime: str = Field("7d", description="Default JWT lifetime (e.g. 7d, 12h, 3600)")

    password_buffer: str = Field("", description="Characters interleaved into passwords before hashing")
    password_pepper: str = Field("", description="Suffix appended to passwords before hashing")
    argon2_time_cost: int = Field(3, ge=1)
    argon2_memory_cost: int = Field(65536, ge=8, description="Argon2 memory cost in KiB")
    argon2_parallelism: int = Field(8, ge=1)
    argon2_hash_len: int = Field(32, ge=16)

    reset_code_ttl_seconds: int = Field(900, ge=1, description="Password reset code lifetime")

    model_config = SettingsConfigDict(env_prefix="AUTH_", case_sensitive=False)


class RealtimeSettings(BaseSettings):
    """Ably pub/sub configuration."""

    api_key: str | None = Field(None, description="Ably API key (keyName:secret)")
    rest_host: str = Field("https://rest.ably.io", description="Ably REST base URL")
    token_ttl_ms: int = Field(2 * 60 * 60 * 1000, description="Browser token lifetime in milliseconds")
    timeout_seconds: float = Field(10.0)

    model_config = SettingsConfigDict(env_prefix="ABLY_", case_sensitive=False)


class EmailSettings(BaseSettings):
    """Resend email delivery configuration."""

    resend_api_key: str | None = Field(None, description="Resend API key")
    api_base: str = Field("https://api.resend.com", description="Resend REST base URL")
    from_address: str = Field("XEO OS <noreply@xeoos.net>", description="Sender for all outgoing mail")
    timeout_seconds: float = Field(10.0)

    model_config = SettingsConfigDict(env_prefix="EMAIL_", case_sensitive=False)


class TranslateSettings(BaseSettings):
    """External translate worker configuration."""

    worker_url: str | None = Field(None, description="Translate worker webhook URL")
    worker_password: str | None = Field(None, description="Shared secret for worker calls and reports")
    timeout_seconds: float = Field(10.0)

    model_config = SettingsConfigDict(env_prefix="TRANSLATE_", case_sensitive=False)


class SearchSettings(BaseSettings):
    """Meilisearch configuration."""

    host: str | None = Field(None, description="Meilisearch base URL")
    api_key: str | None = Field(None, description="Meilisearch API key")
    index: str = Field("posts", description="Index holding post documents")
    timeout_seconds: float = Field(10.0)

    model_config = SettingsConfigDict(env_prefix="MEILI_", case_sensitive=False)


class CaptchaSettings(BaseSettings):
    """Cloudflare Turnstile configuration."""

    enabled: bool = Field(True, description="Require a Turnstile token on signup and password reset")
    secret_key: str | None = Field(None, description="Turnstile secret key")
    verify_url: str = Field(
        "https://challenges.cloudflare.com/turnstile/v0/siteverify",
        description="Turnstile verification endpoint",
    )
    timeout_seconds: float = Field(10.0)

    model_config = SettingsConfigDict(env_prefix="TURNSTILE_", case_sensitive=False)


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    site_url: str = Field(
        "https://xeoos.net",
        description="Public site URL used in notification links",
    )
    page_size: int = Field(
        20,
        ge=1,
        description="Items per page for paginated listings",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-IP rate limiting",
    )
    rate_limit_requests: int = Field(
        30,
        ge=1,
        description="Maximum recorded requests allowed inside the sliding window",
    )
    rate_limit_window_seconds: int = Field(
        60,
        ge=1,
        description="Sliding window size in seconds",
    )
    rate_limit_retention_seconds: int = Field(
        300,
        ge=1,
        description="How long recorded hits are kept before being trimmed",
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    redis_url: str | None = Field(
        None,
        description="Redis URL for the shared rate limiter (in-memory when unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


def _build(settings_cls):
    """Build nested settings from the environment.

    Static type checkers treat required fields as constructor arguments,
    which is not how BaseSettings is used.
    """

    return settings_cls()  # type: ignore[call-arg]


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=lambda: _build(AppSettings))
    log: LogSettings = Field(default_factory=lambda: _build(LogSettings))
    db: DatabaseSettings = Field(default_factory=lambda: _build(DatabaseSettings))
    auth: AuthSettings = Field(default_factory=lambda: _build(AuthSettings))
    realtime: RealtimeSettings = Field(default_factory=lambda: _build(RealtimeSettings))
    email: EmailSettings = Field(default_factory=lambda: _build(EmailSettings))
    translate: TranslateSettings = Field(default_factory=lambda: _build(TranslateSettings))
    search: SearchSettings = Field(default_factory=lambda: _build(SearchSettings))
    captcha: CaptchaSettings = Field(default_factory=lambda: _build(CaptchaSettings))

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
