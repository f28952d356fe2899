"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SUPPORTED_DRIVERS = ("sqlite+aiosqlite", "postgresql+asyncpg")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key and a supported database driver).
    """

    # App
    app_name: str = "workdesk"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: SQLite (aiosqlite) for local use, PostgreSQL (asyncpg) in production
    database_url: str = "sqlite+aiosqlite:///./workdesk.db"
    database_echo: bool = False
    # Pool overrides (PostgreSQL only; None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    min_password_length: int = 6

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Approval workflow
    default_rejection_reason: str = "Rejected by Admin"

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and the database driver."""
        if not self.database_url.startswith(_SUPPORTED_DRIVERS):
            raise ValueError(
                f"DATABASE_URL must use one of {', '.join(_SUPPORTED_DRIVERS)}, "
                f"got: {self.database_url.split('://', 1)[0]!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.min_password_length < 1:
            raise ValueError("MIN_PASSWORD_LENGTH must be at least 1")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
