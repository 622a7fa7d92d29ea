"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; DATABASE_URL is
checked the first time a session is requested.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "clubops"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 30
    db_command_timeout: int = 60

    # Security: tokens are issued by the identity provider with this shared secret
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    jwt_audience: str | None = None
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
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
        """Validate required secrets and enumerated options."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required (the identity provider's JWT signing secret). "
                "Set in environment or .env file."
            )
        if self.telemetry_exporter not in TELEMETRY_EXPORTERS:
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                f"Must be one of: {', '.join(TELEMETRY_EXPORTERS)}"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
