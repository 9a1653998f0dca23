"""Settings for the Mediblues directory service.

Everything is read from the environment through pydantic-settings. A
``.env`` file in the working directory supplies defaults, and
``.env.<APP_ENV>`` (``.env.production``, ``.env.test``...) layered on top
of it supplies per-environment overrides. Real environment variables win
over both files.
"""
import os
import warnings
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]

# Placeholder marker; production refuses any secret that still contains it
_PLACEHOLDER = "change-me"


def _env_files() -> tuple[str, ...]:
    """Return the dotenv files that exist, base file first."""
    candidates = [".env"]
    app_env = os.getenv("APP_ENV", "").strip().lower()
    if app_env:
        candidates.append(f".env.{app_env}")
    return tuple(name for name in candidates if Path(name).is_file())


class Settings(BaseSettings):
    """Runtime configuration. Field names match the environment variables."""

    model_config = SettingsConfigDict(
        env_file=_env_files() or None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    APP_NAME: str = "mediblues-directory-service"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Environment = "development"
    DEBUG: bool = Field(default=False, description="Expose exception text in 500 responses")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Database (async SQLAlchemy URL, e.g. postgresql+asyncpg://...)
    DATABASE_URL: str = ""
    DATABASE_POOL_SIZE: int = Field(default=5, ge=1, le=100)
    DATABASE_MAX_OVERFLOW: int = Field(default=10, ge=0)
    DATABASE_POOL_TIMEOUT: int = Field(default=30, ge=1, description="Seconds to wait for a pooled connection")
    DATABASE_ECHO: bool = False

    # Admin token signing
    SECRET_KEY: str = Field(default=f"{_PLACEHOLDER}-mediblues-token-signing-key", min_length=32)
    ALGORITHM: Literal["HS256"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=24 * 60, ge=1)

    # The single admin identity
    ADMIN_EMAIL: str = "admin@mediblues.com"
    ADMIN_PASSWORD: str = f"{_PLACEHOLDER}-admin-password"
    ADMIN_NAME: str = "Administrator"

    # Paginated lists
    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)

    # CORS; comma-separated values
    CORS_ORIGINS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = False
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,PATCH,DELETE,OPTIONS"

    @property
    def cors_origins_list(self) -> list[str]:
        return _split_csv(self.CORS_ORIGINS)

    @property
    def cors_methods_list(self) -> list[str]:
        return _split_csv(self.CORS_ALLOW_METHODS)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @field_validator("DATABASE_URL")
    @classmethod
    def warn_missing_database_url(cls, v: str) -> str:
        if not v:
            warnings.warn(
                "DATABASE_URL is empty; the first database access will fail.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @model_validator(mode="after")
    def check_deployment_safety(self) -> "Settings":
        """Reject combinations that are unsafe to serve."""
        if self.CORS_ALLOW_CREDENTIALS and "*" in self.cors_origins_list:
            raise ValueError("CORS_ALLOW_CREDENTIALS requires an explicit CORS_ORIGINS list, not '*'")

        if not self.is_production:
            return self
        problems = []
        if self.DEBUG:
            problems.append("DEBUG must be off")
        if _PLACEHOLDER in self.SECRET_KEY.lower():
            problems.append("SECRET_KEY must be set")
        if _PLACEHOLDER in self.ADMIN_PASSWORD.lower():
            problems.append("ADMIN_PASSWORD must be set")
        if not self.DATABASE_URL:
            problems.append("DATABASE_URL must be set")
        if problems:
            raise ValueError(f"Invalid production settings: {'; '.join(problems)}")
        return self


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings; tests reset it with ``get_settings.cache_clear()``."""
    return Settings()
