"""Tests for application settings."""
import pytest
from pydantic import ValidationError

from src.mediblues.core.config import Settings

SECRET = "a-production-secret-key-with-at-least-32-chars"


def test_defaults():
    settings = Settings(SECRET_KEY=SECRET, DATABASE_URL="sqlite+aiosqlite:///:memory:")
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 1440
    assert settings.ADMIN_EMAIL == "admin@mediblues.com"
    assert settings.DEFAULT_PAGE_SIZE == 10
    assert settings.MAX_PAGE_SIZE == 100


def test_cors_lists_are_split():
    settings = Settings(
        SECRET_KEY=SECRET,
        CORS_ORIGINS="https://mediblues.com, https://admin.mediblues.com",
        CORS_ALLOW_METHODS="GET,POST",
    )
    assert settings.cors_origins_list == ["https://mediblues.com", "https://admin.mediblues.com"]
    assert settings.cors_methods_list == ["GET", "POST"]


def test_short_secret_is_rejected():
    with pytest.raises(ValidationError):
        Settings(SECRET_KEY="too-short")


def test_production_rejects_default_admin_password():
    with pytest.raises(ValidationError):
        Settings(
            APP_ENV="production",
            SECRET_KEY=SECRET,
            DATABASE_URL="postgresql+asyncpg://u:p@db/mediblues",
        )


def test_production_accepts_explicit_values():
    settings = Settings(
        APP_ENV="production",
        SECRET_KEY=SECRET,
        ADMIN_PASSWORD="a-real-password",
        DATABASE_URL="postgresql+asyncpg://u:p@db/mediblues",
    )
    assert settings.is_production
    assert not settings.is_development
