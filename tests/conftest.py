"""Shared fixtures: in-memory database, HTTP client, admin token, payloads."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

# Settings are cached on first use; pin the test environment before import.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.mediblues.core.config import get_settings
from src.mediblues.core.security import create_access_token
from src.mediblues.db.session import Base, enable_sqlite_foreign_keys, get_db
from src.mediblues.main import app


@pytest.fixture
def auth_headers() -> dict[str, str]:
    settings = get_settings()
    token, _ = create_access_token(email=settings.ADMIN_EMAIL, settings=settings)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh schema per test; one shared connection keeps :memory: alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests commit against the test database."""

    async def _session_per_request() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _session_per_request
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def location_payload() -> dict:
    return {
        "name": "Mediblues Indiranagar",
        "address": "100 Feet Road, Indiranagar, Bengaluru",
        "phone": "080-4000-1000",
        "email": "indiranagar@mediblues.com",
    }


@pytest.fixture
def package_payload() -> dict:
    return {
        "name": "Executive Health Check",
        "description": "Full-body screening",
        "price": "4999.00",
        "discount_price": "3999.50",
        "key_features": ["Fasting required", "Doctor consultation"],
        "duration": "4 hours",
        "tests": [
            {"name": "Lipid Profile", "category": "Blood", "normal_range": "< 200", "unit": "mg/dL"},
            {"name": "HbA1c", "category": "Blood"},
        ],
    }
