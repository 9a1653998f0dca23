"""Engine, sessions and the per-request database dependency.

``DatabaseManager`` owns one async engine. ``create_application`` builds
it, the lifespan opens and closes it, and ``get_db`` reaches it through
``request.app.state`` so every request gets its own transaction.

Tables come from Alembic (``python scripts/migrate.py upgrade head``);
nothing here creates schema.
"""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import structlog
from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ..core.config import Settings, get_settings

log = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign-key enforcement for every new SQLite connection.

    Without the pragma SQLite ignores ``ON DELETE CASCADE`` and
    ``SET NULL``, and the location and package cascades stop working.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Lazily opened engine plus session factory for one database URL."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    def _create_engine(self) -> AsyncEngine:
        url = make_url(self.settings.DATABASE_URL)
        options: dict[str, Any] = {"echo": self.settings.DATABASE_ECHO}
        if url.get_backend_name() != "sqlite":
            options.update(
                pool_size=self.settings.DATABASE_POOL_SIZE,
                max_overflow=self.settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=self.settings.DATABASE_POOL_TIMEOUT,
                pool_pre_ping=True,
            )
        engine = create_async_engine(url, **options)
        if url.get_backend_name() == "sqlite":
            enable_sqlite_foreign_keys(engine)
        log.info("db_engine_created", backend=url.get_backend_name(), pool_size=options.get("pool_size"))
        return engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Create the engine and session factory; a second call does nothing."""
        if self.is_open:
            return
        self._engine = self._create_engine()
        # Rows stay readable after commit so endpoints can serialise them
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False, autoflush=False)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("DatabaseManager.open() has not been called")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._sessions is None:
            raise RuntimeError("DatabaseManager.open() has not been called")
        return self._sessions

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = self._sessions = None
        log.info("db_engine_disposed")

    async def health_check(self) -> dict[str, str | None]:
        """Run ``SELECT 1``; never raises."""
        try:
            async with self.session_factory() as probe:
                await probe.execute(text("SELECT 1"))
        except Exception as exc:  # noqa: BLE001
            log.error("db_unreachable", error=str(exc))
            return {"status": "unhealthy", "error": str(exc)}
        return {"status": "healthy", "error": None}

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work: commit when the block exits cleanly, roll back otherwise."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await session.commit()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Per-request session; repository writes in one request commit together."""
    manager: DatabaseManager = request.app.state.db_manager
    async with manager.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
