"""Database package - Session management and declarative base."""
from .session import (
    Base,
    DatabaseManager,
    DbSession,
    enable_sqlite_foreign_keys,
    get_db,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "DbSession",
    "enable_sqlite_foreign_keys",
    "get_db",
]
