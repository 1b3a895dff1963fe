"""Async engine and session factory for request-scoped database access."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gallery.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine, turning on FK enforcement for SQLite."""
    engine = create_async_engine(database_url, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = build_engine(settings.database_url, echo=settings.database_echo)
async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


async def create_tables(target: AsyncEngine | None = None) -> None:
    """Create any missing tables; used for local SQLite databases and the seed script."""
    from gallery.db.base import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
