"""Async SQLite engine and session wiring."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from fitroster.persistence.errors import RepositoryError, StoreUnavailableError

from .migrations import apply_migrations


class SQLiteDatabase:
    """Owns the async engine and hands out short-lived transactional sessions."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self._engine: AsyncEngine = create_async_engine(
            database_url,
            future=True,
            poolclass=NullPool,
        )
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        self._migrated = False
        self._migration_lock: asyncio.Lock | None = None

    async def ensure_migrated(self) -> None:
        if self._migrated:
            return
        if self._migration_lock is None:
            self._migration_lock = asyncio.Lock()
        async with self._migration_lock:
            if self._migrated:
                return
            await apply_migrations(self._engine)
            self._migrated = True

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session wrapped in a transaction that commits on success."""

        try:
            await self.ensure_migrated()
            async with self._session_factory() as session, session.begin():
                yield session
        except RepositoryError:
            raise
        except SQLAlchemyError as exc:
            msg = f"SQLite store at {self.database_url} failed"
            raise StoreUnavailableError(msg) from exc

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["SQLiteDatabase"]
