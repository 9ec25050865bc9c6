"""
Database connection management with SQLAlchemy async.

The engine lives on an explicitly constructed `Database` object that the
application lifespan connects and disconnects; request handlers receive
sessions through the `get_db_session` dependency.
"""
import re
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any, Optional

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from watchstore.core.errors import StoreError
from watchstore.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""
    pass


def _normalize_url(database_url: str) -> str:
    # postgresql:// -> postgresql+asyncpg://
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores ON DELETE actions unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ) -> None:
        self.url = _normalize_url(url)
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreError("Database is not connected")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Raw session factory, for callers that manage transactions themselves."""
        if self._session_factory is None:
            raise StoreError("Database is not connected")
        return self._session_factory

    def _engine_options(self) -> dict[str, Any]:
        if self.url.startswith("sqlite"):
            # One shared connection so in-memory databases survive across sessions
            return {
                "echo": self._echo,
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {
            "echo": self._echo,
            "pool_size": self._pool_size,
            "max_overflow": self._max_overflow,
            "pool_pre_ping": True,
        }

    async def connect(self) -> None:
        """Create the engine and make sure every table exists."""
        if self._engine is not None:
            return

        logger.info("Connecting to database", url=re.sub(r":([^:@/]+)@", ":***@", self.url))
        self._engine = create_async_engine(self.url, **self._engine_options())
        if self.url.startswith("sqlite"):
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        # Register every model on Base.metadata before create_all
        import watchstore.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized")

    async def disconnect(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Unit of work: commit on success, roll back on any exception."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a request-scoped database session."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
