"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions are mapped to DatabaseError by database_faults(), both
      inside session() and around each repository call
    - DatabaseError messages never carry SQL text or bound parameters

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: returned entities stay readable after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from gorest_proxy.core.errors import DatabaseError
from gorest_proxy.db.base import Base
from gorest_proxy import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

# most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAULT_MESSAGES: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "Integrity constraint violated"),
    (OperationalError, "Connection or operational error"),
    (DBAPIError, "Database driver error"),
)


def to_database_error(error: SQLAlchemyError, operation: str) -> DatabaseError:
    for kind, message in _FAULT_MESSAGES:
        if isinstance(error, kind):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", operation)


@asynccontextmanager
async def database_faults(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Roll back and re-raise any SQLAlchemy error as a DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"DB {operation} failed: {e}",
            extra={"error_kind": type(e).__name__, "error_code": "DATABASE_ERROR"},
        )
        raise to_database_error(e, operation) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an already-built engine (tests, embedded use)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self, operation: str = "execute") -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            async with database_faults(session, operation):
                yield session
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create every table known to Base.metadata (no-op for existing ones)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
