"""Database Session Manager — one async engine per process, request-scoped sessions.

Invariants:
    - A session that raises is rolled back before the error leaves it
    - SQLAlchemy failures leave this module as DatabaseError (core/errors.py);
      domain errors raised inside a session pass through untouched
    - get_db() before init_db() is a DatabaseError, not an AttributeError

Design Decisions:
    - Module-level db_manager set by the FastAPI lifespan: no engine at import time
    - expire_on_commit=False: handlers read entities after the repository commits
    - as_database_error is shared with the repositories so both map failures identically
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from villa_api.config import Settings
from villa_api.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "Integrity constraint violated"),
    (OperationalError, "Connection or operational error"),
    (DBAPIError, "Database driver error"),
)


def as_database_error(e: SQLAlchemyError, operation: str) -> DatabaseError:
    """Translate a SQLAlchemy failure into the domain error, logging the driver detail."""
    message = next(
        (msg for exc_type, msg in _FAILURE_MESSAGES if isinstance(e, exc_type)),
        "Database operation failed",
    )
    logger.error(
        f"Database {operation} failed: {e}",
        extra={"operation": operation, "error_code": "DATABASE_ERROR"},
    )
    return DatabaseError(message, operation)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions."""

    def __init__(self, database_url: str, **engine_options: Any):
        self.engine = create_async_engine(database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                raise as_database_error(e, "session") from e
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> float:
        """Round-trip a trivial query; returns latency in milliseconds."""
        started = time.perf_counter()
        async with self.session() as db:
            await db.execute(text("SELECT 1"))
        return (time.perf_counter() - started) * 1000

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(settings: Settings) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(
        settings.database_url, **settings.engine_options(),
    )
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise DatabaseError("Database not initialized", "connect")
    async with db_manager.session() as session:
        yield session
