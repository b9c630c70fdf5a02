"""Database Session Manager — owns the engine and turns driver failures into YogaLog errors.

Invariants:
    - A session that exits with any exception is rolled back before the error propagates
    - Constraint violations surface as ConcurrencyError (409): the only constraints a
      well-formed request can trip are the unique slug and unique card position
    - Every other SQLAlchemy failure surfaces as DatabaseError (503)
    - YogaLogError raised inside the session passes through untouched

Design Decisions:
    - Pool sizing applies to server databases only; SQLite (tests, local runs) keeps
      the dialect's own pool
    - expire_on_commit=False: responses are built from ORM objects after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from yogalog.core.errors import ConcurrencyError, DatabaseError, YogaLogError

logger = logging.getLogger(__name__)


def translate_db_error(error: SQLAlchemyError) -> YogaLogError:
    """Map a SQLAlchemy exception onto the domain error the API reports."""
    if isinstance(error, IntegrityError):
        return ConcurrencyError("A concurrent write claimed the same unique value")
    if isinstance(error, OperationalError):
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(error, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Engine, session factory and readiness check for one database."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = translate_db_error(e)
            logger.error(
                f"{type(e).__name__} mapped to {error.code}: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


# Set by the app lifespan
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
