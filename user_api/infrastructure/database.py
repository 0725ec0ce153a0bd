"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions mapped to core errors: an IntegrityError naming the
      email unique constraint → ConflictError("email"), everything else
      (other integrity violations included) → GatewayError

Design Decisions:
    - Manager instance built once in the lifespan and handed to the gateway
      (no module-level singleton)
    - expire_on_commit=False: rows stay readable after commit in async context
    - Pool sizing skipped for SQLite: its async pools reject pool_size/max_overflow
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from user_api.core.domain_types import Operation
from user_api.core.errors import ConflictError, GatewayError
from user_api.db.base import Base
from user_api import models  # noqa: F401  populates Base.metadata
from user_api.models.user import EMAIL_UNIQUE_CONSTRAINT

logger = logging.getLogger(__name__)

# SQLite names the column, PostgreSQL names the constraint
EMAIL_CONFLICT_MARKERS = (EMAIL_UNIQUE_CONSTRAINT, "users.email", "users_email_key")


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
        """Wrap an existing engine (test fixtures, scripts)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: Operation,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and error translation."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            if _is_email_conflict(e):
                logger.warning(f"DB email conflict during {operation.value}: {e}")
                raise ConflictError("email", operation) from e
            logger.error(f"DB integrity error during {operation.value}: {e}")
            raise GatewayError("Integrity constraint violated", operation) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error during {operation.value}: {e}")
            raise GatewayError("Connection or operational error", operation) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error during {operation.value}: {e}")
            raise GatewayError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error during {operation.value}: {e}")
            raise GatewayError("Database operation failed", operation) from e
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all tables from Base.metadata (local development only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness endpoint)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _is_email_conflict(error: IntegrityError) -> bool:
    detail = str(error.orig)
    return any(marker in detail for marker in EMAIL_CONFLICT_MARKERS)
