# This project was developed with assistance from AI tools.
"""Async engine, session factory, and FastAPI session dependency."""

import logging
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import db_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all HelbFlow models."""


engine = create_async_engine(
    db_settings.DATABASE_URL,
    echo=db_settings.SQL_ECHO,
    pool_pre_ping=True,
)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session; roll back if the request fails."""
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


class DatabaseService:
    """Thin wrapper used by the health endpoint."""

    def __init__(self, session_factory: async_sessionmaker = SessionLocal):
        self._session_factory = session_factory

    async def health_check(self) -> dict[str, str]:
        """Run ``SELECT 1`` and report the outcome."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return {"status": "healthy", "message": "PostgreSQL connection OK"}
        except Exception as exc:
            logger.warning("Database health check failed: %s", exc)
            return {"status": "unhealthy", "message": f"PostgreSQL unavailable: {exc}"}


_db_service: DatabaseService | None = None


def get_db_service() -> DatabaseService:
    """Return the process-wide DatabaseService."""
    global _db_service  # noqa: PLW0603
    if _db_service is None:
        _db_service = DatabaseService()
    return _db_service
