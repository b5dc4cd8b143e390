"""
Async SQLAlchemy engine, session factory and startup connection check.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from config.settings import config
from database.models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str) -> AsyncEngine:
    """Create an engine; in-memory SQLite shares one connection across the pool."""
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            echo=False,
            poolclass=StaticPool,
        )
    return create_async_engine(
        url,
        echo=False,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
    )


engine = build_engine(config.connection_string)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def connect_db(target: AsyncEngine | None = None) -> None:
    """
    Verify the database is reachable and create any missing tables.

    Errors propagate; the caller decides whether the process survives.
    """
    target = target or engine
    async with target.begin() as conn:
        await conn.execute(text("SELECT 1"))
        await conn.run_sync(Base.metadata.create_all)

    url = target.url
    logger.info(
        "Database connected: %s and %s",
        url.host or "local",
        url.database or "memory",
    )
