"""
Database engine and session management for the LightBnB store.
The engine and session factory are built explicitly from settings and handed
to the repositories; nothing here creates a connection pool at import time.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, Integer
from lightbnb.config import Settings
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every LightBnB table is keyed by a serial integer id.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def create_engine_from_settings(settings: Settings, **overrides: Any) -> AsyncEngine:
    """
    Create the async engine backing the store.

    Args:
        settings: Application settings with the database URL and pool options
        **overrides: Extra keyword arguments passed to create_async_engine

    Returns:
        Configured AsyncEngine
    """
    options: Dict[str, Any] = {"echo": settings.sql_echo}

    # SQLite engines use a single-connection pool that rejects sizing options
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=settings.pool_pre_ping,
            connect_args={
                "server_settings": {
                    "application_name": settings.app_name.lower(),
                }
            },
        )

    options.update(overrides)
    engine = create_async_engine(settings.database_url, **options)
    logger.info(f"Created database engine for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory repositories draw their sessions from."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def check_database_connection(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def get_pool_status(engine: AsyncEngine) -> Dict[str, Any]:
    """
    Get connection pool counters for monitoring.
    Pools without sizing (SQLite) only report their status line.
    """
    pool = engine.pool
    status: Dict[str, Any] = {"status": pool.status()}
    for counter in ("size", "checkedin", "checkedout", "overflow"):
        method = getattr(pool, counter, None)
        if method is not None:
            status[counter] = method()
    return status


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    Close all pooled connections.
    This should be called during application shutdown.
    """
    await engine.dispose()
    logger.info("Database connections closed")
