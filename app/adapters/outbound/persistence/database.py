# app/adapters/outbound/persistence/database.py (async version)

import time
import logging
from functools import lru_cache
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker

from app.adapters.configuration.config import get_settings
from app.adapters.outbound.persistence.models import Base

# Configure logger
logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 0.5

__all__ = ["Base", "get_engine", "get_session_factory", "create_tables"]


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.time())


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    started = conn.info.get("query_start_time")
    if not started:
        return
    total = time.time() - started.pop()
    if total > SLOW_QUERY_SECONDS:
        logger.warning(f"Slow query ({total:.2f}s): {statement}")
    else:
        logger.debug(f"Query executed in {total:.4f}s")


@lru_cache
def get_engine() -> AsyncEngine:
    """
    Create the async engine on first use.

    Raises:
        RuntimeError: If no database URL is configured
    """
    settings = get_settings()
    if not settings.DATABASE_URL:
        raise RuntimeError("Database is not configured: set DATABASE_URL or the POSTGRES_* variables")

    database_url = str(settings.DATABASE_URL).replace("postgresql+psycopg2", "postgresql+asyncpg")
    logger.info(f"Connecting to database: {database_url.split('@')[-1]}")

    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if database_url.startswith("postgresql"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    engine = create_async_engine(database_url, **options)
    event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(engine.sync_engine, "after_cursor_execute", _after_cursor_execute)

    logger.info("Async database connection configured successfully")
    return engine


@lru_cache
def get_session_factory() -> async_sessionmaker:
    """Session factory bound to the application engine."""
    return async_sessionmaker(
        bind=get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables() -> None:
    """Create missing tables; migrations remain the source of truth in production."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
