# clientauth/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from clientauth.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

# ─── Base definition ──────────────────────────────────────────────────────────
# Parent class of every ORM model, holds the metadata
Base = declarative_base()
# ────────────────────────────────────────────────────────────────────────────────


def build_engine(url: str) -> AsyncEngine:
    """
    Create an async engine for ``url``.

    Pool sizing only applies to server databases; SQLite uses its own pool.
    """
    # Sync drivers are swapped for their async counterparts
    url = url.replace("postgresql+psycopg2", "postgresql+asyncpg")
    options = {"echo": settings.DB_ECHO, "future": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=30,
            pool_recycle=1800,
            pool_pre_ping=True,
        )
    logger.info(f"Connecting to database: {url.split('@')[-1]}")
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        expire_on_commit=False,
    )


try:
    engine = build_engine(settings.DATABASE_URL)
    AsyncSessionLocal = build_session_factory(engine)
    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


async def create_all(bind: AsyncEngine = None) -> None:
    """Create every table that does not exist yet."""
    # Registers the models on Base.metadata
    from clientauth.adapters.outbound.persistence import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def get_db_context(session_factory: async_sessionmaker = None) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with get_db_context() as db:
            result = await db.execute(select(ClientAuthorizationModel))
            rows = result.scalars().all()
        ```
    """
    session = (session_factory or AsyncSessionLocal)()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
