"""
Database configuration and connection management.

Async SQLAlchemy engine (asyncpg for PostgreSQL) created lazily on first
use, one session per request.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings
from .models import TRIGRAM_INDEX_NAME, Base, PowerPlantRecord
from .search.owner_search import BackendCapabilities

logger = logging.getLogger(__name__)

POSTGRES_EXTENSIONS = ("unaccent", "pg_trgm")

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _safe_url(db_url: str) -> str:
    """Strip credentials for logging."""
    if "@" in db_url:
        scheme, _, rest = db_url.partition("://")
        return f"{scheme}://...@{rest.split('@', 1)[1]}"
    return db_url


def get_engine_options(db_url: str) -> dict:
    """
    Get database-specific engine arguments.

    Args:
        db_url: Database connection URL

    Returns:
        Keyword arguments for create_async_engine
    """
    options: dict = {"echo": settings.DB_ECHO}
    if db_url.startswith("sqlite"):
        return options
    options.update(
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )
    return options


def get_engine() -> AsyncEngine:
    """Get or create the async engine."""
    global _engine, _session_factory

    if _engine is None:
        db_url = settings.DATABASE_URL
        logger.info("Creating database engine for %s", _safe_url(db_url))
        _engine = create_async_engine(db_url, **get_engine_options(db_url))
        _session_factory = async_sessionmaker(
            _engine, expire_on_commit=False, autoflush=False
        )

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating the engine if needed."""
    get_engine()
    return _session_factory


async def close_db() -> None:
    """Dispose of the engine and its connection pool."""
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Disposing database engine")
        await _engine.dispose()
        _engine = None
        _session_factory = None


def detect_backend_capabilities(
    engine: AsyncEngine, allow_unaccent: bool = True
) -> BackendCapabilities:
    """
    Describe the substring matching features of the engine's backend.

    PostgreSQL gets accent folding (the extension is installed by init_db)
    unless disabled by configuration. Every SQL dialect supports ILIKE,
    SQLAlchemy emulates it with lower() LIKE lower() where needed.
    """
    is_postgres = engine.dialect.name == "postgresql"
    return BackendCapabilities(
        supports_accent_folding=is_postgres and allow_unaccent,
        supports_pattern_match=True,
    )


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """
    Create extensions, tables and indexes.

    Idempotent: every statement is guarded with IF NOT EXISTS / checkfirst.
    """
    engine = engine or get_engine()
    is_postgres = engine.dialect.name == "postgresql"

    logger.info("Initializing database schema (dialect=%s)", engine.dialect.name)
    async with engine.begin() as conn:
        if is_postgres:
            for extension in POSTGRES_EXTENSIONS:
                await conn.execute(text(f"CREATE EXTENSION IF NOT EXISTS {extension}"))

        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

        if is_postgres:
            await conn.execute(
                text(
                    f"CREATE INDEX IF NOT EXISTS {TRIGRAM_INDEX_NAME} "
                    f"ON {PowerPlantRecord.__tablename__} "
                    "USING gin (owner gin_trgm_ops)"
                )
            )
    logger.info("Database schema initialized")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session for dependency injection.

    Yields:
        SQLAlchemy async session, closed when the request finishes
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session
