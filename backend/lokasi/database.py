"""
Lokasi API - Database Engine Setup
====================================

What:  Declarative base for ORM models and the async engine factory.
How:   `build_engine()` creates an async SQLAlchemy engine with connection
       pooling; `build_session_factory()` wraps it in an async_sessionmaker.
Who:   Used by LocationStore (services/location_store.py) and Alembic.
When:  The engine is built once, when LocationStore.connect() runs at startup.

Connection Pooling Strategy (server databases only):
    pool_size / max_overflow: from settings (DB_POOL_SIZE / DB_MAX_OVERFLOW)
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour
    SQLite URLs (tests, local demos) keep SQLAlchemy's default pool, which
    does not accept the sizing arguments.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers models with a shared metadata object, which Alembic and
    LocationStore.connect() use for schema management.
    """
    pass


def build_engine(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the async engine for the given URL.

    Args:
        database_url: Async SQLAlchemy URL (postgresql+asyncpg://, sqlite+aiosqlite://)
        pool_size: Persistent connections kept in the pool
        max_overflow: Extra connections allowed during spikes
        pool_pre_ping: Validate pooled connections before use
        echo: Log every SQL statement (DEBUG only)
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to `engine`; one session per store call."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
