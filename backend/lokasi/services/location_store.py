"""
Lokasi API - Location Store
=============================

What:  Document-style CRUD interface over the `lokasis` table.
How:   Owns the async SQLAlchemy engine and session factory. Every operation
       opens its own session, runs a single statement, commits, and returns
       plain dicts in the API field layout.
Who:   Constructed once by create_app(), injected into LocationService.
When:  connect() runs once during application startup; the CRUD methods run
       once per request.

Operations:
    find_one(id)            → dict | None
    find_all()              → list[dict]
    insert_one(doc)         → None
    update_one(id, fields)  → number of matched records (0 or 1)
    delete_one(id)          → number of deleted records (0 or 1)

Error Handling:
    SQLAlchemyError from a CRUD call is re-raised as StoreError carrying the
    driver message. Failures inside connect() (including the timeout) raise
    ConfigurationError, which aborts startup. No retries happen at this layer.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lokasi.database import Base, build_engine, build_session_factory
from lokasi.exceptions import ConfigurationError, ServiceUnavailableError, StoreError
from lokasi.models.location import Location

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("nama", "kategori", "deskripsi", "koordinat")


class LocationStore:
    """
    Long-lived handle to the location table.

    The engine is created lazily by connect(), guarded so it runs at most once
    per store instance; the handle is not reassigned until close().
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        connect_timeout: float = 10.0,
        create_schema: bool = True,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_pre_ping = pool_pre_ping
        self.connect_timeout = connect_timeout
        self.create_schema = create_schema
        self.echo = echo

        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._connect_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings) -> "LocationStore":
        """Build a store from the application Settings object."""
        return cls(
            database_url=settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            connect_timeout=settings.db_connect_timeout,
            create_schema=settings.db_create_schema,
            echo=settings.log_level == "DEBUG",
        )

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    async def connect(self) -> None:
        """
        Create the engine, verify it with a ping, and create the schema.

        No-op when already connected. The ping and schema creation share a
        bounded wait of `connect_timeout` seconds.

        Raises:
            ConfigurationError: No database URL, or the database could not be
                reached within the timeout.
        """
        async with self._connect_lock:
            if self.is_connected:
                return

            if not self.database_url:
                raise ConfigurationError("DATABASE_URL is not set; cannot connect to the location store")

            engine = build_engine(
                self.database_url,
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=self.pool_pre_ping,
                echo=self.echo,
            )
            try:
                await asyncio.wait_for(self._initialize(engine), timeout=self.connect_timeout)
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                await engine.dispose()
                logger.error("Could not connect to the location store: %s", str(e) or type(e).__name__)
                raise ConfigurationError(
                    f"Could not connect to the location store: {str(e) or type(e).__name__}",
                    context={"error_type": type(e).__name__},
                ) from e

            self._engine = engine
            self._session_factory = build_session_factory(engine)
            logger.info("Connected to location store (%s)", engine.url.render_as_string(hide_password=True))

    async def _initialize(self, engine: AsyncEngine) -> None:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if self.create_schema:
                await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """True when the store answers `SELECT 1`; never raises."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Location store ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Location store connections closed")

    def _session(self) -> AsyncSession:
        if self._session_factory is None:
            raise ServiceUnavailableError()
        return self._session_factory()

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def find_one(self, location_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one location by id; None when absent."""
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(Location).where(Location.id == location_id)
                )
                row = result.scalar_one_or_none()
                return row.to_document() if row is not None else None
        except SQLAlchemyError as e:
            raise self._store_error("find_one", e)

    async def find_all(self) -> List[Dict[str, Any]]:
        """Fetch every location in id order (creation order within one process)."""
        try:
            async with self._session() as session:
                result = await session.execute(select(Location).order_by(Location.id))
                return [row.to_document() for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise self._store_error("find_all", e)

    async def insert_one(self, document: Dict[str, Any]) -> None:
        """Insert a new location; `document["_id"]` must already be set."""
        try:
            async with self._session() as session:
                session.add(
                    Location(
                        id=document["_id"],
                        nama=document["nama"],
                        kategori=document["kategori"],
                        deskripsi=document["deskripsi"],
                        koordinat=document["koordinat"],
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise self._store_error("insert_one", e)

    async def update_one(self, location_id: str, fields: Dict[str, Any]) -> int:
        """
        Overwrite the descriptive fields of one location.

        Returns:
            The number of matched records (0 when the id does not exist).
        """
        values = {name: fields[name] for name in UPDATABLE_FIELDS if name in fields}
        try:
            async with self._session() as session:
                result = await session.execute(
                    update(Location).where(Location.id == location_id).values(**values)
                )
                await session.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            raise self._store_error("update_one", e)

    async def delete_one(self, location_id: str) -> int:
        """Delete one location; returns the number of deleted records."""
        try:
            async with self._session() as session:
                result = await session.execute(
                    delete(Location).where(Location.id == location_id)
                )
                await session.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            raise self._store_error("delete_one", e)

    @staticmethod
    def _store_error(operation: str, error: Exception) -> StoreError:
        logger.error("Location store %s failed: %s", operation, str(error))
        return StoreError(
            message=str(error),
            operation=operation,
            context={"error_type": type(error).__name__},
        )
