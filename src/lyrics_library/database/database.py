"""
Database Engine Management

Owns the SQLAlchemy async engine and session factory for the track store.
PostgreSQL (asyncpg) in deployments, SQLite (aiosqlite) for local runs and tests.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lyrics_library.config import DatabaseSettings
from lyrics_library.database.base import Base
from lyrics_library.logging import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """Lazily built async engine plus session factory."""

    def __init__(self, config: DatabaseSettings):
        self.config = config
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self._initialized = False

    @property
    def is_sqlite(self) -> bool:
        return self.config.url.startswith("sqlite")

    def _engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": self.config.echo}
        # SQLite uses a static/singleton pool that rejects sizing arguments.
        if not self.is_sqlite:
            options.update(
                pool_size=self.config.pool_size,
                max_overflow=self.config.max_overflow,
                pool_timeout=self.config.pool_timeout,
                pool_recycle=self.config.pool_recycle,
                pool_pre_ping=self.config.pool_pre_ping,
            )
        return options

    def initialize(self) -> None:
        """Initialize database engine and session factory"""
        if self._initialized:
            return

        self.engine = create_async_engine(self.config.url, **self._engine_options())
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

        self._initialized = True
        logger.info("database_initialized", dialect=self.engine.dialect.name)

    async def create_tables(self) -> None:
        """Create the schema if it does not exist yet."""
        self.initialize()
        assert self.engine is not None

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("database_tables_created")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get database session context manager"""
        self.initialize()
        assert self.session_factory is not None

        async with self.session_factory() as session:
            try:
                yield session
            except Exception as exc:
                await session.rollback()
                logger.debug("database_session_rolled_back", error=str(exc))
                raise

    async def health_check(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            async with self.get_session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as exc:
            logger.error("database_health_check_failed", error=str(exc))
            return False

    async def close(self) -> None:
        """Close database connections"""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            self._initialized = False
            logger.info("database_closed")
