"""
Database Connection Management

Handles database connections and session management.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    AsyncEngine,
    async_sessionmaker
)

from ...core.config import DatabaseConfig
from ...core.exceptions import ConfigurationError
from ...core.models import Base

logger = logging.getLogger(__name__)

# Backends with an ON CONFLICT upsert
SUPPORTED_BACKENDS = ("postgresql", "sqlite")


class DatabaseConnection:
    """Manages database connections and sessions."""

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0
    ):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL
            echo: Whether to echo SQL statements
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections (ignored for SQLite)
        """
        # Handle Heroku postgres URL format
        if database_url.startswith("postgres://"):
            database_url = database_url.replace(
                "postgres://", "postgresql+asyncpg://", 1
            )

        backend = make_url(database_url).get_backend_name()
        if backend not in SUPPORTED_BACKENDS:
            raise ConfigurationError(
                f"Unsupported database backend: {backend}",
                config_key="DATABASE_URL"
            )

        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "DatabaseConnection":
        """Build a connection from database settings."""
        return cls(
            database_url=config.url,
            echo=config.echo,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow
        )

    @property
    def dialect_name(self) -> str:
        """Name of the SQL dialect in use."""
        if not self._engine:
            raise RuntimeError("Database not initialized")
        return self._engine.dialect.name

    async def initialize(self) -> None:
        """Initialize the database engine and session factory."""
        try:
            if self.database_url.startswith("sqlite"):
                # SQLite doesn't support pool parameters
                self._engine = create_async_engine(
                    self.database_url,
                    echo=self.echo,
                )
            else:
                self._engine = create_async_engine(
                    self.database_url,
                    echo=self.echo,
                    pool_size=self.pool_size,
                    max_overflow=self.max_overflow,
                    pool_pre_ping=True,  # Verify connections
                    pool_recycle=3600,   # Recycle connections after 1 hour
                )

            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            # Test connection
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    async def create_tables(self) -> None:
        """Create all database tables."""
        if not self._engine:
            raise RuntimeError("Database not initialized")

        # Import all models to ensure they're registered
        from ...domain.guild.models import Guild  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created successfully")

    async def shutdown(self) -> None:
        """Shutdown database connection."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection shutdown")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session.

        Commits on success and rolls back on error.

        Yields:
            Database session
        """
        if not self._session_factory:
            raise RuntimeError("Database not initialized")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """Check database health."""
        if not self._engine:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the database engine."""
        return self._engine
