import logging
from typing import TypeAlias

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from atom_token.db.models import BaseModel
from atom_token.settings import DBSettings

__all__ = ("Database", "sm_type")
logger = logging.getLogger(__name__)
sm_type: TypeAlias = async_sessionmaker[AsyncSession]


class Database:
    """
    Store client: owns the async engine (connection pool) and the session factory.
    Created once on startup and shared between all requests.
    """

    def __init__(self, settings: DBSettings) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: sm_type | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not initialized. Call `initialize()` first.")

        return self._engine

    @property
    def session_factory(self) -> sm_type:
        if self._session_factory is None:
            raise RuntimeError("Database is not initialized. Call `initialize()` first.")

        return self._session_factory

    async def initialize(self) -> None:
        """Initialize database engine and session factory"""
        logger.info("[DB] Initializing database engine and session factory...")
        extra_kwargs: dict[str, str | int] = {"echo": self._settings.echo}
        if self._settings.pool_min_size:
            extra_kwargs["pool_size"] = self._settings.pool_min_size

        if self._settings.pool_max_size:
            extra_kwargs["max_overflow"] = self._settings.pool_max_size - (
                self._settings.pool_min_size or 5
            )

        try:
            self._engine = create_async_engine(self._settings.database_dsn, **extra_kwargs)
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
                class_=AsyncSession,
            )
        except Exception as exc:
            logger.error("[DB] Failed to initialize database: %r", exc)
            raise

        logger.info("[DB] Database engine and session factory initialized successfully")

    async def create_tables(self) -> None:
        """Creates token table (and its indexes) if they don't exist yet"""
        async with self.engine.begin() as connection:
            await connection.run_sync(BaseModel.metadata.create_all)

        logger.info("[DB] Tables created: %s", ", ".join(BaseModel.metadata.tables))

    async def close(self) -> None:
        """Dispose database engine and cleanup resources"""
        logger.info("[DB] Closing database engine...")
        self._session_factory = None
        if engine := self._engine:
            self._engine = None
            await engine.dispose(close=True)

        logger.info("[DB] Database engine closed successfully")
