"""
Database Connection Module

Owns the SQLAlchemy async engine and session factory. A ``Database`` is
created by the application factory, opened on startup, stored on
``app.state.db`` and disposed on shutdown.
"""

import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


class Database:
    """Engine + session factory with an explicit open/close lifecycle."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            options: dict = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.url:
                options["poolclass"] = StaticPool
            return options
        return {
            "pool_size": 5,  # Connection pool size
            "max_overflow": 10,  # Extra connections when pool is full
            "pool_pre_ping": True,
        }

    async def connect(self) -> None:
        """Create the engine and all tables. Called once at startup."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self.url, echo=self.echo, **self._engine_options()
        )
        self._session_maker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Objects remain accessible after commit
        )

        # Register the models on Base.metadata before creating tables
        from foodorder import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def dispose(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database connections closed")

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("Database is not connected")
        return self._session_maker()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
