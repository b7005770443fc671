"""
Database engine and session management.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from ...core.config import DatabaseConfig


IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:", "sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:")


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and hands out sessions"""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.logger = logging.getLogger(__name__)

        url = config.url
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

        engine_kwargs = {"echo": config.echo}
        if url in IN_MEMORY_URLS:
            # Every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_tables(self) -> None:
        """Create missing tables"""
        # Register the mapped classes on Base.metadata
        from . import orm  # noqa: F401

        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        self.logger.info("Database tables verified/created")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read-only session, closed on exit"""
        async with self.session_factory() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Session committed on success and rolled back on any exception"""
        async with self.session_factory.begin() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
        self.logger.info("Database connections closed")
