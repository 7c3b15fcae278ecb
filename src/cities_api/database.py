"""Database connection and session management."""

import logging
import re
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def transform_database_url_for_asyncpg(url: str) -> str:
    """Transform database URL for asyncpg compatibility.

    asyncpg doesn't support 'sslmode' parameter - it uses 'ssl' instead.
    """
    return re.sub(r"sslmode=(\w+)", r"ssl=\1", url)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


class Store:
    """Owns the pooled engine and session factory for the city store.

    One instance is created at startup and shared by every request.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_url(cls, url: str, pool_size: int = 10) -> "Store":
        """Create a store for ``url`` with a pool of ``pool_size`` connections."""
        if url.startswith("sqlite"):
            kwargs: dict = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
                # In-memory SQLite lives only as long as its single connection
                kwargs["poolclass"] = StaticPool
            engine = create_async_engine(url, echo=False, **kwargs)
        else:
            engine = create_async_engine(
                transform_database_url_for_asyncpg(url),
                echo=False,
                pool_size=pool_size,
                pool_pre_ping=True,
            )
        logger.info(f"Store created for {engine.url.render_as_string(hide_password=True)}")
        return cls(engine)

    async def create_schema(self) -> None:
        """Create missing tables and indexes."""
        # Register models on the metadata before create_all
        from cities_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        from cities_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


def get_store(request: Request) -> Store:
    """Dependency returning the store owned by the running application."""
    return request.app.state.store


async def get_db(store: Store = Depends(get_store)) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session."""
    async with store.session_factory() as session:
        yield session
