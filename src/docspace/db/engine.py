"""Async SQLAlchemy datastore handle.

A Datastore wraps one engine (connection pool) and its session factory.
It is built from settings in the app lifespan, stored on
app.state.datastore, and disposed at shutdown. There is no module-level
engine. Each request gets its own AsyncSession through get_db().
"""

from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from docspace.config import Settings
from docspace.db.models import Base


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Datastore:
    """Owns the engine and session factory for one database."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        if not _is_sqlite(url):
            # Connection pool: min 5, max 20 connections.
            engine_kwargs.setdefault("pool_size", 5)
            engine_kwargs.setdefault("max_overflow", 15)
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        if _is_sqlite(url):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def connect(self) -> None:
        """Open a pooled connection once so misconfiguration fails at startup."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self) -> None:
        await self.engine.dispose()

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: yields a session per request, auto-closes.

    Uncommitted work is rolled back when the session closes, so a request
    that fails halfway through leaves nothing behind.
    """
    datastore: Datastore = request.app.state.datastore
    async with datastore.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings the running app was built with."""
    return request.app.state.settings
