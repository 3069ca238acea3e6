"""Shared plumbing for the service layer.

Every datastore round-trip a service makes goes through _execute /
_commit, which bound it by db_timeout_seconds of the Settings the
service was built with (the app's, or the process-wide default). A hung
call surfaces as DatastoreTimeout (500) instead of blocking the request.
"""

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.config import Settings, settings as default_settings
from docspace.errors import DatastoreTimeout

logger = structlog.get_logger()

T = TypeVar("T")


class ServiceBase:
    def __init__(
        self,
        db: AsyncSession,
        timeout: float | None = None,
        settings: Settings | None = None,
    ):
        self.db = db
        self.settings = settings or default_settings
        self.timeout = timeout if timeout is not None else self.settings.db_timeout_seconds

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("datastore.timeout", timeout=self.timeout)
            raise DatastoreTimeout()

    async def _execute(self, statement: Any):
        return await self._bounded(self.db.execute(statement))

    async def _commit(self) -> None:
        await self._bounded(self.db.commit())
