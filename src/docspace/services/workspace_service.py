"""Workspace service — the workspace authority.

A workspace has exactly one owner, fixed at creation. Only the owner
may read, rename or delete it. Deleting a workspace deletes its
documents too: the owner already holds delete rights on every document
in it, so nothing is removed that they could not remove one by one.
"""

import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from docspace.auth.gate import CurrentIdentity
from docspace.db.models import Document, Workspace
from docspace.errors import Forbidden, InvalidInput, NotFound
from docspace.services.base import ServiceBase

logger = structlog.get_logger()


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Workspace name is required")
    return name


class WorkspaceService(ServiceBase):
    """Business logic for workspaces."""

    async def find(self, workspace_id: int) -> Workspace | None:
        result = await self._execute(
            select(Workspace)
            .where(Workspace.id == workspace_id)
            .options(selectinload(Workspace.author))
        )
        return result.scalars().first()

    async def _get_owned(self, workspace_id: int, requester: CurrentIdentity) -> Workspace:
        workspace = await self.find(workspace_id)
        if workspace is None:
            raise NotFound("Workspace not found")
        if workspace.author_id != requester.user_id:
            raise Forbidden("Not authorized to access this workspace")
        return workspace

    async def create(self, owner: CurrentIdentity, name: str) -> Workspace:
        workspace = Workspace(name=_clean_name(name), author_id=owner.user_id)
        self.db.add(workspace)
        await self._commit()
        logger.info(
            "workspace.created",
            workspace_id=workspace.id,
            author_id=owner.user_id,
        )
        return workspace

    async def get(self, workspace_id: int, requester: CurrentIdentity) -> Workspace:
        return await self._get_owned(workspace_id, requester)

    async def update(
        self, workspace_id: int, requester: CurrentIdentity, name: str
    ) -> Workspace:
        workspace = await self._get_owned(workspace_id, requester)
        workspace.name = _clean_name(name)
        await self._commit()
        logger.info("workspace.updated", workspace_id=workspace.id)
        return workspace

    async def delete(self, workspace_id: int, requester: CurrentIdentity) -> None:
        """Delete a workspace and every document in it."""
        await self._get_owned(workspace_id, requester)

        docs = await self._execute(
            delete(Document)
            .where(Document.workspace_id == workspace_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(
            delete(Workspace)
            .where(Workspace.id == workspace_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            # Removed by a concurrent request after our ownership check
            await self.db.rollback()
            raise NotFound("Workspace not found")

        await self._commit()
        logger.info(
            "workspace.deleted",
            workspace_id=workspace_id,
            documents_deleted=docs.rowcount,
        )

    async def list_all(self) -> list[Workspace]:
        """Every workspace, regardless of owner (admin listing)."""
        result = await self._execute(
            select(Workspace)
            .options(selectinload(Workspace.author))
            .order_by(Workspace.id)
        )
        return list(result.scalars().all())

    async def list_by_owner(self, owner_id: int) -> list[Workspace]:
        result = await self._execute(
            select(Workspace)
            .where(Workspace.author_id == owner_id)
            .options(selectinload(Workspace.author))
            .order_by(Workspace.id)
        )
        return list(result.scalars().all())
