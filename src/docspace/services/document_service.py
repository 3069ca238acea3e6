"""Document service — the document authority.

Effective editors of a document are its author and the owner of its
workspace; see docspace.permissions. Any authenticated identity may read
a document, but only an editor may change or delete it.

Every read and update returns the document together with the
requester's Permissions, recomputed on the spot.
"""

import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from docspace.auth.gate import CurrentIdentity
from docspace.db.models import Document, Workspace
from docspace.errors import Forbidden, InvalidInput, NotFound
from docspace.permissions import (
    Permissions,
    derive_permissions,
    is_document_owner,
    is_workspace_owner,
)
from docspace.services.base import ServiceBase

logger = structlog.get_logger()

_LOAD_OPTIONS = (
    selectinload(Document.author),
    selectinload(Document.workspace),
)


class DocumentService(ServiceBase):
    """Business logic for documents."""

    async def find(self, document_id: int) -> Document | None:
        result = await self._execute(
            select(Document)
            .where(Document.id == document_id)
            .options(*_LOAD_OPTIONS)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def _get(self, document_id: int) -> Document:
        document = await self.find(document_id)
        if document is None:
            raise NotFound("Document not found")
        return document

    async def create(
        self,
        author: CurrentIdentity,
        name: str,
        workspace_id: int,
        content: str | None = None,
    ) -> Document:
        """Create a document in an existing workspace.

        The author does not have to own the workspace; its owner gains
        edit rights over the new document either way.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Document name is required")
        if workspace_id is None:
            raise InvalidInput("workspace_id is required")

        workspace = await self._bounded(self.db.get(Workspace, workspace_id))
        if workspace is None:
            raise NotFound("Workspace not found")

        document = Document(
            name=name,
            content=content or "",
            workspace_id=workspace.id,
            author_id=author.user_id,
        )
        self.db.add(document)
        await self._commit()
        logger.info(
            "document.created",
            document_id=document.id,
            workspace_id=workspace.id,
            author_id=author.user_id,
        )
        return await self._get(document.id)

    async def get(
        self, document_id: int, requester: CurrentIdentity
    ) -> tuple[Document, Permissions]:
        document = await self._get(document_id)
        return document, derive_permissions(requester, document)

    async def update(
        self,
        document_id: int,
        requester: CurrentIdentity,
        name: str | None = None,
        content: str | None = None,
    ) -> tuple[Document, Permissions]:
        """Apply a partial patch. Fields left as None are unchanged."""
        document = await self._get(document_id)
        if not derive_permissions(requester, document).can_edit:
            raise Forbidden("Not authorized to edit this document. You can only view it.")

        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidInput("Document name cannot be empty")
            document.name = name
        if content is not None:
            document.content = content

        await self._commit()
        logger.info("document.updated", document_id=document.id, user_id=requester.user_id)

        document = await self._get(document_id)
        return document, derive_permissions(requester, document)

    async def delete(self, document_id: int, requester: CurrentIdentity) -> None:
        document = await self._get(document_id)
        if not (
            is_document_owner(requester, document)
            or is_workspace_owner(requester, document)
        ):
            raise Forbidden("Not authorized to delete this document")

        result = await self._execute(
            delete(Document)
            .where(Document.id == document_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            # Removed by a concurrent request after our permission check
            await self.db.rollback()
            raise NotFound("Document not found")

        await self._commit()
        logger.info("document.deleted", document_id=document_id, user_id=requester.user_id)

    async def list_all(self) -> list[Document]:
        """Every document, regardless of workspace or author (admin listing)."""
        result = await self._execute(
            select(Document).options(*_LOAD_OPTIONS).order_by(Document.id)
        )
        return list(result.scalars().all())

    async def list_by_author(self, author_id: int) -> list[Document]:
        result = await self._execute(
            select(Document)
            .where(Document.author_id == author_id)
            .options(*_LOAD_OPTIONS)
            .order_by(Document.id)
        )
        return list(result.scalars().all())

    async def list_by_workspace(
        self, workspace_id: int, requester: CurrentIdentity
    ) -> list[tuple[Document, Permissions]]:
        """Every document in a workspace, with the requester's permissions.

        A missing workspace is NotFound, never an empty list.
        """
        workspace = await self._bounded(self.db.get(Workspace, workspace_id))
        if workspace is None:
            raise NotFound("Workspace not found")

        result = await self._execute(
            select(Document)
            .where(Document.workspace_id == workspace_id)
            .options(*_LOAD_OPTIONS)
            .order_by(Document.id)
        )
        return [
            (document, derive_permissions(requester, document))
            for document in result.scalars().all()
        ]
