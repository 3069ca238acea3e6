"""Document API routes.

Single-document responses (get, update) carry the caller's permissions
so clients can switch between edit and read-only views without a second
request.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.auth.dependencies import CurrentIdentity, get_current_user
from docspace.config import Settings
from docspace.db.engine import get_db, get_settings
from docspace.db.models import Document
from docspace.permissions import Permissions
from docspace.schemas.document import (
    DocumentCreate,
    DocumentDetail,
    DocumentRead,
    DocumentUpdate,
    DocumentWorkspace,
    PermissionsRead,
)
from docspace.services.document_service import DocumentService

router = APIRouter(prefix="/document")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DocumentService:
    return DocumentService(db, settings=settings)


def _detail(document: Document, permissions: Permissions) -> DocumentDetail:
    workspace = document.workspace
    return DocumentDetail(
        **DocumentRead.model_validate(document).model_dump(),
        workspace=DocumentWorkspace.model_validate(workspace) if workspace else None,
        permissions=PermissionsRead(**permissions.as_dict()),
    )


@router.post("/create", response_model=DocumentRead, status_code=201)
async def create_document(
    body: DocumentCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    return await svc.create(
        identity,
        name=body.name,
        workspace_id=body.workspace_id,
        content=body.content,
    )


@router.get("/author", response_model=list[DocumentRead])
async def list_my_documents(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    """Documents the caller created, in any workspace."""
    return await svc.list_by_author(identity.user_id)


@router.get("/workspace/{workspace_id}", response_model=list[DocumentDetail])
async def list_workspace_documents(
    workspace_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    items = await svc.list_by_workspace(workspace_id, identity)
    return [_detail(document, permissions) for document, permissions in items]


@router.put("/update/{document_id}", response_model=DocumentDetail)
async def update_document(
    document_id: int,
    body: DocumentUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    document, permissions = await svc.update(
        document_id, identity, name=body.name, content=body.content
    )
    return _detail(document, permissions)


@router.get("/{document_id}", response_model=DocumentDetail)
async def get_document(
    document_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    document, permissions = await svc.get(document_id, identity)
    return _detail(document, permissions)


@router.delete("/{document_id}")
async def delete_document(
    document_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: DocumentService = Depends(_svc),
):
    await svc.delete(document_id, identity)
    return {"deleted": True}
