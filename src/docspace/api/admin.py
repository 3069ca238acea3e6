"""Unfiltered listings of every workspace and document.

Only mounted when DOCSPACE_ENABLE_ADMIN_ROUTES is set; otherwise these
paths do not exist (404).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.config import Settings
from docspace.db.engine import get_db, get_settings
from docspace.schemas.document import DocumentRead
from docspace.schemas.workspace import WorkspaceRead, WorkspaceWithAuthor
from docspace.services.document_service import DocumentService
from docspace.services.workspace_service import WorkspaceService

router = APIRouter(prefix="/admin")


@router.get("/workspaces", response_model=list[WorkspaceWithAuthor])
async def list_all_workspaces(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    workspaces = await WorkspaceService(db, settings=settings).list_all()
    return [
        WorkspaceWithAuthor(
            **WorkspaceRead.model_validate(w).model_dump(),
            author_fullname=w.author.fullname if w.author else None,
        )
        for w in workspaces
    ]


@router.get("/documents", response_model=list[DocumentRead])
async def list_all_documents(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await DocumentService(db, settings=settings).list_all()
