"""Workspace API routes.

Routes translate HTTP to WorkspaceService calls; ownership checks and
errors (404/403/400) come from the service.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.auth.dependencies import CurrentIdentity, get_current_user
from docspace.config import Settings
from docspace.db.engine import get_db, get_settings
from docspace.schemas.workspace import WorkspaceCreate, WorkspaceRead, WorkspaceUpdate
from docspace.services.workspace_service import WorkspaceService

router = APIRouter(prefix="/workspace")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> WorkspaceService:
    return WorkspaceService(db, settings=settings)


@router.post("/create", response_model=WorkspaceRead, status_code=201)
async def create_workspace(
    body: WorkspaceCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: WorkspaceService = Depends(_svc),
):
    """Create a workspace owned by the caller."""
    return await svc.create(identity, body.name)


@router.get("/all", response_model=list[WorkspaceRead])
async def list_my_workspaces(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: WorkspaceService = Depends(_svc),
):
    """Workspaces owned by the caller."""
    return await svc.list_by_owner(identity.user_id)


@router.put("/update", response_model=WorkspaceRead)
async def update_workspace(
    body: WorkspaceUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: WorkspaceService = Depends(_svc),
):
    return await svc.update(body.id, identity, body.name)


@router.get("/{workspace_id}", response_model=WorkspaceRead)
async def get_workspace(
    workspace_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: WorkspaceService = Depends(_svc),
):
    return await svc.get(workspace_id, identity)


@router.delete("/{workspace_id}")
async def delete_workspace(
    workspace_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: WorkspaceService = Depends(_svc),
):
    """Delete a workspace together with its documents."""
    await svc.delete(workspace_id, identity)
    return {"deleted": True}
