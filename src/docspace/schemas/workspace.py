"""Pydantic schemas for workspaces."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WorkspaceCreate(BaseModel):
    # Emptiness is checked by the service so the rule holds off-HTTP too
    name: str = Field(..., max_length=100)


class WorkspaceUpdate(BaseModel):
    id: int
    name: str = Field(..., max_length=100)


class WorkspaceRead(BaseModel):
    id: int
    name: str
    author_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WorkspaceWithAuthor(WorkspaceRead):
    """Admin listing row, includes the owner's display name."""
    author_fullname: Optional[str] = None
