"""Pydantic schemas for documents and their derived permissions."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DocumentCreate(BaseModel):
    name: str = Field(..., max_length=200)
    content: Optional[str] = None
    workspace_id: int


class DocumentUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None


class PermissionsRead(BaseModel):
    can_edit: bool
    can_delete: bool
    read_only: bool


class DocumentAuthor(BaseModel):
    id: int
    fullname: str

    model_config = {"from_attributes": True}


class DocumentWorkspace(BaseModel):
    id: int
    name: str
    author_id: int

    model_config = {"from_attributes": True}


class DocumentRead(BaseModel):
    id: int
    name: str
    content: str
    workspace_id: int
    author_id: int
    created_at: datetime
    updated_at: datetime
    author: Optional[DocumentAuthor] = None

    model_config = {"from_attributes": True}


class DocumentDetail(DocumentRead):
    """A document as seen by one requester."""
    workspace: Optional[DocumentWorkspace] = None
    permissions: PermissionsRead
