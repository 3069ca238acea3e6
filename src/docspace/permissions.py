"""Effective document permissions.

A document may be edited (and deleted) by exactly two identities: the
user who created it and the owner of the workspace it lives in. Everyone
else who can see it gets read-only access.

Permissions are never stored. Every read and update path recomputes
them from the two ownership relations through derive_permissions().
"""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docspace.auth.dependencies import CurrentIdentity
    from docspace.db.models import Document


@dataclass(frozen=True)
class Permissions:
    can_edit: bool
    can_delete: bool
    read_only: bool

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


def is_document_owner(identity: "CurrentIdentity", document: "Document") -> bool:
    return identity.user_id == document.author_id


def is_workspace_owner(identity: "CurrentIdentity", document: "Document") -> bool:
    """True when the identity owns the document's workspace.

    A document whose workspace row is gone has no workspace owner.
    """
    workspace = document.workspace
    return workspace is not None and identity.user_id == workspace.author_id


def derive_permissions(identity: "CurrentIdentity", document: "Document") -> Permissions:
    """Compute what `identity` may do with `document`.

    The document must have its `workspace` relationship loaded.
    """
    can_edit = is_document_owner(identity, document) or is_workspace_owner(
        identity, document
    )
    return Permissions(can_edit=can_edit, can_delete=can_edit, read_only=not can_edit)
