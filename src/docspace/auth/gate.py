"""Access Gate — resolves a session token to an identity.

Runs before any workspace or document authority. Every failure is
Unauthenticated: missing token, bad signature, expired token, a payload
without a usable subject, or a subject whose user no longer exists.
"""

from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.auth.jwt import TokenError, verify_token
from docspace.config import Settings
from docspace.errors import Unauthenticated
from docspace.services.user_service import UserService

logger = structlog.get_logger()


class CurrentIdentity:
    """The authenticated user making the request.

    Only the user id is carried, no roles or scopes. Workspace and
    document authorities derive everything else from ownership.
    """

    def __init__(self, user_id: int):
        self.user_id = user_id

    def __eq__(self, other) -> bool:
        return isinstance(other, CurrentIdentity) and other.user_id == self.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id})"


class AccessGate:
    """Read-only: looks the subject up in the identity store, writes nothing."""

    def __init__(self, db: AsyncSession, settings: Optional[Settings] = None):
        self.users = UserService(db, settings=settings)
        self.settings = self.users.settings

    async def resolve(self, token: Optional[str]) -> CurrentIdentity:
        if not token:
            raise Unauthenticated("Authentication required")

        try:
            payload = verify_token(token, settings=self.settings)
        except TokenError as e:
            raise Unauthenticated(str(e))

        subject = payload.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise Unauthenticated("Invalid token payload")

        user = await self.users.find(user_id)
        if user is None:
            logger.info("auth.unknown_subject", user_id=user_id)
            raise Unauthenticated("Invalid token")

        return CurrentIdentity(user_id=user.id)
