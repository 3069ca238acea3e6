"""User service — the identity store.

Registration, credential checks, profile updates and account deletion.
Deleting a user resolves everything that points at them first (see
delete()), so no workspace or document is left referencing a missing
user.
"""

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from docspace.auth.password import hash_password, verify_password
from docspace.db.models import Document, User, Workspace
from docspace.errors import Conflict, InvalidInput, NotFound, Unauthenticated
from docspace.services.base import ServiceBase

logger = structlog.get_logger()


class UserService(ServiceBase):
    """Business logic for user accounts."""

    async def find(self, user_id: int) -> User | None:
        result = await self._execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    async def find_by_email(self, email: str) -> User | None:
        result = await self._execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get(self, user_id: int) -> User:
        user = await self.find(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def register(self, fullname: str, email: str, password: str) -> User:
        fullname = fullname.strip()
        email = email.strip()
        if not fullname or not email or not password:
            raise InvalidInput("All fields are required")

        if await self.find_by_email(email):
            raise Conflict("Email already registered")

        user = User(
            fullname=fullname,
            email=email,
            password_hash=hash_password(password, rounds=self.settings.bcrypt_rounds),
        )
        self.db.add(user)
        await self._commit_unique_email()
        logger.info("user.registered", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, else Unauthenticated.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        user = await self.find_by_email(email.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", email=email)
            raise Unauthenticated("Invalid credentials")
        return user

    async def update(
        self,
        user_id: int,
        fullname: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        user = await self.get(user_id)

        if fullname is not None:
            if not fullname.strip():
                raise InvalidInput("fullname cannot be empty")
            user.fullname = fullname.strip()
        if email is not None and email.strip() != user.email:
            email = email.strip()
            if not email:
                raise InvalidInput("email cannot be empty")
            if await self.find_by_email(email):
                raise Conflict("Email already registered")
            user.email = email
        if password is not None:
            user.password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)

        await self._commit_unique_email()
        logger.info("user.updated", user_id=user.id)
        return user

    async def delete(self, user_id: int) -> None:
        """Delete a user and resolve what they own or authored.

        1. Workspaces they own are deleted along with every document in them.
        2. Documents they wrote in someone else's workspace are handed to
           that workspace's owner, who already had edit rights on them.
        3. The user row is deleted.
        """
        user = await self.get(user_id)

        owned = select(Workspace.id).where(Workspace.author_id == user.id)
        await self._execute(
            delete(Document)
            .where(Document.workspace_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        await self._execute(
            delete(Workspace)
            .where(Workspace.author_id == user.id)
            .execution_options(synchronize_session=False)
        )

        reassigned = await self._execute(
            update(Document)
            .where(Document.author_id == user.id)
            .values(
                author_id=select(Workspace.author_id)
                .where(Workspace.id == Document.workspace_id)
                .scalar_subquery()
            )
            .execution_options(synchronize_session=False)
        )

        await self._execute(delete(User).where(User.id == user.id))
        await self._commit()
        logger.info(
            "user.deleted",
            user_id=user_id,
            documents_reassigned=reassigned.rowcount,
        )

    async def _commit_unique_email(self) -> None:
        # Two concurrent registrations can both pass find_by_email();
        # the unique constraint decides.
        try:
            await self._commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Email already registered")
