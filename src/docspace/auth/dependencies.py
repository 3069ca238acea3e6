"""FastAPI auth dependencies.

Used as Depends() in route handlers (or at include_router level) to
resolve the current identity from the request. The token is located by
the extractor configured on app.state, then handed to the AccessGate.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.auth.gate import AccessGate, CurrentIdentity
from docspace.db.engine import get_db

__all__ = ["CurrentIdentity", "get_current_user"]


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CurrentIdentity:
    """Resolve the current identity (401 if absent or invalid)."""
    token = request.app.state.token_extractor.extract(request)
    return await AccessGate(db, request.app.state.settings).resolve(token)
