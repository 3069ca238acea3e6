"""User API — registration, login, profile.

- POST /user/register → create an account
- POST /user/login → email/password → session token (cookie + body)
- POST /user/logout → clear the session cookie
- GET /user/me → current user
- PUT /user/update → partial profile update
- DELETE /user/delete → delete the account (see UserService.delete)
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from docspace.auth.dependencies import CurrentIdentity, get_current_user
from docspace.auth.jwt import create_access_token
from docspace.auth.transport import clear_session_cookie, set_session_cookie
from docspace.config import Settings
from docspace.db.engine import get_db, get_settings
from docspace.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserRead,
    UserUpdate,
)
from docspace.services.user_service import UserService

router = APIRouter(prefix="/user")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, settings=settings)


@router.post("/register", response_model=UserRead, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(_svc)):
    """Create a new user account."""
    return await svc.register(
        fullname=body.fullname, email=body.email, password=body.password
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    svc: UserService = Depends(_svc),
):
    """Login with email and password → session token."""
    user = await svc.authenticate(body.email, body.password)
    token = create_access_token(user.id, settings=settings)
    set_session_cookie(response, token, settings)
    return LoginResponse(user=UserRead.model_validate(user), access_token=token)


@router.post("/logout")
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return {"logged_out": True}


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    return await svc.get(identity.user_id)


@router.put("/update", response_model=UserRead)
async def update_me(
    body: UserUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    return await svc.update(
        identity.user_id,
        fullname=body.fullname,
        email=body.email,
        password=body.password,
    )


@router.delete("/delete")
async def delete_me(
    response: Response,
    identity: CurrentIdentity = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    svc: UserService = Depends(_svc),
):
    await svc.delete(identity.user_id)
    clear_session_cookie(response, settings)
    return {"deleted": True}
