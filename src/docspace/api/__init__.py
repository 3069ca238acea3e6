"""API route aggregation.

All routers registered here get mounted in main.py.

Auth is applied at the include_router level using FastAPI's
dependencies parameter for routers where every route is protected.
The user router mixes open routes (register, login, logout) with
protected ones, so it declares auth per route.
"""

from fastapi import APIRouter, Depends

from docspace.api.admin import router as admin_router
from docspace.api.documents import router as documents_router
from docspace.api.health import router as health_router
from docspace.api.users import router as users_router
from docspace.api.workspaces import router as workspaces_router
from docspace.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]


def build_api_router(enable_admin_routes: bool = False) -> APIRouter:
    api_router = APIRouter(prefix="/api/v1")

    # Open routes, no auth required
    api_router.include_router(health_router, tags=["health"])

    # Mixed: register/login/logout open, the rest per-route
    api_router.include_router(users_router, tags=["users"])

    # Protected routes require a valid session token
    api_router.include_router(workspaces_router, tags=["workspaces"], dependencies=_auth)
    api_router.include_router(documents_router, tags=["documents"], dependencies=_auth)

    if enable_admin_routes:
        api_router.include_router(admin_router, tags=["admin"], dependencies=_auth)

    return api_router
