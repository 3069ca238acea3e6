"""Where the session token travels.

One strategy is chosen from settings.token_transport when the app is
built and stored on app.state.token_extractor:

- "cookie": HTTP-only, SameSite=Strict cookie set at login
- "header": Authorization: Bearer <token>

Login always sets the cookie and also returns the token in the body,
so either strategy can be used by clients.
"""

from typing import Optional, Protocol

from starlette.requests import Request
from starlette.responses import Response

from docspace.config import Settings


class TokenExtractor(Protocol):
    def extract(self, request: Request) -> Optional[str]:
        ...


class BearerHeaderTokenExtractor:
    """Reads `Authorization: Bearer <token>`."""

    def extract(self, request: Request) -> Optional[str]:
        authorization = request.headers.get("Authorization")
        if not authorization or not authorization.startswith("Bearer "):
            return None
        token = authorization[7:].strip()
        return token or None


class CookieTokenExtractor:
    """Reads the session cookie."""

    def __init__(self, cookie_name: str):
        self.cookie_name = cookie_name

    def extract(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.cookie_name) or None


def build_token_extractor(settings: Settings) -> TokenExtractor:
    if settings.token_transport == "header":
        return BearerHeaderTokenExtractor()
    return CookieTokenExtractor(settings.cookie_name)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
