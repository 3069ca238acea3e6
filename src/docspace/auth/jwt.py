"""JWT session token creation and verification.

A session token carries only the user id (`sub`), issue time and expiry.
There is no refresh token: when it expires the user logs in again.

Both functions take the Settings of the app they serve; without one they
fall back to the process-wide docspace.config.settings.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from docspace.config import Settings, settings as default_settings


class TokenError(Exception):
    """Raised when token creation/verification fails."""


def create_access_token(
    user_id: int,
    expires_minutes: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed session token for `user_id`."""
    settings = settings or default_settings
    now = datetime.now(timezone.utc)
    expires = now + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload = {
        "sub": str(user_id),
        "exp": expires,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, *, settings: Optional[Settings] = None) -> dict:
    """Verify and decode a session token.

    Returns the payload dict on success. A token without an expiry or a
    subject is rejected. Raises TokenError on failure.
    """
    settings = settings or default_settings
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
