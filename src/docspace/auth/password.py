"""Password hashing utilities.

bcrypt salts automatically and produces hashes starting with "$2b$".
The work factor is the caller's `rounds`, defaulting to
settings.bcrypt_rounds (12, ~100ms per hash). Passwords are truncated
to 72 bytes, bcrypt's limit.
"""

from typing import Optional

import bcrypt

from docspace.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
