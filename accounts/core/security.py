"""
Security: password digests and opaque tokens.
No plain-text passwords are stored; the hashing scheme comes from settings so
legacy digests keep verifying while new ones can use a stronger scheme.
"""

import secrets
from collections.abc import Sequence

from passlib.context import CryptContext

from accounts.config import get_settings

settings = get_settings()


def build_password_context(schemes: Sequence[str], **options) -> CryptContext:
    """First scheme hashes new passwords; the others are accepted for verification only."""
    return CryptContext(schemes=list(schemes), deprecated="auto", **options)


pwd_context = build_password_context(settings.password_schemes)


def hash_password(password: str, context: CryptContext | None = None) -> str:
    """One-way hash for storage. Never store plain passwords."""
    return (context or pwd_context).hash(password)


def verify_password(plain: str, digest: str, context: CryptContext | None = None) -> bool:
    """Constant-time comparison against the stored digest."""
    if not digest:
        return False
    try:
        return (context or pwd_context).verify(plain, digest)
    except ValueError:
        # Digest not produced by any configured scheme
        return False


def needs_rehash(digest: str, context: CryptContext | None = None) -> bool:
    """True when the digest was made by a deprecated scheme."""
    return (context or pwd_context).needs_update(digest)


def new_token(nbytes: int | None = None) -> str:
    """Random hex token for session/auth use (64 bytes -> 128 hex chars by default)."""
    return secrets.token_hex(nbytes or settings.token_bytes)
