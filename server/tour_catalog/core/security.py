"""Password hashing and admin session tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from .config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted pbkdf2_sha256 hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """
    Check a password against a stored hash.

    When there is no stored hash a dummy verification is still performed,
    so unknown usernames cost the same time as wrong passwords.
    """
    if not password_hash:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def create_access_token(
    admin_id: str,
    username: str,
    expires_in: Optional[int] = None,
) -> str:
    """
    Issue a signed admin session token.

    Args:
        admin_id: Identifier of the admin document
        username: Admin username embedded in the claims
        expires_in: Lifetime in seconds, defaults to ``settings.token_ttl_seconds``

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(timezone.utc)
    ttl = expires_in if expires_in is not None else settings.token_ttl_seconds
    payload = {
        "sub": admin_id,
        "id": admin_id,
        "username": username,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a session token and return its claims.

    Raises:
        jwt.PyJWTError: If the signature is invalid or the token has expired
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
