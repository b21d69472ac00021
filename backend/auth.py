"""
Authentication and authorization for DevConnect.

Password hashing, JWT issuance, and session resolution.
"""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime, timedelta
from typing import Annotated
from urllib.parse import urlencode

import bcrypt
import jwt
from fastapi import Cookie, Header

from backend import config
from backend.errors import Unauthenticated
from backend.models.user import User
from backend.repos.user_repo import UserRepo

user_repo = UserRepo()

# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=config.settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode()[:_BCRYPT_MAX_BYTES], salt).decode()


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode()[:_BCRYPT_MAX_BYTES], password_hash.encode())


def gravatar_url(email: str) -> str:
    """Avatar URI for an email: 200px, pg-rated, mystery-man fallback."""
    digest = hashlib.md5(email.strip().lower().encode(), usedforsecurity=False).hexdigest()
    query = urlencode({"s": "200", "r": "pg", "d": "mm"})
    return f"{config.settings.GRAVATAR_URL}/{digest}?{query}"


def create_jwt(user: User) -> str:
    """
    Create a JWT for a user session.

    Args:
        user: User to encode in the token

    Returns:
        Signed JWT string
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user.id,
        "name": user.name,
        "avatar": user.avatar,
        "exp": now + timedelta(hours=config.settings.JWT_EXPIRY_HOURS),
        "iat": now,
    }
    return jwt.encode(payload, config.settings.JWT_SECRET, algorithm=config.settings.JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and verify a JWT.

    Raises:
        Unauthenticated: If token is invalid or expired
    """
    try:
        return jwt.decode(token, config.settings.JWT_SECRET, algorithms=[config.settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise Unauthenticated("Session expired. Please sign in again.") from e
    except jwt.InvalidTokenError as e:
        raise Unauthenticated("Invalid session token. Please sign in again.") from e


async def get_current_user(
    session: Annotated[str | None, Cookie()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Tries the Bearer header first (CLI), then the session cookie (browser).

    Raises:
        Unauthenticated: If authentication fails
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization.removeprefix("Bearer ")
    elif session:
        token = session

    if not token:
        raise Unauthenticated()

    payload = decode_jwt(token)
    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated("Invalid session token. Please sign in again.")

    user = await user_repo.get(user_id)
    if not user:
        raise Unauthenticated("User not found. Please sign in again.")

    return user
