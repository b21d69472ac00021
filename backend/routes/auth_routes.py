"""User routes -- register, login, logout, current user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from backend import config
from backend.auth import check_password, create_jwt, get_current_user, gravatar_url, hash_password
from backend.errors import Conflict, CredentialError, NotFound, ValidationFailed
from backend.models.profile import SuccessResponse
from backend.models.user import LoginRequest, LoginResponse, RegisterRequest, User, UserPublic
from backend.repos.user_repo import UserRepo
from engine.kernel.validation import validate_login, validate_register

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])
user_repo = UserRepo()


@router.post("/register", status_code=201)
async def register(req: RegisterRequest) -> UserPublic:
    """
    Register a new user.

    The email pre-check gives the friendly message; the store's unique
    constraint catches the race where two registrations interleave.
    """
    errors = validate_register(req.model_dump())
    if errors:
        raise ValidationFailed(errors)

    if await user_repo.get_by_email(req.email):
        raise Conflict("email", "Email already exists")

    user = await user_repo.create(
        name=req.name,
        email=req.email,
        password_hash=hash_password(req.password),
        avatar=gravatar_url(req.email),
    )
    logger.info("Registered user %s", user.id)
    return UserPublic.from_user(user)


@router.post("/login", status_code=200)
async def login(req: LoginRequest, response: Response) -> LoginResponse:
    """Check credentials and issue a session token (also set as a cookie)."""
    errors = validate_login(req.model_dump())
    if errors:
        raise ValidationFailed(errors)

    user = await user_repo.get_by_email(req.email)
    if not user:
        raise NotFound({"email": "User not found"})

    if not check_password(req.password, user.password):
        raise CredentialError({"password": "Password incorrect"})

    token = create_jwt(user)
    response.set_cookie(
        key="session",
        value=token,
        httponly=True,
        secure=config.settings.ENVIRONMENT != "development",
        samesite="lax",
        max_age=config.settings.JWT_EXPIRY_HOURS * 3600,
    )
    return LoginResponse(token=f"Bearer {token}")


@router.post("/logout", status_code=200)
async def logout(response: Response) -> SuccessResponse:
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie("session")
    return SuccessResponse()


@router.get("/current", status_code=200)
async def current_user(user: User = Depends(get_current_user)) -> UserPublic:
    """Return the authenticated user."""
    return UserPublic.from_user(user)
