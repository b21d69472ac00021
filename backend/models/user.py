"""User models for registration, login and session identity."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Core user model. Represents a document in the users collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str
    password: str  # bcrypt hash
    avatar: str | None = None
    date: datetime


class UserPublic(BaseModel):
    """What the API returns. Never includes the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str
    avatar: str | None
    date: datetime

    @classmethod
    def from_user(cls, user: User) -> UserPublic:
        """Convert internal User model to public API response."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            date=user.date,
        )


class UserSummary(BaseModel):
    """The slice of a user embedded when a profile is populated."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    avatar: str | None = None


class RegisterRequest(BaseModel):
    """
    What the client sends to register.
    Every field is optional here; presence and format are checked by
    engine.kernel.validation so errors come back field-keyed.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    password: str | None = None
    password2: str | None = None


class LoginRequest(BaseModel):
    """What the client sends to log in."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    """Successful login: a bearer token for subsequent requests."""

    success: bool = True
    token: str
