"""Repository for user operations."""

from __future__ import annotations

from typing import Any

from backend.db import get_store
from backend.errors import Conflict
from backend.models.user import User
from engine.kernel.mutations import new_user
from engine.kernel.storage import DuplicateKeyError
from engine.kernel.types import USERS


def _doc_to_user(doc: dict[str, Any]) -> User:
    """Convert a stored document to a User model."""
    return User.model_validate(doc)


class UserRepo:
    """All user-related store operations."""

    async def get(self, user_id: str) -> User | None:
        """
        Get a user by ID.

        Returns:
            User if found, None otherwise
        """
        doc = await get_store().get(USERS, user_id)
        return _doc_to_user(doc) if doc else None

    async def get_by_email(self, email: str) -> User | None:
        """
        Get a user by email address. Emails are stored lowercased.

        Returns:
            User if found, None otherwise
        """
        doc = await get_store().find_one(USERS, {"email": email.strip().lower()})
        return _doc_to_user(doc) if doc else None

    async def list_summaries(self) -> dict[str, dict[str, Any]]:
        """Map of user id -> {_id, name, avatar} for populating profiles."""
        docs = await get_store().find(USERS)
        return {d["_id"]: {"_id": d["_id"], "name": d["name"], "avatar": d.get("avatar")} for d in docs}

    async def create(self, name: str, email: str, password_hash: str, avatar: str) -> User:
        """
        Create a new user at registration.

        Raises:
            Conflict: If the email is already registered (store unique constraint)
        """
        doc = new_user(name.strip(), email.strip().lower(), password_hash, avatar)
        try:
            saved = await get_store().insert(USERS, doc)
        except DuplicateKeyError as e:
            raise Conflict("email", "Email already exists") from e
        return _doc_to_user(saved)

    async def delete(self, user_id: str) -> bool:
        """
        Delete a user.

        Returns:
            True if deleted, False if not found
        """
        return await get_store().delete(USERS, user_id)
