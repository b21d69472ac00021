"""Repository for profile operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from backend.db import get_store
from backend.errors import Conflict
from backend.models.profile import Profile
from backend.repos.user_repo import UserRepo
from engine.kernel.mutations import new_profile
from engine.kernel.storage import DuplicateKeyError
from engine.kernel.types import PROFILES, MutationResult

logger = logging.getLogger(__name__)

HANDLE_TAKEN = "That handle already exists"

_CONFLICT_MESSAGES = {
    "handle": HANDLE_TAKEN,
    "user": "A profile already exists for this user",
}


def _doc_to_profile(doc: dict[str, Any], users: dict[str, dict[str, Any]]) -> Profile:
    """Convert a stored document to a Profile, populating the owning user's name/avatar."""
    populated = dict(doc)
    summary = users.get(str(doc.get("user")))
    if summary is not None:
        populated["user"] = summary
    return Profile.model_validate(populated)


class ProfileRepo:
    """All profile-related store operations."""

    def __init__(self) -> None:
        self.users = UserRepo()

    async def _populate(self, doc: dict[str, Any]) -> Profile:
        user = await self.users.get(str(doc["user"]))
        users = {}
        if user is not None:
            users[user.id] = {"_id": user.id, "name": user.name, "avatar": user.avatar}
        return _doc_to_profile(doc, users)

    async def find_for_user(self, user_id: str) -> dict[str, Any] | None:
        """Raw profile document for a user, or None."""
        return await get_store().find_one(PROFILES, {"user": str(user_id)})

    async def get_for_user(self, user_id: str) -> Profile | None:
        doc = await self.find_for_user(user_id)
        return await self._populate(doc) if doc else None

    async def get_by_handle(self, handle: str) -> Profile | None:
        doc = await get_store().find_one(PROFILES, {"handle": handle})
        return await self._populate(doc) if doc else None

    async def list_all(self) -> list[Profile]:
        docs = await get_store().find(PROFILES)
        if not docs:
            return []
        users = await self.users.list_summaries()
        return [_doc_to_profile(doc, users) for doc in docs]

    async def handle_taken(self, handle: str, user_id: str) -> bool:
        """
        True when another user's profile already uses `handle`.
        Fast-path check only; the store's unique index is authoritative.
        """
        doc = await get_store().find_one(PROFILES, {"handle": handle})
        return doc is not None and str(doc.get("user")) != str(user_id)

    async def create(self, fields: dict[str, Any]) -> Profile:
        """
        Create a profile from assembled fields.

        Raises:
            Conflict: If the handle (or the user's profile) already exists
        """
        try:
            saved = await get_store().insert(PROFILES, new_profile(fields))
        except DuplicateKeyError as e:
            raise Conflict(e.field, _CONFLICT_MESSAGES.get(e.field, "Already exists")) from e
        return await self._populate(saved)

    async def apply(
        self,
        user_id: str,
        mutate: Callable[[dict[str, Any]], MutationResult],
    ) -> Profile | None:
        """
        Load the user's profile, apply a mutation, persist if it changed.

        An unchanged result (e.g. removing an unknown experience id) is
        returned as-is without a write.

        Returns:
            Resulting Profile, or None if the user has no profile
        """
        doc = await self.find_for_user(user_id)
        if doc is None:
            return None

        result = mutate(doc)
        if not result.changed:
            logger.debug("Profile %s unchanged; skipping write", doc["_id"])
            return await self._populate(doc)

        try:
            saved = await get_store().replace(PROFILES, doc["_id"], result.document)
        except DuplicateKeyError as e:
            raise Conflict(e.field, _CONFLICT_MESSAGES.get(e.field, "Already exists")) from e
        if saved is None:
            return None
        return await self._populate(saved)

    async def delete_for_user(self, user_id: str) -> int:
        """Remove the user's profile. Returns the number removed."""
        return await get_store().delete_where(PROFILES, {"user": str(user_id)})
