"""Repository for post operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from backend.db import get_store
from backend.models.post import Post
from engine.kernel.mutations import new_post
from engine.kernel.types import POSTS, MutationResult

logger = logging.getLogger(__name__)


def _doc_to_post(doc: dict[str, Any]) -> Post:
    """Convert a stored document to a Post model."""
    return Post.model_validate(doc)


class PostRepo:
    """All post-related store operations."""

    async def list_all(self) -> list[Post]:
        """
        List every post.

        Returns:
            Posts ordered newest first
        """
        docs = await get_store().find(POSTS, sort_by="date", descending=True)
        return [_doc_to_post(doc) for doc in docs]

    async def get_document(self, post_id: str) -> dict[str, Any] | None:
        return await get_store().get(POSTS, post_id)

    async def get(self, post_id: str) -> Post | None:
        doc = await self.get_document(post_id)
        return _doc_to_post(doc) if doc else None

    async def create(self, user_id: str, data: dict[str, Any]) -> Post:
        saved = await get_store().insert(POSTS, new_post(user_id, data))
        return _doc_to_post(saved)

    async def delete(self, post_id: str) -> bool:
        return await get_store().delete(POSTS, post_id)

    async def apply(
        self,
        post_id: str,
        mutate: Callable[[dict[str, Any]], MutationResult],
    ) -> Post | None:
        """
        Load a post, apply a mutation, persist if it changed.

        Returns:
            Resulting Post, or None if the post does not exist
        """
        doc = await self.get_document(post_id)
        if doc is None:
            return None

        result = mutate(doc)
        if not result.changed:
            logger.debug("Post %s unchanged; skipping write", post_id)
            return _doc_to_post(doc)

        saved = await get_store().replace(POSTS, post_id, result.document)
        return _doc_to_post(saved) if saved else None
