"""
DevConnect Kernel -- Aggregate Mutations

Pure functions over aggregate documents (plain dicts as stored in the
document store). No IO. The input document is never modified; every
mutation returns a new document wrapped in a MutationResult.

Nested collections:
  profile.experience, profile.education  -- insert-front / remove-by-id
  post.likes                             -- one entry per user
  post.comments                          -- insert-front / remove-by-id
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from engine.kernel.types import (
    COMMENT_FIELDS,
    POST_FIELDS,
    PROFILE_FIELDS,
    SOCIAL_FIELDS,
    MutationResult,
    new_id,
    now_iso,
)

# ---------------------------------------------------------------------------
# Field selection
# ---------------------------------------------------------------------------


def pick_fields(data: dict[str, Any], allowed: Iterable[str]) -> dict[str, Any]:
    """
    Copy allow-listed keys out of an input mapping.
    Unknown keys are ignored. Strings are trimmed, and None or blank
    strings count as absent.
    """
    picked: dict[str, Any] = {}
    for key in allowed:
        value = data.get(key)
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            continue
        picked[key] = value
    return picked


def split_skills(skills: str | list[str]) -> list[str]:
    """Comma-separated input -> ordered list of trimmed, non-empty skills."""
    parts = skills.split(",") if isinstance(skills, str) else skills
    return [s.strip() for s in parts if s and s.strip()]


# ---------------------------------------------------------------------------
# Identifier matching (shared with the client reducer)
# ---------------------------------------------------------------------------


def same_id(item: dict[str, Any], item_id: Any) -> bool:
    return item_id is not None and str(item.get("_id")) == str(item_id)


def exclude_by_id(items: list[dict[str, Any]], item_id: Any) -> list[dict[str, Any]]:
    """Every item except those whose _id matches."""
    return [item for item in items if not same_id(item, item_id)]


def replace_by_id(items: list[dict[str, Any]], replacement: dict[str, Any]) -> list[dict[str, Any]]:
    """Swap in `replacement` where _id matches. Order preserved, nothing inserted."""
    item_id = replacement.get("_id")
    return [replacement if same_id(item, item_id) else item for item in items]


# ---------------------------------------------------------------------------
# Nested collections
# ---------------------------------------------------------------------------


def build_subdocument(data: dict[str, Any], allowed: Iterable[str]) -> dict[str, Any]:
    """New nested item: allow-listed fields plus a generated _id."""
    return {"_id": new_id(), **pick_fields(data, allowed)}


def insert_front(document: dict[str, Any], collection: str, item: dict[str, Any]) -> MutationResult:
    """
    Prepend `item` to document[collection].
    The new item becomes index 0; existing items keep their relative order.
    """
    doc = copy.deepcopy(document)
    doc[collection] = [item, *doc.get(collection, [])]
    return MutationResult(document=doc)


def remove_by_id(document: dict[str, Any], collection: str, item_id: str) -> MutationResult:
    """
    Drop every item in document[collection] whose _id matches.
    If nothing matched the original document comes back with changed=False.
    """
    items = document.get(collection, [])
    remaining = exclude_by_id(items, item_id)
    if len(remaining) == len(items):
        return MutationResult(document=document, changed=False)

    doc = copy.deepcopy(document)
    doc[collection] = copy.deepcopy(remaining)
    return MutationResult(document=doc)


def has_liked(post: dict[str, Any], user_id: str) -> bool:
    return any(str(like.get("user")) == str(user_id) for like in post.get("likes", []))


def add_like(post: dict[str, Any], user_id: str) -> MutationResult:
    """Record a like. A user who already likes the post is a no-op."""
    if has_liked(post, user_id):
        return MutationResult(document=post, changed=False)

    doc = copy.deepcopy(post)
    doc.setdefault("likes", []).append({"_id": new_id(), "user": str(user_id)})
    return MutationResult(document=doc)


def remove_like(post: dict[str, Any], user_id: str) -> MutationResult:
    """Withdraw a like. Unchanged when the user had not liked the post."""
    if not has_liked(post, user_id):
        return MutationResult(document=post, changed=False)

    doc = copy.deepcopy(post)
    doc["likes"] = [like for like in doc["likes"] if str(like.get("user")) != str(user_id)]
    return MutationResult(document=doc)


def add_comment(post: dict[str, Any], user_id: str, data: dict[str, Any]) -> MutationResult:
    comment = build_subdocument(data, COMMENT_FIELDS)
    comment["user"] = str(user_id)
    comment["date"] = now_iso()
    return insert_front(post, "comments", comment)


def remove_comment(post: dict[str, Any], comment_id: str) -> MutationResult:
    return remove_by_id(post, "comments", comment_id)


def find_by_id(items: list[dict[str, Any]], item_id: str) -> dict[str, Any] | None:
    for item in items:
        if same_id(item, item_id):
            return item
    return None


# ---------------------------------------------------------------------------
# Aggregate construction
# ---------------------------------------------------------------------------


def new_user(name: str, email: str, password_hash: str, avatar: str) -> dict[str, Any]:
    return {
        "_id": new_id(),
        "name": name,
        "email": email,
        "password": password_hash,
        "avatar": avatar,
        "date": now_iso(),
    }


def build_profile_fields(user_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """
    Assemble the settable profile fields from raw input.

    Standard fields come from a fixed allow-list, skills are split on
    commas, and social links are gathered into a `social` sub-mapping.
    """
    fields = pick_fields(data, PROFILE_FIELDS)
    fields["user"] = str(user_id)

    skills = data.get("skills")
    if skills is not None:
        fields["skills"] = split_skills(skills)

    social_input = data.get("social") if isinstance(data.get("social"), dict) else data
    fields["social"] = pick_fields(social_input, SOCIAL_FIELDS)
    return fields


def new_profile(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        "_id": new_id(),
        "skills": [],
        "social": {},
        **fields,
        "experience": [],
        "education": [],
        "date": now_iso(),
    }


def update_profile(profile: dict[str, Any], fields: dict[str, Any]) -> MutationResult:
    """
    Overwrite top-level profile fields with `fields`.
    Nested experience/education collections are never touched here.
    """
    doc = copy.deepcopy(profile)
    for key, value in fields.items():
        if key in ("_id", "experience", "education"):
            continue
        doc[key] = copy.deepcopy(value)
    return MutationResult(document=doc, changed=doc != profile)


def new_post(user_id: str, data: dict[str, Any]) -> dict[str, Any]:
    return {
        "_id": new_id(),
        "user": str(user_id),
        **pick_fields(data, POST_FIELDS),
        "likes": [],
        "comments": [],
        "date": now_iso(),
    }
