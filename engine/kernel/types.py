"""
DevConnect Kernel -- Shared Types

Data classes and constants used across the mutation model, validation,
reducer, and storage adapters. These are the contracts that bind the
kernel together.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

USERS = "users"
PROFILES = "profiles"
POSTS = "posts"

# Store-level unique constraints, per collection.
UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {
    USERS: ("email",),
    PROFILES: ("handle", "user"),
    POSTS: (),
}

# ---------------------------------------------------------------------------
# Input allow-lists
# ---------------------------------------------------------------------------

PROFILE_FIELDS: tuple[str, ...] = (
    "handle",
    "company",
    "website",
    "location",
    "bio",
    "status",
    "githubUsername",
)

SOCIAL_FIELDS: tuple[str, ...] = (
    "youtube",
    "twitter",
    "facebook",
    "linkedIn",
    "instagram",
)

EXPERIENCE_FIELDS: tuple[str, ...] = (
    "title",
    "company",
    "location",
    "from",
    "to",
    "current",
    "description",
)

EDUCATION_FIELDS: tuple[str, ...] = (
    "school",
    "degree",
    "fieldOfStudy",
    "from",
    "to",
    "current",
    "description",
)

POST_FIELDS: tuple[str, ...] = ("text", "name", "avatar", "handle")

COMMENT_FIELDS: tuple[str, ...] = ("text", "name", "avatar", "handle")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class RequestStatus(StrEnum):
    """Lifecycle of the most recent fetch for a client-side slice."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class MutationResult:
    """
    Outcome of applying a mutation to an aggregate.

    `changed` is False when the mutation matched nothing (remove of an unknown
    id, duplicate like). Callers must not persist an unchanged aggregate.
    """

    document: dict[str, Any]
    changed: bool = True


@dataclass
class Action:
    """
    A client-side state transition request.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: Any = None
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "payload": self.payload}
        if self.meta:
            d["meta"] = self.meta
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Action:
        return cls(type=d["type"], payload=d.get("payload"), meta=d.get("meta", {}))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def new_id() -> str:
    """Generate a document or sub-document identifier."""
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now(UTC).isoformat()
