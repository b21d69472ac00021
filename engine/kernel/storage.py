"""
DevConnect Kernel -- Document Storage

Storage protocol for aggregate documents, grouped into named collections
(users, profiles, posts). Every document is a JSON-compatible dict keyed
by its `_id`.

Implement with Postgres for production (postgres_storage.py), or in-memory
for tests and local development.
"""

from __future__ import annotations

import copy
from typing import Any

from engine.kernel.types import UNIQUE_FIELDS

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DuplicateKeyError(Exception):
    """A write would violate a store-level unique constraint."""

    def __init__(self, collection: str, field: str):
        super().__init__(f"duplicate {collection}.{field}")
        self.collection = collection
        self.field = field


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class DocumentStore:
    """
    Abstract storage interface.

    Filters are equality matches on top-level document fields.
    Writes raise DuplicateKeyError when a unique field collides with
    another document in the same collection.
    """

    async def find(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
        *,
        sort_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Every document matching `filter` (all documents when None)."""
        raise NotImplementedError

    async def find_one(self, collection: str, filter: dict[str, Any]) -> dict[str, Any] | None:
        """First document matching `filter`. Returns None if not found."""
        raise NotImplementedError

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Fetch a document by id. Returns None if not found."""
        raise NotImplementedError

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """Create a document. The document must carry its own `_id`."""
        raise NotImplementedError

    async def replace(self, collection: str, doc_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        """Overwrite a document by id. Returns None if it does not exist."""
        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Remove a document by id. Returns True if something was removed."""
        raise NotImplementedError

    async def delete_where(self, collection: str, filter: dict[str, Any]) -> int:
        """Remove every document matching `filter`. Returns the count removed."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release any held resources."""
        return None


class MemoryStore(DocumentStore):
    """In-memory storage for testing and local development."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.write_count = 0

    def _coll(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.setdefault(collection, {})

    def _check_unique(self, collection: str, document: dict[str, Any]) -> None:
        for field in UNIQUE_FIELDS.get(collection, ()):
            value = document.get(field)
            if value is None:
                continue
            for other in self._coll(collection).values():
                if other["_id"] != document["_id"] and other.get(field) == value:
                    raise DuplicateKeyError(collection, field)

    async def find(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
        *,
        sort_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        docs = [d for d in self._coll(collection).values() if _matches(d, filter)]
        if sort_by:
            docs.sort(key=lambda d: (d.get(sort_by) is None, d.get(sort_by) or ""), reverse=descending)
        return copy.deepcopy(docs)

    async def find_one(self, collection: str, filter: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self._coll(collection).values():
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._coll(collection).get(str(doc_id))
        return copy.deepcopy(doc) if doc is not None else None

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        self._check_unique(collection, document)
        self._coll(collection)[str(document["_id"])] = copy.deepcopy(document)
        self.write_count += 1
        return copy.deepcopy(document)

    async def replace(self, collection: str, doc_id: str, document: dict[str, Any]) -> dict[str, Any] | None:
        coll = self._coll(collection)
        if str(doc_id) not in coll:
            return None
        stored = {**copy.deepcopy(document), "_id": str(doc_id)}
        self._check_unique(collection, stored)
        coll[str(doc_id)] = stored
        self.write_count += 1
        return copy.deepcopy(stored)

    async def delete(self, collection: str, doc_id: str) -> bool:
        removed = self._coll(collection).pop(str(doc_id), None)
        if removed is None:
            return False
        self.write_count += 1
        return True

    async def delete_where(self, collection: str, filter: dict[str, Any]) -> int:
        coll = self._coll(collection)
        doomed = [doc_id for doc_id, doc in coll.items() if _matches(doc, filter)]
        for doc_id in doomed:
            del coll[doc_id]
        self.write_count += len(doomed)
        return len(doomed)


def _matches(document: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    if not filter:
        return True
    return all(document.get(key) == value for key, value in filter.items())
