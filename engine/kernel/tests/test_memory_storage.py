"""Tests for the in-memory document store."""

import pytest

from engine.kernel.storage import DuplicateKeyError
from engine.kernel.types import POSTS, PROFILES, USERS


class TestMemoryStore:
    @pytest.mark.asyncio
    async def test_insert_and_get(self, memory_store):
        await memory_store.insert(USERS, {"_id": "u1", "email": "a@x.com"})
        assert await memory_store.get(USERS, "u1") == {"_id": "u1", "email": "a@x.com"}

    @pytest.mark.asyncio
    async def test_get_missing(self, memory_store):
        assert await memory_store.get(USERS, "nope") is None

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, memory_store):
        doc = {"_id": "p1", "likes": []}
        await memory_store.insert(POSTS, doc)
        doc["likes"].append("x")
        fetched = await memory_store.get(POSTS, "p1")
        fetched["likes"].append("y")
        assert (await memory_store.get(POSTS, "p1"))["likes"] == []

    @pytest.mark.asyncio
    async def test_unique_email(self, memory_store):
        await memory_store.insert(USERS, {"_id": "u1", "email": "a@x.com"})
        with pytest.raises(DuplicateKeyError) as exc:
            await memory_store.insert(USERS, {"_id": "u2", "email": "a@x.com"})
        assert exc.value.field == "email"
        assert len(await memory_store.find(USERS)) == 1

    @pytest.mark.asyncio
    async def test_unique_handle_on_replace(self, memory_store):
        await memory_store.insert(PROFILES, {"_id": "a", "user": "u1", "handle": "jdoe"})
        await memory_store.insert(PROFILES, {"_id": "b", "user": "u2", "handle": "other"})
        with pytest.raises(DuplicateKeyError) as exc:
            await memory_store.replace(PROFILES, "b", {"_id": "b", "user": "u2", "handle": "jdoe"})
        assert exc.value.field == "handle"

    @pytest.mark.asyncio
    async def test_replace_own_document_keeps_unique_value(self, memory_store):
        await memory_store.insert(PROFILES, {"_id": "a", "user": "u1", "handle": "jdoe"})
        saved = await memory_store.replace(PROFILES, "a", {"_id": "a", "user": "u1", "handle": "jdoe", "bio": "hi"})
        assert saved["bio"] == "hi"

    @pytest.mark.asyncio
    async def test_replace_missing(self, memory_store):
        assert await memory_store.replace(POSTS, "nope", {"_id": "nope"}) is None

    @pytest.mark.asyncio
    async def test_find_filter_and_sort(self, memory_store):
        await memory_store.insert(POSTS, {"_id": "1", "user": "u1", "date": "2024-01-01"})
        await memory_store.insert(POSTS, {"_id": "2", "user": "u2", "date": "2024-03-01"})
        await memory_store.insert(POSTS, {"_id": "3", "user": "u1", "date": "2024-02-01"})

        newest = await memory_store.find(POSTS, sort_by="date", descending=True)
        assert [d["_id"] for d in newest] == ["2", "3", "1"]

        mine = await memory_store.find(POSTS, {"user": "u1"})
        assert {d["_id"] for d in mine} == {"1", "3"}

    @pytest.mark.asyncio
    async def test_delete_and_delete_where(self, memory_store):
        await memory_store.insert(PROFILES, {"_id": "a", "user": "u1", "handle": "one"})
        await memory_store.insert(PROFILES, {"_id": "b", "user": "u2", "handle": "two"})

        assert await memory_store.delete(PROFILES, "a")
        assert not await memory_store.delete(PROFILES, "a")
        assert await memory_store.delete_where(PROFILES, {"user": "u2"}) == 1
        assert await memory_store.find(PROFILES) == []

    @pytest.mark.asyncio
    async def test_write_count(self, memory_store):
        await memory_store.insert(POSTS, {"_id": "p1"})
        await memory_store.replace(POSTS, "p1", {"_id": "p1", "text": "x"})
        await memory_store.get(POSTS, "p1")
        await memory_store.find(POSTS)
        assert memory_store.write_count == 2
