"""Tests for shared/database.py."""

import re

import pytest

from shared.database import DocumentStore, new_object_id


class TestNewObjectId:
    def test_format(self):
        """Ids should be 24 lowercase hex characters."""
        assert re.fullmatch(r"[0-9a-f]{24}", new_object_id())

    def test_unique(self):
        """Ids should not repeat."""
        assert len({new_object_id() for _ in range(100)}) == 100


class TestDocumentCollection:
    @pytest.fixture
    def collection(self):
        return DocumentStore().collection("things")

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_timestamps(self, collection):
        """Insert should add id, created_at and updated_at."""
        document = await collection.insert({"name": "a"})
        assert re.fullmatch(r"[0-9a-f]{24}", document["id"])
        assert document["created_at"] is not None
        assert document["updated_at"] is not None

    @pytest.mark.asyncio
    async def test_returns_copies(self, collection):
        """Mutating a returned document should not change the stored one."""
        document = await collection.insert({"name": "a", "tags": ["x"]})
        document["tags"].append("y")

        stored = await collection.find_by_id(document["id"])
        assert stored["tags"] == ["x"]

    @pytest.mark.asyncio
    async def test_find_one(self, collection):
        """find_one should match on all given fields."""
        await collection.insert({"name": "a", "kind": "x"})
        await collection.insert({"name": "b", "kind": "x"})

        found = await collection.find_one(name="b", kind="x")
        assert found["name"] == "b"
        assert await collection.find_one(name="c") is None

    @pytest.mark.asyncio
    async def test_find_sort_and_limit(self, collection):
        """find should filter, sort and limit."""
        for rank in (3, 1, 2, 5):
            await collection.insert({"rank": rank})

        documents = await collection.find(
            where=lambda d: d["rank"] > 1, sort_by="rank", descending=True, limit=2
        )
        assert [d["rank"] for d in documents] == [5, 3]

    @pytest.mark.asyncio
    async def test_update(self, collection):
        """update should apply changes and return the new document."""
        document = await collection.insert({"name": "a"})
        updated = await collection.update(document["id"], {"name": "b"})
        assert updated["name"] == "b"
        assert await collection.update("f" * 24, {"name": "c"}) is None

    @pytest.mark.asyncio
    async def test_delete_and_count(self, collection):
        """delete should remove one document; count should reflect it."""
        first = await collection.insert({"name": "a"})
        await collection.insert({"name": "b"})

        assert await collection.delete(first["id"]) is True
        assert await collection.delete(first["id"]) is False
        assert await collection.count() == 1

    @pytest.mark.asyncio
    async def test_delete_many(self, collection):
        """delete_many should remove every match."""
        await collection.insert_many([{"kind": "x"}, {"kind": "x"}, {"kind": "y"}])
        assert await collection.delete_many(lambda d: d["kind"] == "x") == 2
        assert await collection.count() == 1


class TestDocumentStore:
    def test_collection_is_reused(self):
        """The same name should return the same collection."""
        store = DocumentStore()
        assert store.collection("users") is store.collection("users")
        assert store.collection("users") is not store.collection("goals")
