"""
Tests for the document store implementations.

Run with: pytest tests/test_document_store.py -v
"""
import json
import uuid
from datetime import datetime, timezone

import pytest

from greenhouse_plugin.repositories import InMemoryDocumentStore, JobRepository, PostgresDocumentStore
from greenhouse_plugin.repositories.document_store import format_timestamp, parse_timestamp

from tests.fakes import Clock


class TestTimestamps:
    def test_round_trip_keeps_utc(self):
        value = datetime(2026, 10, 17, 8, 30, 15, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2026-10-17T08:30:15.123456+00:00"
        assert parse_timestamp(format_timestamp(value)) == value

    def test_parse_accepts_z_and_naive(self):
        assert parse_timestamp("2026-10-17T08:30:00Z").tzinfo is not None
        assert parse_timestamp("2026-10-17T08:30:00").tzinfo == timezone.utc

    def test_parse_rejects_garbage(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None
        assert parse_timestamp(12) is None


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_create_adds_store_keys(self):
        store = InMemoryDocumentStore()
        doc = await store.create("things", {"name": "a"})

        assert doc["name"] == "a"
        assert uuid.UUID(doc["id"])
        assert doc["createdAt"] == doc["updatedAt"]

    @pytest.mark.asyncio
    async def test_find_newest_first_with_limit_and_where(self):
        clock = Clock()
        store = InMemoryDocumentStore(clock=clock)
        clock.rewind(hours=2)
        await store.create("things", {"n": 1, "kind": "x"})
        clock.rewind(hours=1)
        await store.create("things", {"n": 2, "kind": "y"})
        await store.create("other", {"n": 3})

        assert [doc["n"] for doc in await store.find("things")] == [2, 1]
        assert [doc["n"] for doc in await store.find("things", limit=1)] == [2]
        assert [doc["n"] for doc in await store.find("things", where={"kind": "x"})] == [1]

    @pytest.mark.asyncio
    async def test_update_merges_and_bumps_timestamp(self):
        clock = Clock()
        store = InMemoryDocumentStore(clock=clock)
        clock.rewind(hours=1)
        doc = await store.create("things", {"a": 1, "b": 2})
        clock.reset()

        updated = await store.update("things", doc["id"], {"b": 3, "id": "ignored"})

        assert updated["a"] == 1 and updated["b"] == 3
        assert updated["id"] == doc["id"]
        assert updated["createdAt"] == doc["createdAt"]
        assert updated["updatedAt"] > doc["updatedAt"]

    @pytest.mark.asyncio
    async def test_update_missing_document(self):
        with pytest.raises(KeyError):
            await InMemoryDocumentStore().update("things", "nope", {})

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self):
        store = InMemoryDocumentStore()
        doc = await store.create("things", {"tags": ["a"]})
        doc["tags"].append("b")

        assert (await store.find("things"))[0]["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_job_repository_delete_all(self):
        repo = JobRepository(InMemoryDocumentStore())
        for job_id in (1, 2, 3):
            await repo.create({"jobId": job_id})

        assert await repo.delete_all() == 3
        assert await repo.list_all() == []
        assert (await repo.get_by_job_id(2)) is None


class FakePool:
    """Records asyncpg calls and answers with a canned row."""

    def __init__(self, row=None):
        self.row = row
        self.calls = []

    async def fetch(self, query, *params):
        self.calls.append((query, params))
        return [self.row] if self.row else []

    async def fetchrow(self, query, *params):
        self.calls.append((query, params))
        return self.row

    async def execute(self, query, *params):
        self.calls.append((query, params))


def make_row(data):
    now = datetime(2026, 10, 17, tzinfo=timezone.utc)
    return {"id": uuid.uuid4(), "data": json.dumps(data), "created_at": now, "updated_at": now}


class TestPostgresDocumentStore:
    @pytest.mark.asyncio
    async def test_find_with_where_and_limit(self):
        pool = FakePool(make_row({"jobId": 42}))
        docs = await PostgresDocumentStore(pool).find("greenhouse-jobs", limit=1, where={"jobId": 42})

        query, params = pool.calls[0]
        assert "data @> $2::jsonb" in query
        assert "LIMIT $3" in query
        assert params == ("greenhouse-jobs", json.dumps({"jobId": 42}), 1)
        assert docs[0]["jobId"] == 42
        assert docs[0]["updatedAt"] == "2026-10-17T00:00:00.000000+00:00"

    @pytest.mark.asyncio
    async def test_create_strips_store_keys(self):
        pool = FakePool(make_row({"title": "x"}))
        await PostgresDocumentStore(pool).create("greenhouse-jobs", {"title": "x", "id": "old", "updatedAt": "then"})

        _, params = pool.calls[0]
        assert params[1] == "greenhouse-jobs"
        assert json.loads(params[2]) == {"title": "x"}

    @pytest.mark.asyncio
    async def test_update_missing_document(self):
        with pytest.raises(KeyError):
            await PostgresDocumentStore(FakePool()).update("greenhouse-jobs", str(uuid.uuid4()), {})
