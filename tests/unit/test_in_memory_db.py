"""Tests for InMemoryDBClient implementation."""

import pytest

from src.core.db_client import DatabaseError, RecordNotFoundError


@pytest.mark.unit
class TestInMemoryDBClient:
    """Test suite for InMemoryDBClient."""

    async def test_create_and_get(self, in_memory_db):
        created = await in_memory_db.create_record("users", {"name": "Test User"})
        record = await in_memory_db.get_record("users", created["id"])

        assert record["name"] == "Test User"
        assert "created" in record

    async def test_unique_ids(self, in_memory_db):
        record1 = await in_memory_db.create_record("users", {"name": "User 1"})
        record2 = await in_memory_db.create_record("users", {"name": "User 2"})

        assert record1["id"] != record2["id"]

    async def test_create_record_invalid_data(self, in_memory_db):
        with pytest.raises(DatabaseError, match="Data must be a dictionary"):
            await in_memory_db.create_record("users", "invalid")

    async def test_get_record_not_found(self, in_memory_db):
        with pytest.raises(RecordNotFoundError, match="Record not found"):
            await in_memory_db.get_record("users", "nonexistent")

    async def test_update_merges(self, in_memory_db):
        created = await in_memory_db.create_record("users", {"name": "A", "role": "ZELADOR"})

        updated = await in_memory_db.update_record("users", created["id"], {"role": "GESTOR"})

        assert updated == {**created, "role": "GESTOR"}

    async def test_empty_update_rejected(self, in_memory_db):
        created = await in_memory_db.create_record("users", {"name": "A"})

        with pytest.raises(ValueError, match="Empty update payload"):
            await in_memory_db.update_record("users", created["id"], {})

    async def test_returned_records_are_copies(self, in_memory_db):
        created = await in_memory_db.create_record("tasks", {"photos": []})
        created["photos"].append("mutated")

        record = await in_memory_db.get_record("tasks", created["id"])

        assert record["photos"] == []

    async def test_filters(self, in_memory_db):
        await in_memory_db.create_record("users", {"name": "Ana", "condo_id": "1", "active": True})
        await in_memory_db.create_record("users", {"name": "Bia", "condo_id": "1", "active": False})
        await in_memory_db.create_record("users", {"name": "Caio", "condo_id": "2", "active": True})

        same_condo = await in_memory_db.list_records("users", filter_query='condo_id = "1" && active = true')
        others = await in_memory_db.list_records("users", filter_query='condo_id != "1"')
        contains = await in_memory_db.list_records("users", filter_query='name ~ "IA"')

        assert [r["name"] for r in same_condo] == ["Ana"]
        assert [r["name"] for r in others] == ["Caio"]
        assert [r["name"] for r in contains] == ["Bia"]

    async def test_sort_and_pagination(self, in_memory_db):
        for index in range(12):
            await in_memory_db.create_record("logs", {"n": index})

        second_page = await in_memory_db.list_records("logs", page=2, per_page=5, sort="-id")

        assert [r["n"] for r in second_page] == [6, 5, 4, 3, 2]

    async def test_delete(self, in_memory_db):
        created = await in_memory_db.create_record("users", {"name": "A"})

        await in_memory_db.delete_record("users", created["id"])

        assert in_memory_db.count("users") == 0
        with pytest.raises(RecordNotFoundError):
            await in_memory_db.delete_record("users", created["id"])
