"""Unit tests for the CRUD repositories (in-memory and Motor-backed)."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from learnhub.repositories import (
    CrudServiceError,
    InMemoryCrudRepository,
    MongoCrudRepository,
    RecordNotFoundError,
)


# ─────────────────────────────────────────────────────────────────
# InMemoryCrudRepository
# ─────────────────────────────────────────────────────────────────


class TestInMemoryRepository:
    @pytest.mark.asyncio
    async def test_create_stamps_fields(self, empty_repository):
        record = await empty_repository.create("courses", {"titleEn": "Stats"})

        assert record["_id"]
        assert record["_createdDate"] == record["_updatedDate"]

    @pytest.mark.asyncio
    async def test_get_all_keeps_insertion_order_and_filters(self, empty_repository):
        for name in ("c", "a", "b"):
            await empty_repository.create("courses", {"_id": name, "category": "x" if name != "a" else "y"})

        assert [r["_id"] for r in await empty_repository.get_all("courses")] == ["c", "a", "b"]
        assert [r["_id"] for r in await empty_repository.get_all("courses", {"category": "x"})] == ["c", "b"]
        assert await empty_repository.get_all("unknown") == []

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, empty_repository):
        created = await empty_repository.create("courses", {"_id": "c", "tags": ["a"]})
        created["tags"].append("b")

        stored = await empty_repository.get_by_id("courses", "c")

        assert stored["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_update_merges_and_keeps_identity(self, empty_repository):
        created = await empty_repository.create("courses", {"_id": "c", "titleEn": "Old", "category": "x"})

        updated = await empty_repository.update("courses", {"_id": "c", "titleEn": "New", "_createdDate": None})

        assert updated["titleEn"] == "New"
        assert updated["category"] == "x"
        assert updated["_createdDate"] == created["_createdDate"]
        assert updated["_updatedDate"] >= created["_updatedDate"]

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, empty_repository):
        with pytest.raises(RecordNotFoundError) as exc:
            await empty_repository.update("courses", {"_id": "nope"})
        assert exc.value.record_id == "nope"

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, empty_repository):
        await empty_repository.create("courses", {"_id": "c"})
        with pytest.raises(CrudServiceError):
            await empty_repository.create("courses", {"_id": "c"})

    @pytest.mark.asyncio
    async def test_delete(self, empty_repository):
        await empty_repository.create("courses", {"_id": "c"})

        assert await empty_repository.delete("courses", "c") is True
        assert await empty_repository.delete("courses", "c") is False

    @pytest.mark.asyncio
    async def test_seed(self):
        repository = InMemoryCrudRepository(seed={"courses": [{"_id": "c1"}, {"_id": "c2"}]})
        assert [r["_id"] for r in await repository.get_all("courses")] == ["c1", "c2"]


# ─────────────────────────────────────────────────────────────────
# MongoCrudRepository
# ─────────────────────────────────────────────────────────────────


class TestMongoRepository:
    @pytest.mark.asyncio
    async def test_get_all_sorts_by_created_date(self, mock_db, mock_collection):
        cursor = MagicMock()
        cursor.sort.return_value.to_list = AsyncMock(return_value=[{"_id": "c1"}])
        mock_collection.find.return_value = cursor
        repository = MongoCrudRepository(mock_db)

        records = await repository.get_all("courses", {"category": "AI"})

        assert records == [{"_id": "c1"}]
        mock_collection.find.assert_called_once_with({"category": "AI"})
        cursor.sort.assert_called_once_with("_createdDate", 1)
        mock_db.__getitem__.assert_called_with("courses")

    @pytest.mark.asyncio
    async def test_create_inserts_stamped_document(self, mock_db, mock_collection):
        repository = MongoCrudRepository(mock_db)

        record = await repository.create("courses", {"titleEn": "Stats"})

        inserted = mock_collection.insert_one.call_args[0][0]
        assert inserted is record
        assert inserted["_id"] and inserted["_createdDate"]

    @pytest.mark.asyncio
    async def test_update_uses_set_without_identity_fields(self, mock_db, mock_collection):
        mock_collection.find_one_and_update.return_value = {"_id": "c1", "titleEn": "New"}
        repository = MongoCrudRepository(mock_db)

        updated = await repository.update("courses", {"_id": "c1", "titleEn": "New"})

        assert updated["titleEn"] == "New"
        query, update = mock_collection.find_one_and_update.call_args[0]
        assert query == {"_id": "c1"}
        assert "_id" not in update["$set"]
        assert update["$set"]["titleEn"] == "New"
        assert "_updatedDate" in update["$set"]
        assert mock_collection.find_one_and_update.call_args[1]["return_document"] == ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, mock_db, mock_collection):
        mock_collection.find_one_and_update.return_value = None
        repository = MongoCrudRepository(mock_db)

        with pytest.raises(RecordNotFoundError):
            await repository.update("courses", {"_id": "missing"})

    @pytest.mark.asyncio
    async def test_delete_reports_deleted_count(self, mock_db, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)
        repository = MongoCrudRepository(mock_db)

        assert await repository.delete("courses", "missing") is False

    @pytest.mark.asyncio
    async def test_driver_errors_become_crud_service_errors(self, mock_db, mock_collection):
        mock_collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")
        repository = MongoCrudRepository(mock_db)

        with pytest.raises(CrudServiceError) as exc:
            await repository.get_by_id("courses", "c1")
        assert exc.value.collection == "courses"
