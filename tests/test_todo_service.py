"""Unit tests for TodoService (owner-scoped queries over raw collections)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import ConflictException, NotFoundException
from app.services.todo_service import TodoService, format_todo


@pytest.fixture
def todo_service(mock_db):
    return TodoService(db=mock_db)


# ─────────────────────────────────────────────────────────────────
# Reads
# ─────────────────────────────────────────────────────────────────


class TestReads:
    @pytest.mark.asyncio
    async def test_list_filters_by_owner(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find.return_value.to_list = AsyncMock(return_value=[sample_todo_doc])

        todos = await todo_service.list_todos(sample_user_id)

        assert todos == [sample_todo_doc]
        assert mock_collection.find.call_args[0][0] == {"userId": sample_user_id}

    @pytest.mark.asyncio
    async def test_get_matches_id_and_owner(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one.return_value = sample_todo_doc

        todo = await todo_service.get_todo(sample_user_id, sample_todo_doc["_id"])

        assert todo is sample_todo_doc
        mock_collection.find_one.assert_called_once_with(
            {"_id": sample_todo_doc["_id"], "userId": sample_user_id}
        )

    @pytest.mark.asyncio
    async def test_get_foreign_or_missing_is_not_found(self, todo_service, mock_collection, other_user_id):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            await todo_service.get_todo(other_user_id, "some-id")

        assert exc_info.value.message == "To-do could not be found!"


def test_format_todo(sample_todo_doc, sample_user_id):
    assert format_todo(sample_todo_doc) == {
        "id": sample_todo_doc["_id"],
        "title": "Buy milk",
        "description": "2 litres",
        "completed": False,
        "user_id": sample_user_id,
    }


# ─────────────────────────────────────────────────────────────────
# Create
# ─────────────────────────────────────────────────────────────────


class TestCreate:
    @pytest.mark.asyncio
    async def test_new_todo_is_incomplete_and_owned(self, todo_service, mock_collection, sample_user_id):
        todo = await todo_service.create_todo(sample_user_id, "Buy milk", "2 litres")

        inserted = mock_collection.insert_one.call_args[0][0]
        assert inserted is todo
        assert inserted["completed"] is False
        assert inserted["userId"] == sample_user_id
        assert len(inserted["_id"]) == 36

    @pytest.mark.asyncio
    async def test_duplicate_title_is_conflict(self, todo_service, mock_collection, sample_user_id):
        mock_collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

        with pytest.raises(ConflictException) as exc_info:
            await todo_service.create_todo(sample_user_id, "Buy milk", None)

        assert exc_info.value.message == "Value for 'title' already exists, try again"


# ─────────────────────────────────────────────────────────────────
# Update (PATCH)
# ─────────────────────────────────────────────────────────────────


class TestUpdate:
    @pytest.mark.asyncio
    async def test_sets_only_given_fields(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one.return_value = sample_todo_doc
        mock_collection.find_one_and_update.return_value = {**sample_todo_doc, "completed": True}

        todo = await todo_service.update_todo(
            sample_user_id,
            sample_todo_doc["_id"],
            {"completed": True, "userId": "someone-else"},
        )

        assert todo["completed"] is True
        filter_doc, update = mock_collection.find_one_and_update.call_args[0]
        assert filter_doc == {"_id": sample_todo_doc["_id"], "userId": sample_user_id}
        assert set(update["$set"]) == {"completed", "updatedAt"}
        assert mock_collection.find_one_and_update.call_args[1]["return_document"] == ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_empty_update_returns_unchanged(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one.return_value = sample_todo_doc

        todo = await todo_service.update_todo(sample_user_id, sample_todo_doc["_id"], {})

        assert todo is sample_todo_doc
        mock_collection.find_one_and_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_foreign_todo_is_not_found(self, todo_service, mock_collection, other_user_id):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException):
            await todo_service.update_todo(other_user_id, "some-id", {"completed": True})

        mock_collection.find_one_and_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_title_collision_is_conflict(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one.return_value = sample_todo_doc
        mock_collection.find_one_and_update.side_effect = DuplicateKeyError("E11000 duplicate key")

        with pytest.raises(ConflictException):
            await todo_service.update_todo(sample_user_id, sample_todo_doc["_id"], {"title": "Taken"})


# ─────────────────────────────────────────────────────────────────
# Upsert (PUT)
# ─────────────────────────────────────────────────────────────────


class TestUpsert:
    @pytest.mark.asyncio
    async def test_upserts_scoped_to_owner(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one_and_update.return_value = sample_todo_doc

        await todo_service.upsert_todo(
            sample_user_id,
            sample_todo_doc["_id"],
            {"title": "Buy milk", "description": None, "completed": True},
        )

        call_args = mock_collection.find_one_and_update.call_args
        filter_doc, update = call_args[0]
        assert filter_doc == {"_id": sample_todo_doc["_id"], "userId": sample_user_id}
        assert update["$set"]["completed"] is True
        assert "createdAt" in update["$setOnInsert"]
        assert call_args[1]["upsert"] is True

    @pytest.mark.asyncio
    async def test_id_owned_by_someone_else_is_not_found(
        self, todo_service, mock_collection, sample_todo_doc, other_user_id,
    ):
        mock_collection.find_one_and_update.side_effect = DuplicateKeyError("E11000 duplicate key")
        mock_collection.find_one.return_value = {"_id": sample_todo_doc["_id"], "userId": sample_todo_doc["userId"]}

        with pytest.raises(NotFoundException):
            await todo_service.upsert_todo(
                other_user_id,
                sample_todo_doc["_id"],
                {"title": "Mine now", "description": None, "completed": False},
            )

    @pytest.mark.asyncio
    async def test_title_collision_is_conflict(self, todo_service, mock_collection, sample_todo_doc, sample_user_id):
        mock_collection.find_one_and_update.side_effect = DuplicateKeyError("E11000 duplicate key")
        mock_collection.find_one.return_value = None

        with pytest.raises(ConflictException):
            await todo_service.upsert_todo(
                sample_user_id,
                sample_todo_doc["_id"],
                {"title": "Taken", "description": None, "completed": False},
            )


# ─────────────────────────────────────────────────────────────────
# Delete
# ─────────────────────────────────────────────────────────────────


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_scoped_to_owner(self, todo_service, mock_collection, sample_user_id):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)

        await todo_service.delete_todo(sample_user_id, "todo-id")

        mock_collection.delete_one.assert_called_once_with({"_id": "todo-id", "userId": sample_user_id})

    @pytest.mark.asyncio
    async def test_nothing_deleted_is_not_found(self, todo_service, mock_collection, other_user_id):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=0)

        with pytest.raises(NotFoundException):
            await todo_service.delete_todo(other_user_id, "todo-id")
