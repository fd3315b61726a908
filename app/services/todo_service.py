"""
Todo service.

Every query and write is filtered by the owner's user id, which always
comes from the authenticated request and never from the request body.
A todo owned by someone else is reported exactly like a missing one.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import ConflictException, NotFoundException, duplicate_value_message
from app.database import TODOS_COLLECTION

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "completed")


def format_todo(todo: dict) -> dict:
    """API view of a todo document."""
    return {
        "id": todo["_id"],
        "title": todo["title"],
        "description": todo.get("description"),
        "completed": bool(todo.get("completed", False)),
        "user_id": todo["userId"],
    }


def _todo_not_found() -> NotFoundException:
    return NotFoundException(
        message="To-do could not be found!",
        code="TODO_NOT_FOUND",
    )


def _title_conflict() -> ConflictException:
    return ConflictException(
        message=duplicate_value_message("title"),
        code="TITLE_EXISTS",
    )


class TodoService:
    """
    Owner-scoped CRUD for todo items.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize TodoService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._todos_collection = db[TODOS_COLLECTION]

    async def list_todos(self, user_id: str) -> List[dict]:
        """
        All todos belonging to a user.

        Args:
            user_id: Owner's user ID

        Returns:
            List of todo documents, oldest first
        """
        cursor = self._todos_collection.find(
            {"userId": user_id},
            sort=[("createdAt", ASCENDING)],
        )
        return await cursor.to_list(length=None)

    async def get_todo(self, user_id: str, todo_id: str) -> dict:
        """
        Load one todo owned by the user.

        Raises:
            NotFoundException: no such todo, or it belongs to another user
        """
        todo = await self._todos_collection.find_one({"_id": todo_id, "userId": user_id})
        if not todo:
            raise _todo_not_found()
        return todo

    async def create_todo(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> dict:
        """
        Create an incomplete todo for the user.

        Raises:
            ConflictException: the user already has a todo with this title
        """
        now = datetime.now(timezone.utc)
        todo_doc = {
            "_id": str(uuid.uuid4()),
            "title": title,
            "description": description,
            "completed": False,
            "userId": user_id,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            await self._todos_collection.insert_one(todo_doc)
        except DuplicateKeyError:
            raise _title_conflict()

        logger.info(f"Todo {todo_doc['_id']} created for user {user_id}")
        return todo_doc

    async def update_todo(self, user_id: str, todo_id: str, updates: dict) -> dict:
        """
        Partially update a todo owned by the user.

        Args:
            user_id: Owner's user ID
            todo_id: Todo ID
            updates: Any of title, description, completed; other keys are ignored

        Raises:
            NotFoundException: no such todo, or it belongs to another user
            ConflictException: new title collides with another of the user's todos
        """
        todo = await self.get_todo(user_id, todo_id)

        changes = {key: updates[key] for key in UPDATABLE_FIELDS if key in updates}
        if not changes:
            return todo

        changes["updatedAt"] = datetime.now(timezone.utc)

        try:
            updated = await self._todos_collection.find_one_and_update(
                {"_id": todo_id, "userId": user_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise _title_conflict()

        if not updated:
            # Deleted between the lookup and the update
            raise _todo_not_found()

        logger.debug(f"Todo {todo_id} updated: {sorted(changes)}")
        return updated

    async def upsert_todo(self, user_id: str, todo_id: str, data: dict) -> dict:
        """
        Replace a todo, creating it under the user when the id is unused.

        The match is on both id and owner, so an id already taken by
        another user can never be overwritten or adopted.

        Args:
            user_id: Owner's user ID
            todo_id: Todo ID (client-chosen UUID)
            data: title, description and completed

        Raises:
            NotFoundException: the id belongs to another user
            ConflictException: the title collides with another of the user's todos
        """
        now = datetime.now(timezone.utc)
        fields = {
            "title": data["title"],
            "description": data.get("description"),
            "completed": bool(data.get("completed", False)),
            "updatedAt": now,
        }

        try:
            todo = await self._todos_collection.find_one_and_update(
                {"_id": todo_id, "userId": user_id},
                {"$set": fields, "$setOnInsert": {"createdAt": now}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            existing = await self._todos_collection.find_one({"_id": todo_id}, {"userId": 1})
            if existing and existing.get("userId") != user_id:
                logger.warning(f"User {user_id} attempted to upsert a todo id owned by another user")
                raise _todo_not_found()
            raise _title_conflict()

        logger.info(f"Todo {todo_id} upserted for user {user_id}")
        return todo

    async def delete_todo(self, user_id: str, todo_id: str) -> None:
        """
        Delete a todo owned by the user.

        Raises:
            NotFoundException: no such todo, or it belongs to another user
        """
        result = await self._todos_collection.delete_one({"_id": todo_id, "userId": user_id})
        if result.deleted_count == 0:
            raise _todo_not_found()

        logger.info(f"Todo {todo_id} deleted for user {user_id}")
