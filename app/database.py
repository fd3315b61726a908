"""
Todo API collection names and index setup.

Uniqueness is enforced here, at the storage layer, rather than with
read-then-write checks in the services:

- users.email is unique
- (todos.title, todos.userId) is unique, so titles repeat across users
  but never within one user's list
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
TODOS_COLLECTION = "todos"


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes the services rely on.

    Safe to call on every startup; existing indexes are left as they are.

    Args:
        db: MongoDB database connection
    """
    await db[USERS_COLLECTION].create_index(
        [("email", ASCENDING)],
        unique=True,
        name="UNIQUE_USER_EMAIL",
    )
    await db[TODOS_COLLECTION].create_index(
        [("title", ASCENDING), ("userId", ASCENDING)],
        unique=True,
        name="UNIQUE_TITLE_USER",
    )
    await db[TODOS_COLLECTION].create_index(
        [("userId", ASCENDING)],
        name="TODO_USER_ID",
    )
    logger.info("Database indexes ensured")
