"""
User service for credential storage.

Handles user creation and lookup. Users are keyed by UUID strings and
looked up by exact, case-sensitive email.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from common.auth import AuthProvider
from common.utils.exceptions import ConflictException, NotFoundException, duplicate_value_message
from app.database import USERS_COLLECTION

logger = logging.getLogger(__name__)


def format_user(user: dict) -> dict:
    """Public view of a user document. The password hash never leaves here."""
    return {
        "id": user["_id"],
        "email": user["email"],
    }


class UserService:
    """
    Manages user records and their password hashes.
    """

    def __init__(self, db: AsyncIOMotorDatabase, auth: AuthProvider):
        """
        Initialize UserService.

        Args:
            db: MongoDB database connection
            auth: Provider used to hash passwords
        """
        self._db = db
        self._auth = auth
        self._users_collection = db[USERS_COLLECTION]

    async def register_user(self, email: str, password: str) -> dict:
        """
        Hash the password and store a new user.

        Args:
            email: User's email address
            password: Plaintext password

        Returns:
            Created user document

        Raises:
            ConflictException: email already registered
        """
        password_hash = await run_in_threadpool(self._auth.hash_password, password)
        return await self.create_user(email, password_hash)

    async def create_user(self, email: str, password_hash: str) -> dict:
        """
        Insert a user record.

        Email uniqueness comes from the unique index on users.email.

        Args:
            email: User's email address, stored as given
            password_hash: Already hashed password

        Returns:
            Created user document

        Raises:
            ConflictException: email already registered
        """
        now = datetime.now(timezone.utc)
        user_doc = {
            "_id": str(uuid.uuid4()),
            "email": email,
            "passwordHash": password_hash,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("Registration rejected: email already exists")
            raise ConflictException(
                message=duplicate_value_message("email"),
                code="EMAIL_EXISTS",
            )

        logger.info(f"User created: {user_doc['_id']}")
        return user_doc

    async def get_user_by_id(self, user_id: str) -> Optional[dict]:
        """
        Load user by ID.

        Args:
            user_id: User UUID as string

        Returns:
            User document or None if not found
        """
        return await self._users_collection.find_one({"_id": user_id})

    async def get_user_by_email(self, email: str) -> Optional[dict]:
        """
        Load user by email address (exact match).

        Args:
            email: User's email address

        Returns:
            User document or None if not found
        """
        return await self._users_collection.find_one({"email": email})

    async def get_own_user(self, requester_id: str, user_id: str) -> dict:
        """
        Load a user on behalf of an authenticated caller.

        Callers may only read their own record. Asking for anyone else
        gets the same 404 as asking for an id that does not exist.

        Raises:
            NotFoundException: different user, or no such user
        """
        if requester_id != user_id:
            raise NotFoundException(
                message="User could not be found!",
                code="USER_NOT_FOUND",
            )

        user = await self.get_user_by_id(user_id)
        if not user:
            raise NotFoundException(
                message="User could not be found!",
                code="USER_NOT_FOUND",
            )

        return user
