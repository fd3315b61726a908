"""Shared test fixtures for Todo API tests."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from common.auth import JWTAuth

TEST_JWT_SECRET = "test-secret"
# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def sample_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def other_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def jwt_auth():
    return JWTAuth(secret=TEST_JWT_SECRET, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # delete_one etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_todo_doc(sample_user_id):
    now = datetime.now(timezone.utc)
    return {
        "_id": str(uuid.uuid4()),
        "title": "Buy milk",
        "description": "2 litres",
        "completed": False,
        "userId": sample_user_id,
        "createdAt": now,
        "updatedAt": now,
    }


# ─────────────────────────────────────────────────────────────────
# Full application over an in-memory database
# ─────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def test_db():
    from app.database import ensure_indexes

    db = AsyncMongoMockClient()[f"todo_test_{uuid.uuid4().hex}"]
    await ensure_indexes(db)
    return db


@pytest_asyncio.fixture
async def client(test_db):
    """
    HTTP client bound to the app.

    ASGITransport does not run the lifespan, so services are wired here
    against the in-memory database instead.
    """
    from api_v1 import app
    from app.dependencies import init_all_services

    init_all_services(
        db=test_db,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
    )

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
