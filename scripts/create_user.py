#!/usr/bin/env python3
"""
Create a user account directly in the database.

This script:
1. Validates the password against the registration rules
2. Ensures the unique indexes exist
3. Hashes the password and inserts the user

Usage:
    python scripts/create_user.py <email> <password>

Environment variables required:
    MONGODB_URI - MongoDB connection string
    MONGODB_DATABASE - Database name (default: todo)
    JWT_SECRET - Required by the password/token provider
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from common.auth import JWTAuth
from common.utils import APIException, validate_password
from app.config import settings
from app.database import ensure_indexes
from app.services.user_service import UserService


async def create_user(email: str, password: str) -> int:
    """Register one user. Returns a process exit code."""

    is_valid, errors = validate_password(password)
    if not is_valid:
        print("ERROR: password rejected")
        for error in errors:
            print(f"  - {error}")
        return 1

    if not settings.JWT_SECRET:
        print("ERROR: JWT_SECRET environment variable not set")
        return 1

    print(f"Connecting to database: {settings.MONGODB_DATABASE}")
    client = AsyncIOMotorClient(settings.MONGODB_URI, uuidRepresentation="standard")
    db = client[settings.MONGODB_DATABASE]

    try:
        await ensure_indexes(db)
        auth = JWTAuth(secret=settings.JWT_SECRET, bcrypt_rounds=settings.BCRYPT_ROUNDS)
        user = await UserService(db=db, auth=auth).register_user(email, password)
    except APIException as e:
        print(f"ERROR: {e.message}")
        return 1
    finally:
        client.close()

    print(f"Created user {user['email']} with id {user['_id']}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(f"Usage: {sys.argv[0]} <email> <password>")
        sys.exit(2)

    print("Create User Script")
    print("-" * 40)
    sys.exit(asyncio.run(create_user(sys.argv[1], sys.argv[2])))
