"""
Global test fixtures for user-adapter.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Live schemas in the shapes hosts declare them
- Stored user documents
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from bson import ObjectId
from mongomock_motor import AsyncMongoMockClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from user_adapter.models.schema import FieldType, SchemaField, UserSchema  # noqa: E402


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_users_collection(mock_async_mongo_client):
    """Provide the mock users collection the store writes to."""
    yield mock_async_mongo_client["userbase"]["users"]


# =============================================================================
# Schema Fixtures
# =============================================================================

@pytest.fixture
def empty_schema() -> UserSchema:
    """A host schema with nothing declared yet."""
    return UserSchema()


@pytest.fixture
def profile_schema() -> UserSchema:
    """A host schema declaring a profile with username and email."""
    return UserSchema({
        "profile": {
            "username": SchemaField(type=FieldType.STRING, trim=True, lowercase=True, unique=True),
            "email": FieldType.STRING,
            "displayName": FieldType.STRING,
        },
        "roles": SchemaField(type=FieldType.MIXED, default=["user"]),
    })


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def mock_user() -> dict:
    """A complete flat user document as stored in MongoDB."""
    return {
        "_id": ObjectId("507f1f77bcf86cd799439011"),
        "username": "alice",
        "email": "alice@example.com",
        "hash": "5f4dcc3b5aa765d61d8327deb882cf99",
        "salt": "c2FsdHNhbHQ=",
        "lastLogin": 1729350000000,
        "lastLogout": None,
        "loginAttempts": 0,
        "loginAttemptLockTime": None,
        "signup": 1729340000000,
        "created_at": datetime(2024, 10, 19, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def mock_profile_user() -> dict:
    """A user document with its identity inside the profile."""
    return {
        "_id": ObjectId("507f1f77bcf86cd799439022"),
        "profile": {
            "username": "bob",
            "email": "bob@example.com",
            "displayName": "Bob",
            "googleId": "g-1234",
        },
        "hash": "hash-value",
        "salt": "salt-value",
        "loginAttempts": 2,
    }
