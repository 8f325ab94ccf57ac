"""
Backend-specific test fixtures and configuration.

These fixtures build stores and adapters on top of the global mock
MongoDB client.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def store_factory(mock_async_mongo_client):
    """
    Build a MotorUserStore sharing the mock client.

    Usage in tests:
        def test_something(store_factory, profile_schema):
            store = store_factory(profile_schema)
    """
    from user_adapter.database.store import MotorUserStore

    def _factory(schema=None):
        return MotorUserStore(
            schema=schema,
            client=mock_async_mongo_client,
            database_name="userbase",
            collection_name="users",
        )
    return _factory


@pytest.fixture
def mock_store(store_factory, empty_schema):
    """Store over an empty schema."""
    return store_factory(empty_schema)


# =============================================================================
# Adapter Fixtures
# =============================================================================

@pytest.fixture
def adapter_factory(store_factory):
    """
    Build a fully registered UserAdapter over a fresh store.

    Usage in tests:
        def test_something(adapter_factory):
            adapter = adapter_factory({"excludedFields": ["hash"]})
    """
    from user_adapter.services.user_adapter import create_user_adapter

    def _factory(options=None, schema=None):
        return create_user_adapter(store_factory(schema), options)
    return _factory


@pytest.fixture
def adapter(adapter_factory):
    """Adapter with default options over an empty schema."""
    return adapter_factory({"mongoURI": "mongodb://test:27017"})


@pytest.fixture
def profile_adapter(adapter_factory, profile_schema):
    """Adapter in profile mode over a schema that declares the profile."""
    return adapter_factory(
        {"useProfile": True, "externalIdFields": ["googleId", "githubId"]},
        schema=profile_schema,
    )


@pytest_asyncio.fixture
async def indexed_adapter(adapter):
    """Default adapter with its unique indexes created."""
    await adapter.store.ensure_indexes()
    yield adapter


# =============================================================================
# Motor Client Mocks
# =============================================================================

@pytest.fixture
def mock_motor_client():
    """
    A Motor client whose ping and index creation succeed.

    Patch it in with:
        with patch("user_adapter.database.store.AsyncIOMotorClient", return_value=mock_motor_client):
            ...
    """
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    collection = MagicMock()
    collection.create_index = AsyncMock()
    client.__getitem__.return_value.__getitem__.return_value = collection
    return client
