"""
Test configuration and fixtures for the MongoDB wrapper.

Provides driver doubles (MagicMock/AsyncMock handles and in-memory fakes) so
unit tests never need a running server, plus integration fixtures that only
activate when MONGODB_TEST_URL points at a real MongoDB.
"""

import os
import sys
import uuid
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add parent directory to path so we can import mongodb_wrapper
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import pytest_asyncio

from mongodb_wrapper import MongoCollectionWrapper, MongoDBConfig, MongoWrapper
from tests.helpers import FakeDatabase


@pytest.fixture
def mongodb_config():
    """MongoDB configuration for testing."""
    return MongoDBConfig(
        url="mongodb://localhost:27017",
        database_name="wrapper_test",
        environment="test",
        collection_prefix="test"
    )


@pytest.fixture
def mock_collection():
    """Driver collection handle with async CRUD methods."""
    collection = MagicMock()
    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock(side_effect=lambda document, **kwargs: MagicMock(inserted_id=document.get("_id", "generated-id")))
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.update_many = AsyncMock()
    collection.delete_many = AsyncMock()
    return collection


@pytest.fixture
def mock_database(mock_collection):
    """Driver database handle returning mock_collection."""
    database = MagicMock()
    database.get_collection.return_value = mock_collection
    database.command = AsyncMock(return_value={"ok": 1.0})
    return database


@pytest.fixture
def mock_client(mock_database):
    """Driver client answering ping and selecting mock_database."""
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.get_database.return_value = mock_database
    return client


@pytest.fixture
def client_factory(mock_client):
    """Injected replacement for AsyncIOMotorClient."""
    return MagicMock(return_value=mock_client)


@pytest.fixture
def mongo_wrapper(mongodb_config, client_factory):
    """Disconnected manager wired to the mock client."""
    return MongoWrapper(mongodb_config, client_factory=client_factory)


@pytest_asyncio.fixture
async def collection_wrapper(mock_database):
    """Opened collection wrapper over mock_collection."""
    return await MongoCollectionWrapper.create(mock_database, "test")


@pytest.fixture
def fake_database():
    """In-memory database double."""
    return FakeDatabase()


@pytest_asyncio.fixture
async def fake_collection_wrapper(fake_database):
    """Opened collection wrapper over an in-memory collection."""
    return await MongoCollectionWrapper.create(fake_database, "test")


# Sample Data Fixtures

@pytest.fixture
def sample_document():
    """Sample document carrying a uuid."""
    return {"uuid": "aaa", "foo": "bar"}


@pytest.fixture
def sample_team_document():
    """Sample document with an array of uuid-bearing subdocuments."""
    return {
        "uuid": "team-1",
        "name": "Platform",
        "members": [
            {"uuid": "bbb", "name": "bar"},
            {"uuid": "ccc", "name": "baz"},
        ],
    }


# ===== Integration Test Fixtures =====

@pytest.fixture(scope="session")
def mongodb_test_url():
    """URL of a real MongoDB server, or skip the test."""
    url = os.getenv("MONGODB_TEST_URL")
    if not url:
        pytest.skip("MONGODB_TEST_URL not set; skipping MongoDB integration tests")
    return url


@pytest_asyncio.fixture
async def live_wrapper(mongodb_test_url):
    """Manager connected to a throwaway database, dropped afterwards."""
    config = MongoDBConfig.for_testing(
        url=mongodb_test_url,
        database_name=f"wrapper_it_{uuid.uuid4().hex[:8]}"
    )
    wrapper = await MongoWrapper(config).connect()
    try:
        yield wrapper
    finally:
        await wrapper.connection.drop_database(config.database_name)
        await wrapper.disconnect()
