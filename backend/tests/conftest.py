"""
DevCamper Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── fake_collection: In-memory stand-in for an AsyncCollection
    ├── fixture_file:    Temporary bootcamps.json with two records
    ├── mock_connector:  MongoConnector double with async connect/ping/close
    └── test_client:     HTTPX AsyncClient talking to the FastAPI app
"""

import json
import os

# Override settings BEFORE any devcamper import: the settings singleton and
# the geocoder retry decorator read them at import time
os.environ["MONGO_URI"] = "mongodb://localhost:27017/devcamper_test"
os.environ["GEOCODER_PROVIDER"] = "opencage"
os.environ["GEOCODER_API_KEY"] = "test-key-not-real"
os.environ["RETRY_MAX_ATTEMPTS"] = "2"
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "0"
os.environ["RETRY_JITTER"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_COLOR"] = "false"

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


class FakeCollection:
    """
    Minimal async collection backed by a list.

    Implements only what the seeder calls: insert_many, delete_many and
    count_documents. Duplicate _id values raise like the real driver would.
    """

    def __init__(self):
        self.documents = []

    async def insert_many(self, documents, ordered=True):
        from bson import ObjectId
        from pymongo.errors import BulkWriteError

        inserted = []
        for index, doc in enumerate(documents):
            doc.setdefault("_id", ObjectId())
            if any(d["_id"] == doc["_id"] for d in self.documents):
                raise BulkWriteError({
                    "writeErrors": [{"index": index, "code": 11000, "errmsg": "E11000 duplicate key"}],
                    "nInserted": len(inserted),
                })
            self.documents.append(dict(doc))
            inserted.append(doc["_id"])
        return SimpleNamespace(inserted_ids=inserted)

    async def delete_many(self, filter):
        assert filter == {}
        count = len(self.documents)
        self.documents.clear()
        return SimpleNamespace(deleted_count=count)

    async def count_documents(self, filter):
        return len(self.documents)


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def fixture_file(tmp_path):
    """Writes a two-record fixture and returns its path."""
    path = tmp_path / "bootcamps.json"
    path.write_text(json.dumps([
        {"_id": "5d713995b721c3bb38c1f5d0", "name": "Devworks Bootcamp"},
        {"name": "ModernTech Bootcamp", "careers": ["Web Development"]},
    ]))
    return path


@pytest.fixture
def mock_connector(fake_collection):
    """
    A MongoConnector double.

    connect/ping/close are AsyncMocks; collection() returns fake_collection.
    """
    connector = MagicMock()
    connector.connect = AsyncMock(return_value=MagicMock())
    connector.ping = AsyncMock(return_value=True)
    connector.close = AsyncMock()
    connector.collection = MagicMock(return_value=fake_collection)
    return connector


@pytest.fixture
def app():
    """A fresh application instance per test."""
    from devcamper.main import create_app
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so no database or geocoder is
    needed; tests that want them set app.state directly.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
