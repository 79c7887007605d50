"""
Lokasi API - Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_store: AsyncMock-backed LocationStore (no database)
    ├── sqlite_url: URL of a throwaway SQLite file in tmp_path
    ├── store: real LocationStore connected to that SQLite file (aiosqlite)
    ├── test_client: HTTPX AsyncClient against an app using `store`
    ├── mock_client: HTTPX AsyncClient against an app using `mock_store`
    └── sample_payload: request body from the API documentation
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REPORT_MISSING_AS_SUCCESS"] = "false"

from lokasi.main import create_app  # noqa: E402
from lokasi.services.location_store import LocationStore  # noqa: E402


@pytest.fixture
def mock_store():
    """
    Provides a mock LocationStore.

    Usage:
        async def test_get(mock_store):
            mock_store.find_one.return_value = {...}
    """
    store = MagicMock(spec=LocationStore)
    store.is_connected = True
    store.find_one = AsyncMock(return_value=None)
    store.find_all = AsyncMock(return_value=[])
    store.insert_one = AsyncMock(return_value=None)
    store.update_one = AsyncMock(return_value=1)
    store.delete_one = AsyncMock(return_value=1)
    store.ping = AsyncMock(return_value=True)
    store.connect = AsyncMock()
    store.close = AsyncMock()
    return store


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'lokasi_test.db'}"


@pytest_asyncio.fixture
async def store(sqlite_url):
    """A LocationStore connected to a fresh SQLite database."""
    location_store = LocationStore(database_url=sqlite_url, connect_timeout=5.0)
    await location_store.connect()
    yield location_store
    await location_store.close()


def _client_for(app):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to an app backed by the SQLite store.

    ASGITransport does not run the lifespan, so the store is connected by
    the `store` fixture instead.
    """
    app = create_app(store=store)
    async with _client_for(app) as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """HTTPX AsyncClient talking to an app backed by `mock_store`."""
    app = create_app(store=mock_store)
    async with _client_for(app) as client:
        yield client


@pytest.fixture
def sample_payload():
    return {
        "nama": "Taman",
        "kategori": "Park",
        "deskripsi": "x",
        "koordinat": {"coordinates": [106.8, -6.2]},
    }


@pytest.fixture
def sample_document():
    return {
        "_id": "65a4f1c29b1e0d44a7c3f812",
        "nama": "Monas",
        "kategori": "Landmark",
        "deskripsi": "Monumen Nasional",
        "koordinat": {"type": "Point", "coordinates": [106.8272, -6.1754]},
    }
