"""
PhotoStash Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own temporary directory holding a SQLite database
       (aiosqlite driver) and an image directory, so ids start at 1 and no
       files leak between tests.

Fixture Hierarchy:
    test_settings     Settings pointing at the temporary database/image dir
    ├── database      Database with the photos table created
    │   └── photo_store
    ├── image_store   ImageStore on the temporary image dir
    └── app           create_app(test_settings), tables and dir prepared
        └── test_client   HTTPX AsyncClient over ASGITransport

    sample_image_bytes / make_stream   upload payload helpers
"""

import io
import os

# Environment for the module-level app in app.main, set before any app import.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.services.image_store import ImageStore
from app.services.photo_store import PhotoStore


class BytesStream:
    """Minimal async reader standing in for an UploadFile."""

    def __init__(self, content: bytes):
        self._buffer = io.BytesIO(content)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        image_dir=str(tmp_path / "image"),
        image_base_url="http://test/image",
        log_level="WARNING",
    )


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG bytes: SOI marker + JFIF header + EOI marker.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def make_stream():
    """Factory for async byte streams accepted by ImageStore.save()."""
    return BytesStream


@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings.sqlalchemy_url)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def photo_store(database):
    return PhotoStore(database)


@pytest.fixture
def image_store(test_settings):
    return ImageStore(test_settings.image_dir)


@pytest_asyncio.fixture
async def app(test_settings):
    """
    Application built from test_settings.

    ASGITransport does not run the lifespan, so the startup work it would do
    (tables, image directory) happens here.
    """
    application = create_app(test_settings)
    await application.state.database.create_tables()
    application.state.image_store.ensure_directory()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_list(test_client):
            response = await test_client.get("/photos")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
