"""
Showcase Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fake uploader, fake store, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_uploader: In-memory MediaUploader returning predictable URLs
    ├── fake_store: In-memory RecordStore replacement
    ├── mock_collection: AsyncMock standing in for a motor collection
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient wired to the app with fakes injected
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017/showcase_test"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-key-not-real"
os.environ["CLOUDINARY_API_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from app.exceptions import MediaUploadError, RecordStoreError
from app.services.media_base import MediaUploader


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeUploader(MediaUploader):
    """
    Returns https://cdn.example/<field>.jpg for every upload.

    Fields listed in `fail_fields` raise MediaUploadError instead; `urls`
    overrides the returned URL per field.
    """

    def __init__(self, urls: Optional[Dict[str, str]] = None, fail_fields=()):
        self.urls = urls or {}
        self.fail_fields = set(fail_fields)
        self.calls: List[tuple] = []

    async def upload(self, content: bytes, field_name: str) -> str:
        self.calls.append((field_name, content))
        if field_name in self.fail_fields:
            raise MediaUploadError(message="Invalid image file", field=field_name)
        return self.urls.get(field_name, f"https://cdn.example/{field_name}.jpg")

    async def health_check(self) -> bool:
        return True


class FakeRecordStore:
    """In-memory stand-in for RecordStore with the same public operations."""

    def __init__(self, fail: bool = False):
        self.documents: List[Dict[str, Any]] = []
        self.fail = fail

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if self.fail:
            raise RecordStoreError(message="connection refused")
        document = {**record, "_id": str(ObjectId())}
        self.documents.append(document)
        return dict(document)

    async def list_all(self) -> List[Dict[str, Any]]:
        if self.fail:
            raise RecordStoreError(message="connection refused")
        return [dict(doc) for doc in self.documents]

    async def ping(self) -> bool:
        return not self.fail


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def fake_store():
    return FakeRecordStore()


@pytest.fixture
def mock_collection():
    """
    Provides a mock motor collection.

    Usage:
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())
    """
    collection = MagicMock()
    collection.name = "uploads"
    collection.insert_one = AsyncMock()
    return collection


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9)."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def test_client(fake_uploader, fake_store):
    """
    Provides an async HTTP test client with the fakes injected.

    The lifespan does not run under ASGITransport, so no real Cloudinary or
    MongoDB client is created.

    Usage:
        async def test_listing(test_client):
            response = await test_client.get("/data")
    """
    from app.dependencies import get_media_uploader, get_record_store
    from app.main import app

    app.dependency_overrides[get_media_uploader] = lambda: fake_uploader
    app.dependency_overrides[get_record_store] = lambda: fake_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
