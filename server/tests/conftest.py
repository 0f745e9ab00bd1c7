"""Test configuration and fixtures."""

import uuid
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from tour_catalog.core.config import settings
from tour_catalog.core.security import create_access_token, hash_password
from tour_catalog.main import create_app
from tour_catalog.models.admin import ADMIN_COLLECTION
from tour_catalog.models.tour import TOURS_COLLECTION
from tour_catalog.services.media_service import UploadResult

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery staple"


class FakeUploader:
    """In-process image uploader that records what it was given."""

    def __init__(self):
        self.uploads: list[bytes] = []
        self.error: Optional[Exception] = None

    async def upload(self, path: Path) -> UploadResult:
        path = Path(path)
        content = path.read_bytes()
        path.unlink()
        if self.error is not None:
            raise self.error
        self.uploads.append(content)
        number = len(self.uploads)
        return UploadResult(
            url=f"https://images.example.com/travel_website/tours/tour-{number}.jpg",
            public_id=f"travel_website/tours/tour-{number}",
        )


class StubGateway:
    """Gateway that hands out an in-memory database."""

    def __init__(self, db, reachable: bool = True):
        self.db = db
        self.reachable = reachable

    async def connect(self):
        return self.db

    async def ping(self) -> bool:
        return self.reachable

    async def ensure_indexes(self) -> None:
        return None

    async def close(self) -> None:
        return None


@pytest.fixture
def test_db():
    """Fresh in-memory database for each test."""
    client = AsyncMongoMockClient()
    return client[f"tour_catalog_test_{uuid.uuid4().hex}"]


@pytest.fixture
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point staged uploads at a per-test directory."""
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(directory))
    return directory


@pytest.fixture
def gateway(test_db):
    return StubGateway(test_db)


@pytest.fixture
def test_app(gateway, fake_uploader, upload_dir):
    """Create a test FastAPI application backed by the in-memory database."""
    return create_app(gateway=gateway, uploader=fake_uploader)


@pytest_asyncio.fixture
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers():
    """Authorization header carrying a valid admin token."""
    token = create_access_token(str(ObjectId()), ADMIN_USERNAME)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_credentials():
    """Username and clear-text password of the seeded admin."""
    return ADMIN_USERNAME, ADMIN_PASSWORD


@pytest_asyncio.fixture
async def admin_account(test_db):
    """Admin document with a hashed password."""
    document = {"username": ADMIN_USERNAME, "password_hash": hash_password(ADMIN_PASSWORD)}
    result = await test_db[ADMIN_COLLECTION].insert_one(document)
    document["_id"] = result.inserted_id
    return document


@pytest.fixture
def sample_tour_form():
    """Admin form fields for a tour."""
    return {
        "package_name": "Best of Kerala",
        "tour_duration": "5 Nights / 6 Days",
        "tour_destination": "Kochi, Munnar, Alleppey",
        "tour_price": "24999",
        "theme": "Backwaters",
        "indian": "Yes",
        "inclusions": "Hotels, breakfast, transfers",
        "exclusions": "Flights",
        "itinerary": '[{"title": "Day 1", "description": "Arrive in Kochi"}, {"title": "Day 2"}]',
    }


@pytest.fixture
def insert_tour(test_db):
    """Insert a tour document directly and return it."""

    async def _insert(**fields):
        document = {
            "package_name": "Tour",
            "url": f"tour-{uuid.uuid4().hex[:8]}",
            "theme": "Adventure",
            "indian": "No",
            "international": "No",
            "fixed_departure": "No",
            "itinerary": [],
            "image": None,
        }
        document.update(fields)
        result = await test_db[TOURS_COLLECTION].insert_one(document)
        document["_id"] = result.inserted_id
        return document

    return _insert
