"""
Shared pytest fixtures for SnapSight tests.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

from snapsight.domain.exceptions import PhotoRepositoryError
from snapsight.domain.models import DetectedObject, Photo, StorageBackend
from snapsight.domain.repositories.photo_repository import PhotoRepository


CUP_REPLY = (
    '[{"name":"cup","confidence":0.91,"category":"kitchenware","description":"a white mug"}]'
)


class InMemoryPhotoRepository(PhotoRepository):
    """PhotoRepository backed by a dict; set fail_with to simulate a database outage"""

    def __init__(self) -> None:
        self.photos: Dict[str, Photo] = {}
        self.fail_with: Optional[str] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise PhotoRepositoryError(self.fail_with)

    async def insert(self, photo: Photo) -> Photo:
        self._check()
        if photo.id in self.photos:
            raise PhotoRepositoryError(f"Duplicate id {photo.id}")
        self.photos[photo.id] = photo
        return photo

    async def list_all(self) -> List[Photo]:
        self._check()
        return sorted(self.photos.values(), key=lambda p: p.created_at, reverse=True)

    async def find_by_id(self, photo_id: str) -> Optional[Photo]:
        self._check()
        return self.photos.get(photo_id)

    async def delete_by_id(self, photo_id: str) -> bool:
        self._check()
        return self.photos.pop(photo_id, None) is not None


def make_photo(
    photo_id: str = "photo-1",
    backend: str = StorageBackend.LOCAL,
    created_at: Optional[datetime] = None,
    objects: Optional[List[DetectedObject]] = None,
) -> Photo:
    created = created_at or datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    if objects is None:
        objects = [
            DetectedObject(name="cup", confidence=0.91, description="a white mug", category="kitchenware")
        ]
    return Photo(
        id=photo_id,
        filename=f"{photo_id}.jpg",
        file_url=f"/uploads/{photo_id}.jpg",
        storage_backend=backend,
        description="Objects detected: " + ", ".join(o.name for o in objects),
        created_at=created,
        uploaded_at=created,
        detected_objects=objects,
        object_categories=list(dict.fromkeys(o.category for o in objects)),
        original_name="mug.jpg",
        size=10240,
        mimetype="image/jpeg",
        analysis_timestamp=created + timedelta(seconds=1),
    )


@pytest.fixture
def photo_repository():
    return InMemoryPhotoRepository()


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGODB_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_photo_db",
        "OPENAI_API_KEY": "test_openai_key_placeholder",
        "S3_BUCKET_NAME": "",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings(tmp_path):
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.mongo_collection_name = "photos"
    mock.mongo_server_selection_timeout_ms = 100
    mock.vision_api_key = "test_openai_key"
    mock.vision_api_url = "https://vision.test/v1/chat/completions"
    mock.vision_model = "gpt-4o-mini"
    mock.vision_max_tokens = 1500
    mock.vision_timeout_seconds = 5.0
    mock.upload_dir = str(tmp_path / "uploads")
    mock.remote_storage_configured = False

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("snapsight.core.config.get_settings", return_value=mock), patch(
        "snapsight.infrastructure.db.mongo_connection.get_settings", return_value=mock
    ), patch(
        "snapsight.infrastructure.external.vision_detection_client.get_settings", return_value=mock
    ):
        yield mock


@pytest.fixture
def photo_factory():
    """Factory building Photo domain objects with sensible defaults"""
    return make_photo


@pytest.fixture
def cup_reply():
    """Vision reply naming a single kitchenware cup"""
    return CUP_REPLY
