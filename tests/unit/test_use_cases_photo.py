"""
Unit tests for the photo use cases (ingest, list, get, delete).
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from snapsight.application.dto.photo_dto import UploadedImage
from snapsight.application.services.object_detection_service import ObjectDetectionService
from snapsight.application.use_cases.photo.delete_photo import DeletePhotoUseCase
from snapsight.application.use_cases.photo.get_photo import GetPhotoUseCase
from snapsight.application.use_cases.photo.ingest_photo import (
    IngestPhotoUseCase,
    describe_objects,
    distinct_categories,
)
from snapsight.application.use_cases.photo.list_photos import ListPhotosUseCase
from snapsight.domain.exceptions import (
    BlobDeletionError,
    InvalidUploadError,
    PhotoNotFoundError,
    PhotoRepositoryError,
)
from snapsight.domain.models import DetectedObject, StorageBackend
from snapsight.infrastructure.storage.local_blob_store import LocalBlobStore
from snapsight.infrastructure.storage.storage_placement import StoragePlacementService


@pytest.fixture
def local_store(tmp_path):
    store = LocalBlobStore(str(tmp_path / "uploads"))
    store.ensure_directory()
    return store


@pytest.fixture
def storage_placement(local_store):
    return StoragePlacementService(local_store=local_store)


@pytest.fixture
def vision_client(cup_reply):
    client = AsyncMock()
    client.request_detection.return_value = cup_reply
    return client


@pytest.fixture
def ingest(photo_repository, storage_placement, vision_client):
    return IngestPhotoUseCase(
        photo_repository=photo_repository,
        storage_placement=storage_placement,
        object_detection=ObjectDetectionService(vision_client=vision_client),
    )


def _upload(data=b"\xff\xd8" + b"x" * 10238, name="mug.jpg", content_type="image/jpeg"):
    return UploadedImage(data=data, original_name=name, content_type=content_type)


class TestIngestPhotoUseCase:
    """Tests for IngestPhotoUseCase"""

    @pytest.mark.asyncio
    async def test_cup_upload_stored_locally(self, ingest, photo_repository, local_store):
        metadata = await ingest.execute(_upload())

        assert metadata.is_local_storage is True
        assert metadata.storage_backend == StorageBackend.LOCAL
        assert metadata.file_url == f"/uploads/{metadata.filename}"
        assert metadata.filename.endswith(".jpg")
        assert metadata.original_name == "mug.jpg"
        assert metadata.size == 10240
        assert metadata.mimetype == "image/jpeg"
        assert metadata.description == "Objects detected: cup"
        assert metadata.object_categories == ["kitchenware"]
        assert [obj.name for obj in metadata.detected_objects] == ["cup"]
        assert metadata.detected_objects[0].confidence == 0.91
        assert metadata.analysis_timestamp is not None
        assert metadata.error is None

        assert local_store.exists(metadata.filename)
        stored = photo_repository.photos[metadata.id]
        assert stored.filename == metadata.filename

    @pytest.mark.asyncio
    @pytest.mark.parametrize("upload", [None, UploadedImage(data=b"")])
    async def test_no_file_rejected(self, ingest, photo_repository, upload):
        with pytest.raises(InvalidUploadError):
            await ingest.execute(upload)
        assert photo_repository.photos == {}

    @pytest.mark.asyncio
    async def test_vision_failure_gives_placeholder_record(self, ingest, vision_client, photo_repository):
        vision_client.request_detection.side_effect = RuntimeError("network down")

        metadata = await ingest.execute(_upload())

        assert [obj.name for obj in metadata.detected_objects] == ["unknown_object_1", "unknown_object_2"]
        assert metadata.description == "Objects detected: unknown_object_1, unknown_object_2"
        assert metadata.object_categories == ["Uncategorized"]
        assert metadata.id in photo_repository.photos

    @pytest.mark.asyncio
    async def test_detection_crash_records_upload_only(self, photo_repository, storage_placement):
        detection = AsyncMock()
        detection.detect.side_effect = RuntimeError("adapter bug")
        use_case = IngestPhotoUseCase(
            photo_repository=photo_repository,
            storage_placement=storage_placement,
            object_detection=detection,
        )

        metadata = await use_case.execute(_upload())

        assert metadata.detected_objects == []
        assert metadata.object_categories == []
        assert metadata.description == "Image uploaded successfully"
        assert metadata.error == "Object detection failed"
        assert metadata.analysis_timestamp is None

    @pytest.mark.asyncio
    async def test_empty_detection_description(self, ingest, vision_client):
        vision_client.request_detection.return_value = "[]"
        metadata = await ingest.execute(_upload())
        assert metadata.description == "No specific objects detected"
        assert metadata.detected_objects == []

    @pytest.mark.asyncio
    async def test_repository_failure_propagates_and_keeps_blob(self, ingest, photo_repository, local_store):
        photo_repository.fail_with = "connection refused"

        with pytest.raises(PhotoRepositoryError):
            await ingest.execute(_upload())

        stored_files = list(local_store.upload_dir.iterdir())
        assert len(stored_files) == 1

    @pytest.mark.asyncio
    async def test_ids_and_keys_unique(self, ingest):
        first = await ingest.execute(_upload())
        second = await ingest.execute(_upload())
        assert first.id != second.id
        assert first.filename != second.filename

    @pytest.mark.asyncio
    async def test_mime_type_guessed_from_name(self, ingest):
        metadata = await ingest.execute(_upload(name="shot.png", content_type="application/octet-stream"))
        assert metadata.mimetype == "image/png"
        assert metadata.filename.endswith(".png")

    @pytest.mark.asyncio
    async def test_defaults_without_name_or_type(self, ingest):
        metadata = await ingest.execute(UploadedImage(data=b"raw"))
        assert metadata.mimetype == "image/jpeg"
        assert metadata.filename.endswith(".jpg")


class TestIngestHelpers:

    def test_describe_objects(self):
        objects = [DetectedObject("cup", 0.9), DetectedObject("table", 0.8)]
        assert describe_objects(objects) == "Objects detected: cup, table"
        assert describe_objects([]) == "No specific objects detected"

    def test_distinct_categories_keep_first_appearance(self):
        objects = [
            DetectedObject("cup", 0.9, category="kitchenware"),
            DetectedObject("chair", 0.9, category="furniture"),
            DetectedObject("plate", 0.9, category="kitchenware"),
        ]
        assert distinct_categories(objects) == ["kitchenware", "furniture"]


class TestListAndGet:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, photo_repository, photo_factory):
        base = datetime(2025, 1, 15, tzinfo=timezone.utc)
        for index in range(3):
            photo = photo_factory(photo_id=f"photo-{index}", created_at=base + timedelta(minutes=index))
            await photo_repository.insert(photo)

        photos = await ListPhotosUseCase(photo_repository=photo_repository).execute()

        assert [photo.id for photo in photos] == ["photo-2", "photo-1", "photo-0"]

    @pytest.mark.asyncio
    async def test_list_empty(self, photo_repository):
        assert await ListPhotosUseCase(photo_repository=photo_repository).execute() == []

    @pytest.mark.asyncio
    async def test_get_existing(self, photo_repository, photo_factory):
        await photo_repository.insert(photo_factory())

        photo = await GetPhotoUseCase(photo_repository=photo_repository).execute("photo-1")

        assert photo.id == "photo-1"
        assert photo.metadata.detected_objects[0].name == "cup"

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, photo_repository):
        with pytest.raises(PhotoNotFoundError):
            await GetPhotoUseCase(photo_repository=photo_repository).execute("nope")


class TestDeletePhotoUseCase:

    @pytest.mark.asyncio
    async def test_deletes_blob_then_row(self, photo_repository, photo_factory, storage_placement, local_store):
        photo = photo_factory()
        await local_store.save(photo.filename, b"bytes")
        await photo_repository.insert(photo)

        deleted_id = await DeletePhotoUseCase(photo_repository, storage_placement).execute(photo.id)

        assert deleted_id == photo.id
        assert photo.id not in photo_repository.photos
        assert not local_store.exists(photo.filename)

    @pytest.mark.asyncio
    async def test_missing_local_blob_still_deletes_row(self, photo_repository, photo_factory, storage_placement):
        await photo_repository.insert(photo_factory())

        await DeletePhotoUseCase(photo_repository, storage_placement).execute("photo-1")

        assert photo_repository.photos == {}

    @pytest.mark.asyncio
    async def test_unknown_id_raises(self, photo_repository, storage_placement):
        with pytest.raises(PhotoNotFoundError):
            await DeletePhotoUseCase(photo_repository, storage_placement).execute("nope")

    @pytest.mark.asyncio
    async def test_blob_failure_keeps_row(self, photo_repository, photo_factory, storage_placement):
        # Remote blob with no remote store configured cannot be removed
        await photo_repository.insert(photo_factory(backend=StorageBackend.REMOTE))

        with pytest.raises(BlobDeletionError):
            await DeletePhotoUseCase(photo_repository, storage_placement).execute("photo-1")

        assert "photo-1" in photo_repository.photos
