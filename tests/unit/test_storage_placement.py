"""
Unit tests for StoragePlacementService (remote-first placement with local fallback).
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from snapsight.domain.exceptions import BlobDeletionError, BlobStorageError
from snapsight.domain.models.placement import PlacementDescriptor, StorageBackend
from snapsight.infrastructure.storage.local_blob_store import LocalBlobStore
from snapsight.infrastructure.storage.storage_placement import StoragePlacementService


@pytest.fixture
def local_store(tmp_path):
    store = LocalBlobStore(str(tmp_path / "uploads"))
    store.ensure_directory()
    return store


@pytest.fixture
def remote_store():
    store = MagicMock()
    store.save = AsyncMock(return_value="https://bucket.s3.us-east-1.amazonaws.com/abc.jpg")
    store.delete = AsyncMock(return_value=None)
    return store


class TestPlace:

    @pytest.mark.asyncio
    async def test_local_only_when_remote_not_configured(self, local_store):
        service = StoragePlacementService(local_store=local_store)

        descriptor = await service.place(b"bytes", "image/jpeg", "abc.jpg")

        assert descriptor.backend == StorageBackend.LOCAL
        assert descriptor.url == "/uploads/abc.jpg"
        assert descriptor.fallback_reason == "remote storage not configured"
        assert local_store.exists("abc.jpg")

    @pytest.mark.asyncio
    async def test_remote_success_leaves_no_local_copy(self, local_store, remote_store):
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)

        descriptor = await service.place(b"bytes", "image/jpeg", "abc.jpg")

        assert descriptor.backend == StorageBackend.REMOTE
        assert descriptor.url == "https://bucket.s3.us-east-1.amazonaws.com/abc.jpg"
        assert descriptor.fallback_reason is None
        assert not local_store.exists("abc.jpg")
        remote_store.save.assert_awaited_once_with("abc.jpg", b"bytes", "image/jpeg")

    @pytest.mark.asyncio
    async def test_remote_failure_falls_back_to_local(self, local_store, remote_store):
        remote_store.save.side_effect = BlobStorageError("bucket unreachable")
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)

        descriptor = await service.place(b"bytes", "image/jpeg", "abc.jpg")

        assert descriptor.backend == StorageBackend.LOCAL
        assert "bucket unreachable" in descriptor.fallback_reason
        assert local_store.exists("abc.jpg")

    @pytest.mark.asyncio
    async def test_unexpected_remote_error_falls_back_to_local(self, local_store, remote_store):
        remote_store.save.side_effect = RuntimeError("boom")
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)

        descriptor = await service.place(b"abc", "image/jpeg", "k.jpg")

        assert descriptor.backend == StorageBackend.LOCAL
        assert descriptor.url == "/uploads/k.jpg"
        assert "boom" in descriptor.fallback_reason
        assert local_store.exists("k.jpg")

    @pytest.mark.asyncio
    async def test_total_failure_still_returns_local_descriptor(self, local_store, remote_store):
        remote_store.save.side_effect = BlobStorageError("bucket unreachable")
        local_store.save = AsyncMock(side_effect=BlobStorageError("read-only filesystem"))
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)

        descriptor = await service.place(b"bytes", "image/jpeg", "abc.jpg")

        assert descriptor.backend == StorageBackend.LOCAL
        assert descriptor.url == "/uploads/abc.jpg"
        assert "bucket unreachable" in descriptor.fallback_reason
        assert "read-only filesystem" in descriptor.fallback_reason


class TestDelete:

    @pytest.mark.asyncio
    async def test_local_blob_removed(self, local_store):
        await local_store.save("abc.jpg", b"bytes")
        service = StoragePlacementService(local_store=local_store)

        await service.delete(PlacementDescriptor("abc.jpg", "/uploads/abc.jpg", StorageBackend.LOCAL))

        assert not local_store.exists("abc.jpg")

    @pytest.mark.asyncio
    async def test_missing_local_blob_is_noop(self, local_store):
        service = StoragePlacementService(local_store=local_store)
        await service.delete(PlacementDescriptor("gone.jpg", "/uploads/gone.jpg", StorageBackend.LOCAL))

    @pytest.mark.asyncio
    async def test_remote_blob_deleted_remotely(self, local_store, remote_store):
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)
        await service.delete(PlacementDescriptor("abc.jpg", "https://x/abc.jpg", StorageBackend.REMOTE))
        remote_store.delete.assert_awaited_once_with("abc.jpg")

    @pytest.mark.asyncio
    async def test_remote_blob_without_remote_store_fails(self, local_store):
        service = StoragePlacementService(local_store=local_store)
        with pytest.raises(BlobDeletionError):
            await service.delete(PlacementDescriptor("abc.jpg", "https://x/abc.jpg", StorageBackend.REMOTE))

    @pytest.mark.asyncio
    async def test_remote_delete_failure_propagates(self, local_store, remote_store):
        remote_store.delete.side_effect = BlobDeletionError("Object abc.jpg not found")
        service = StoragePlacementService(local_store=local_store, remote_store=remote_store)
        with pytest.raises(BlobDeletionError):
            await service.delete(PlacementDescriptor("abc.jpg", "https://x/abc.jpg", StorageBackend.REMOTE))
