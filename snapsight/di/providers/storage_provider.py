import logging
from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...infrastructure.storage.local_blob_store import LocalBlobStore
from ...infrastructure.storage.s3_blob_store import S3BlobStore
from ...infrastructure.storage.storage_placement import StoragePlacementService

if TYPE_CHECKING:
    from ..base_container import BaseContainer

logger = logging.getLogger(__name__)


class StorageProvider:
    """Blob storage provider - local disk always, S3 when configured"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()
        
        local_store = LocalBlobStore(settings.upload_dir)
        local_store.ensure_directory()
        
        remote_store = S3BlobStore.from_settings(settings)
        if remote_store is None:
            logger.info("Remote storage not configured; photos are stored on local disk")
        else:
            logger.info(f"Remote storage enabled: bucket {remote_store.bucket} ({remote_store.region})")
        
        container.register_singleton(LocalBlobStore, local_store)
        container.register_singleton(
            StoragePlacementService,
            StoragePlacementService(local_store=local_store, remote_store=remote_store),
        )
