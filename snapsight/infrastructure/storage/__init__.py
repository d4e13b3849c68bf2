"""Blob storage backends and the placement policy that chooses between them"""

from .local_blob_store import LocalBlobStore
from .s3_blob_store import S3BlobStore
from .storage_placement import PlacementAttempt, StoragePlacementService

__all__ = [
    "LocalBlobStore",
    "S3BlobStore",
    "PlacementAttempt",
    "StoragePlacementService",
]
