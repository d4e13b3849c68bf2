"""
Blob placement policy: remote bucket first, local disk as fallback.

Placement never raises. The returned descriptor's backend is the only
signal of which path was taken, and its fallback_reason records why the
preferred backend was not used.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple

from ...domain.exceptions import BlobDeletionError, BlobStorageError
from ...domain.models.placement import PlacementDescriptor, StorageBackend
from .local_blob_store import LocalBlobStore
from .s3_blob_store import S3BlobStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementAttempt:
    """Tagged result of one placement strategy"""
    backend: str
    succeeded: bool
    url: Optional[str] = None
    reason: Optional[str] = None


PlacementStrategy = Callable[[str, bytes, str], Awaitable[PlacementAttempt]]


class StoragePlacementService:
    """Decides where an uploaded blob lives and removes it again on delete"""
    
    def __init__(
        self,
        local_store: LocalBlobStore,
        remote_store: Optional[S3BlobStore] = None,
    ) -> None:
        self.local_store = local_store
        self.remote_store = remote_store
    
    def strategies(self) -> List[Tuple[str, PlacementStrategy]]:
        """Placement strategies in order of preference"""
        return [
            (StorageBackend.REMOTE, self._place_remote),
            (StorageBackend.LOCAL, self._place_local),
        ]
    
    async def place(self, data: bytes, content_type: str, key: str) -> PlacementDescriptor:
        """
        Store a blob under `key` on the first backend that accepts it.
        
        Args:
            data: Raw blob bytes
            content_type: MIME type of the blob
            key: Storage key (flat filename)
            
        Returns:
            PlacementDescriptor naming the backend that holds the blob
        """
        reasons: List[str] = []
        for backend, strategy in self.strategies():
            attempt = await strategy(key, data, content_type)
            if attempt.succeeded:
                return PlacementDescriptor(
                    key=key,
                    url=attempt.url or "",
                    backend=backend,
                    fallback_reason="; ".join(reasons) or None,
                )
            reasons.append(attempt.reason or f"{backend} placement failed")
        
        # Local write failed too; the record still points at local disk
        logger.error(f"All placement strategies failed for {key}: {'; '.join(reasons)}")
        return PlacementDescriptor(
            key=key,
            url=self.local_store.url_for(key),
            backend=StorageBackend.LOCAL,
            fallback_reason="; ".join(reasons),
        )
    
    async def delete(self, descriptor: PlacementDescriptor) -> None:
        """
        Delete a blob from the backend named by its descriptor.
        
        A missing local file is a no-op.
        
        Raises:
            BlobDeletionError: If the backend cannot delete the blob
        """
        if descriptor.is_local:
            removed = await self.local_store.delete(descriptor.key)
            if not removed:
                logger.info(f"Local blob {descriptor.key} already absent")
            return
        
        if self.remote_store is None:
            raise BlobDeletionError(
                f"Blob {descriptor.key} is in remote storage but remote storage is not configured"
            )
        await self.remote_store.delete(descriptor.key)
    
    async def _place_remote(self, key: str, data: bytes, content_type: str) -> PlacementAttempt:
        if self.remote_store is None:
            return PlacementAttempt(
                backend=StorageBackend.REMOTE,
                succeeded=False,
                reason="remote storage not configured",
            )
        
        try:
            url = await self.remote_store.save(key, data, content_type)
        except BlobStorageError as e:
            logger.warning(f"Remote placement failed, falling back to local disk: {e.message}")
            return PlacementAttempt(
                backend=StorageBackend.REMOTE,
                succeeded=False,
                reason=f"remote placement failed: {e.message}",
            )
        except Exception as e:
            logger.error(f"Unexpected error in remote placement of {key}: {e}", exc_info=True)
            return PlacementAttempt(
                backend=StorageBackend.REMOTE,
                succeeded=False,
                reason=f"remote placement failed: {e}",
            )
        
        await self._discard_local_copy(key)
        return PlacementAttempt(backend=StorageBackend.REMOTE, succeeded=True, url=url)
    
    async def _place_local(self, key: str, data: bytes, content_type: str) -> PlacementAttempt:
        try:
            await self.local_store.save(key, data)
        except BlobStorageError as e:
            return PlacementAttempt(
                backend=StorageBackend.LOCAL,
                succeeded=False,
                reason=f"local placement failed: {e.message}",
            )
        except Exception as e:
            logger.error(f"Unexpected error in local placement of {key}: {e}", exc_info=True)
            return PlacementAttempt(
                backend=StorageBackend.LOCAL,
                succeeded=False,
                reason=f"local placement failed: {e}",
            )
        return PlacementAttempt(
            backend=StorageBackend.LOCAL,
            succeeded=True,
            url=self.local_store.url_for(key),
        )
    
    async def _discard_local_copy(self, key: str) -> None:
        try:
            await self.local_store.delete(key)
        except BlobDeletionError as e:
            logger.warning(f"Could not remove transient local copy of {key}: {e.message}")
