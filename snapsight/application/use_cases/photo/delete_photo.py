# Standard library imports
import logging

# Local application imports
from ....domain.exceptions import BlobDeletionError, PhotoNotFoundError
from ....domain.models.placement import PlacementDescriptor
from ....domain.repositories.photo_repository import PhotoRepository
from ....infrastructure.storage.storage_placement import StoragePlacementService

logger = logging.getLogger(__name__)


class DeletePhotoUseCase:
    """Use case for deleting a photo's blob and then its record"""
    
    def __init__(
        self,
        photo_repository: PhotoRepository,
        storage_placement: StoragePlacementService,
    ) -> None:
        self.photo_repository = photo_repository
        self.storage_placement = storage_placement
    
    async def execute(self, photo_id: str) -> str:
        """
        Delete a photo
        
        The blob goes first. If it cannot be removed the record is kept, so
        the photo stays listed rather than pointing at nothing.
        
        Returns:
            The deleted photo's ID
            
        Raises:
            PhotoNotFoundError: If no photo has this ID
            BlobDeletionError: If the blob cannot be removed (record kept)
            PhotoRepositoryError: If the lookup or row deletion fails
        """
        photo = await self.photo_repository.find_by_id(photo_id)
        if not photo:
            raise PhotoNotFoundError(f"Photo {photo_id} not found")
        
        descriptor = PlacementDescriptor(
            key=photo.filename,
            url=photo.file_url,
            backend=photo.storage_backend,
        )
        try:
            await self.storage_placement.delete(descriptor)
        except BlobDeletionError:
            logger.error(f"Could not delete blob for photo {photo_id}; record kept")
            raise
        
        deleted = await self.photo_repository.delete_by_id(photo_id)
        if not deleted:
            # Removed concurrently between lookup and delete
            raise PhotoNotFoundError(f"Photo {photo_id} not found")
        
        logger.info(f"Deleted photo {photo_id} ({descriptor.backend} blob {descriptor.key})")
        return photo_id
