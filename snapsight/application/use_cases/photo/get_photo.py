# Local application imports
from ....domain.exceptions import PhotoNotFoundError
from ....domain.repositories.photo_repository import PhotoRepository
from ...dto.photo_dto import PhotoResponse, to_photo_response


class GetPhotoUseCase:
    """Use case for getting a photo by ID"""
    
    def __init__(
        self,
        photo_repository: PhotoRepository,
    ) -> None:
        self.photo_repository = photo_repository
    
    async def execute(self, photo_id: str) -> PhotoResponse:
        """
        Get a photo by ID
        
        Raises:
            PhotoNotFoundError: If no photo has this ID
            PhotoRepositoryError: If the lookup fails
        """
        photo = await self.photo_repository.find_by_id(photo_id)
        
        if not photo:
            raise PhotoNotFoundError(f"Photo {photo_id} not found")
        
        return to_photo_response(photo)
