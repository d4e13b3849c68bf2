# Standard library imports
from typing import List

# Local application imports
from ....domain.repositories.photo_repository import PhotoRepository
from ...dto.photo_dto import PhotoResponse, to_photo_response


class ListPhotosUseCase:
    """Use case for listing all photos, newest first"""
    
    def __init__(
        self,
        photo_repository: PhotoRepository,
    ) -> None:
        self.photo_repository = photo_repository
    
    async def execute(self) -> List[PhotoResponse]:
        photos = await self.photo_repository.list_all()
        return [to_photo_response(photo) for photo in photos]
