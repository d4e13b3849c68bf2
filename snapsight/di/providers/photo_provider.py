from typing import TYPE_CHECKING
from ...domain.repositories.photo_repository import PhotoRepository
from ...application.services.object_detection_service import ObjectDetectionService
from ...application.use_cases.photo.ingest_photo import IngestPhotoUseCase
from ...application.use_cases.photo.list_photos import ListPhotosUseCase
from ...application.use_cases.photo.get_photo import GetPhotoUseCase
from ...application.use_cases.photo.delete_photo import DeletePhotoUseCase
from ...infrastructure.storage.storage_placement import StoragePlacementService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class PhotoProvider:
    """Photo use case provider - registers all photo-related use cases"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all photo use cases.
        Use cases are created on-demand via factories.
        """
        # Register IngestPhotoUseCase
        container.register_factory(
            IngestPhotoUseCase,
            lambda: IngestPhotoUseCase(
                photo_repository=container.get(PhotoRepository),
                storage_placement=container.get(StoragePlacementService),
                object_detection=container.get(ObjectDetectionService),
            )
        )
        
        # Register ListPhotosUseCase
        container.register_factory(
            ListPhotosUseCase,
            lambda: ListPhotosUseCase(
                photo_repository=container.get(PhotoRepository),
            )
        )
        
        # Register GetPhotoUseCase
        container.register_factory(
            GetPhotoUseCase,
            lambda: GetPhotoUseCase(
                photo_repository=container.get(PhotoRepository),
            )
        )
        
        # Register DeletePhotoUseCase
        container.register_factory(
            DeletePhotoUseCase,
            lambda: DeletePhotoUseCase(
                photo_repository=container.get(PhotoRepository),
                storage_placement=container.get(StoragePlacementService),
            )
        )
