from typing import TYPE_CHECKING
from ...domain.repositories.photo_repository import PhotoRepository
from ...infrastructure.db.mongo_photo_repository import MongoPhotoRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets collections from database provider and creates repository instances.
        """
        photo_collection = container.get("photo_collection")
        
        container.register_singleton(
            PhotoRepository,
            MongoPhotoRepository(photo_collection=photo_collection)
        )
