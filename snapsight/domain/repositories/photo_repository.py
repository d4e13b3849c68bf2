from abc import ABC, abstractmethod
from typing import Optional
from ..models.photo import Photo


class PhotoRepository(ABC):
    """Repository interface - defines contract for photo data access"""
    
    @abstractmethod
    async def insert(self, photo: Photo) -> Photo:
        """Insert a new photo record"""
        pass
    
    @abstractmethod
    async def list_all(self) -> list[Photo]:
        """List all photos, newest first"""
        pass
    
    @abstractmethod
    async def find_by_id(self, photo_id: str) -> Optional[Photo]:
        """Find photo by ID"""
        pass
    
    @abstractmethod
    async def delete_by_id(self, photo_id: str) -> bool:
        """Delete photo row by ID; returns False when nothing was deleted"""
        pass
