# Standard library imports
import logging
from typing import Optional, List, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING

# Local application imports
from ...domain.repositories.photo_repository import PhotoRepository
from ...domain.models.photo import Photo
from ...domain.models.detected_object import DetectedObject
from ...domain.models.placement import StorageBackend
from ...domain.constants import PhotoFields, PhotoMetadataFields
from ...domain.exceptions import PhotoRepositoryError
from ...utils.datetime_utils import ensure_utc, parse_iso, to_iso
from .mongo_connection import get_photo_collection

logger = logging.getLogger(__name__)


class MongoPhotoRepository(PhotoRepository):
    """MongoDB implementation of PhotoRepository"""
    
    def __init__(self, photo_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.photo_collection = photo_collection if photo_collection is not None else get_photo_collection()
    
    async def insert(self, photo: Photo) -> Photo:
        """Insert a new photo document keyed by the photo id"""
        if not photo:
            raise ValueError("Photo cannot be None")
        
        try:
            await self.photo_collection.insert_one(self._photo_to_document(photo))
            return photo
        except Exception as e:
            logger.error(f"Error inserting photo {photo.id}: {e}")
            raise PhotoRepositoryError(f"Error inserting photo: {str(e)}") from e
    
    async def list_all(self) -> List[Photo]:
        """List all photos, newest first"""
        try:
            cursor = self.photo_collection.find({}).sort(PhotoFields.CREATED_AT, DESCENDING)
            photos = []
            async for document in cursor:
                photos.append(self._document_to_photo(document))
            return photos
        except Exception as e:
            logger.error(f"Error listing photos: {e}")
            raise PhotoRepositoryError(f"Error listing photos: {str(e)}") from e
    
    async def find_by_id(self, photo_id: str) -> Optional[Photo]:
        """Find photo by ID"""
        if not photo_id:
            return None
        
        try:
            document = await self.photo_collection.find_one({PhotoFields.MONGO_ID: photo_id})
            if document is None:
                return None
            return self._document_to_photo(document)
        except Exception as e:
            logger.error(f"Error finding photo {photo_id}: {e}")
            raise PhotoRepositoryError(f"Error finding photo by ID: {str(e)}") from e
    
    async def delete_by_id(self, photo_id: str) -> bool:
        """Delete photo row by ID"""
        if not photo_id:
            return False
        
        try:
            result = await self.photo_collection.delete_one({PhotoFields.MONGO_ID: photo_id})
            return result.deleted_count > 0
        except Exception as e:
            logger.error(f"Error deleting photo {photo_id}: {e}")
            raise PhotoRepositoryError(f"Error deleting photo: {str(e)}") from e
    
    def _document_to_photo(self, document: Dict[str, Any]) -> Photo:
        """Convert MongoDB document to Photo domain model"""
        if not document:
            raise ValueError("Invalid document: document is None or empty")
        
        metadata = document.get(PhotoFields.METADATA) or {}
        backend = document.get(PhotoFields.STORAGE_BACKEND) or metadata.get(PhotoMetadataFields.STORAGE_BACKEND)
        if backend is None:
            is_local = document.get(PhotoFields.IS_LOCAL_STORAGE, True)
            backend = StorageBackend.LOCAL if is_local else StorageBackend.REMOTE
        
        created_at = ensure_utc(document.get(PhotoFields.CREATED_AT))
        
        return Photo(
            id=str(document[PhotoFields.MONGO_ID]),
            filename=document.get(PhotoFields.FILENAME, ""),
            file_url=document.get(PhotoFields.FILE_URL) or metadata.get(PhotoMetadataFields.FILE_URL, ""),
            storage_backend=backend,
            description=document.get(PhotoFields.DESCRIPTION, ""),
            created_at=created_at,
            uploaded_at=parse_iso(metadata.get(PhotoMetadataFields.UPLOADED_AT)) or created_at,
            detected_objects=[
                DetectedObject.from_dict(item)
                for item in metadata.get(PhotoMetadataFields.DETECTED_OBJECTS, [])
            ],
            object_categories=list(metadata.get(PhotoMetadataFields.OBJECT_CATEGORIES, [])),
            original_name=metadata.get(PhotoMetadataFields.ORIGINAL_NAME),
            size=int(metadata.get(PhotoMetadataFields.SIZE, 0) or 0),
            mimetype=metadata.get(PhotoMetadataFields.MIMETYPE),
            analysis_timestamp=parse_iso(metadata.get(PhotoMetadataFields.ANALYSIS_TIMESTAMP)),
            analysis_error=metadata.get(PhotoMetadataFields.ERROR),
        )
    
    def _photo_to_document(self, photo: Photo) -> Dict[str, Any]:
        """Convert Photo domain model to MongoDB document"""
        metadata: Dict[str, Any] = {
            PhotoMetadataFields.ID: photo.id,
            PhotoMetadataFields.ORIGINAL_NAME: photo.original_name,
            PhotoMetadataFields.FILENAME: photo.filename,
            PhotoMetadataFields.FILE_URL: photo.file_url,
            PhotoMetadataFields.IS_LOCAL_STORAGE: photo.is_local_storage,
            PhotoMetadataFields.STORAGE_BACKEND: photo.storage_backend,
            PhotoMetadataFields.SIZE: photo.size,
            PhotoMetadataFields.MIMETYPE: photo.mimetype,
            PhotoMetadataFields.DESCRIPTION: photo.description,
            PhotoMetadataFields.DETECTED_OBJECTS: [obj.to_dict() for obj in photo.detected_objects],
            PhotoMetadataFields.OBJECT_CATEGORIES: list(photo.object_categories),
            PhotoMetadataFields.ANALYSIS_TIMESTAMP: to_iso(photo.analysis_timestamp),
            PhotoMetadataFields.UPLOADED_AT: to_iso(photo.uploaded_at),
            PhotoMetadataFields.ERROR: photo.analysis_error,
        }
        
        return {
            PhotoFields.MONGO_ID: photo.id,
            PhotoFields.FILENAME: photo.filename,
            PhotoFields.FILE_URL: photo.file_url,
            PhotoFields.IS_LOCAL_STORAGE: photo.is_local_storage,
            PhotoFields.STORAGE_BACKEND: photo.storage_backend,
            PhotoFields.DESCRIPTION: photo.description,
            PhotoFields.METADATA: metadata,
            PhotoFields.CREATED_AT: photo.created_at,
        }

