# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

# External package imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from ...domain.models.photo import Photo
from ...utils.datetime_utils import to_iso


@dataclass(frozen=True)
class UploadedImage:
    """An uploaded file as received by the HTTP layer"""
    data: bytes
    original_name: Optional[str] = None
    content_type: Optional[str] = None


class DetectedObjectResponse(BaseModel):
    """DTO for one detected object"""
    name: str
    confidence: float
    description: str = ""
    category: str


class PhotoMetadataResponse(BaseModel):
    """DTO for the metadata block of a photo (also the upload response payload)"""
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    original_name: Optional[str] = Field(default=None, alias="originalName")
    filename: str
    file_url: str = Field(alias="fileUrl")
    is_local_storage: bool = Field(alias="isLocalStorage")
    storage_backend: str = Field(alias="storageBackend")
    size: int = 0
    mimetype: Optional[str] = None
    description: str
    detected_objects: List[DetectedObjectResponse] = Field(default_factory=list, alias="detectedObjects")
    object_categories: List[str] = Field(default_factory=list, alias="objectCategories")
    analysis_timestamp: Optional[str] = Field(default=None, alias="analysisTimestamp")
    uploaded_at: Optional[str] = Field(default=None, alias="uploadedAt")
    error: Optional[str] = None


class PhotoResponse(BaseModel):
    """DTO for a stored photo"""
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    filename: str
    file_url: str = Field(alias="fileUrl")
    is_local_storage: bool = Field(alias="isLocalStorage")
    description: str
    metadata: PhotoMetadataResponse
    created_at: datetime


class UploadPhotoResponse(BaseModel):
    """DTO for a successful upload"""
    success: bool = True
    data: PhotoMetadataResponse


class DeletePhotoResponse(BaseModel):
    """DTO for a successful delete"""
    model_config = ConfigDict(populate_by_name=True)
    
    success: bool = True
    deleted_id: str = Field(alias="deletedId")


class ErrorResponse(BaseModel):
    """DTO for every error response"""
    success: bool = False
    error: str


def to_photo_metadata(photo: Photo) -> PhotoMetadataResponse:
    """Build the metadata DTO from a Photo domain model"""
    return PhotoMetadataResponse(
        id=photo.id,
        original_name=photo.original_name,
        filename=photo.filename,
        file_url=photo.file_url,
        is_local_storage=photo.is_local_storage,
        storage_backend=photo.storage_backend,
        size=photo.size,
        mimetype=photo.mimetype,
        description=photo.description,
        detected_objects=[
            DetectedObjectResponse(
                name=obj.name,
                confidence=obj.confidence,
                description=obj.description,
                category=obj.category,
            )
            for obj in photo.detected_objects
        ],
        object_categories=list(photo.object_categories),
        analysis_timestamp=to_iso(photo.analysis_timestamp),
        uploaded_at=to_iso(photo.uploaded_at),
        error=photo.analysis_error,
    )


def to_photo_response(photo: Photo) -> PhotoResponse:
    """Build the full photo DTO from a Photo domain model"""
    return PhotoResponse(
        id=photo.id,
        filename=photo.filename,
        file_url=photo.file_url,
        is_local_storage=photo.is_local_storage,
        description=photo.description,
        metadata=to_photo_metadata(photo),
        created_at=photo.created_at,
    )
