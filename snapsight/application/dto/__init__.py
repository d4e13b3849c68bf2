from .photo_dto import (
    UploadedImage,
    DetectedObjectResponse,
    PhotoMetadataResponse,
    PhotoResponse,
    UploadPhotoResponse,
    DeletePhotoResponse,
    ErrorResponse,
    to_photo_metadata,
    to_photo_response,
)

__all__ = [
    "UploadedImage",
    "DetectedObjectResponse",
    "PhotoMetadataResponse",
    "PhotoResponse",
    "UploadPhotoResponse",
    "DeletePhotoResponse",
    "ErrorResponse",
    "to_photo_metadata",
    "to_photo_response",
]
