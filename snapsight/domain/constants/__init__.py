"""Constants for domain model field names"""

from .photo_fields import PhotoFields, PhotoMetadataFields, DetectedObjectFields
from .media_constants import (
    DEFAULT_IMAGE_EXTENSION,
    DEFAULT_IMAGE_MIME,
    LOCAL_UPLOAD_URL_PREFIX,
    UNCATEGORIZED,
)

__all__ = [
    "PhotoFields",
    "PhotoMetadataFields",
    "DetectedObjectFields",
    "DEFAULT_IMAGE_EXTENSION",
    "DEFAULT_IMAGE_MIME",
    "LOCAL_UPLOAD_URL_PREFIX",
    "UNCATEGORIZED",
]
