from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .storage_provider import StorageProvider
from .detection_provider import DetectionProvider
from .photo_provider import PhotoProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "StorageProvider",
    "DetectionProvider",
    "PhotoProvider",
]
