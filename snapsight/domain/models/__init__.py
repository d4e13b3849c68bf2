from .detected_object import DetectedObject
from .placement import PlacementDescriptor, StorageBackend
from .photo import Photo

__all__ = ["DetectedObject", "PlacementDescriptor", "StorageBackend", "Photo"]
