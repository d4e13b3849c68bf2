# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

# Local application imports
from .detected_object import DetectedObject
from .placement import StorageBackend


@dataclass
class Photo:
    """
    Pure domain model for a stored photo and its analysis.
    
    A photo is created once by the ingest pipeline and afterwards only read
    or deleted. Its blob lives entirely on one backend, named by
    `storage_backend`.
    """
    id: str
    filename: str  # storage key of the blob
    file_url: str
    storage_backend: str
    description: str
    created_at: datetime
    uploaded_at: datetime
    detected_objects: List[DetectedObject] = field(default_factory=list)
    object_categories: List[str] = field(default_factory=list)
    original_name: Optional[str] = None
    size: int = 0
    mimetype: Optional[str] = None
    analysis_timestamp: Optional[datetime] = None
    analysis_error: Optional[str] = None
    
    def __post_init__(self) -> None:
        """Business validations"""
        if not self.id:
            raise ValueError("Photo ID is required")
        if not self.filename:
            raise ValueError("Photo filename is required")
        if self.storage_backend not in (StorageBackend.LOCAL, StorageBackend.REMOTE):
            raise ValueError(f"Unknown storage backend: {self.storage_backend}")
    
    @property
    def is_local_storage(self) -> bool:
        return self.storage_backend == StorageBackend.LOCAL
