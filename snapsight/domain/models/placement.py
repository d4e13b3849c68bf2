# Standard library imports
from dataclasses import dataclass
from typing import Optional


class StorageBackend:
    """Backends a blob can be placed on"""
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class PlacementDescriptor:
    """
    Where a blob was stored and how to reach it.
    
    `fallback_reason` is set when the preferred backend was skipped or
    failed, and also when the local write itself failed (the blob may then
    be missing even though the descriptor says local).
    """
    key: str
    url: str
    backend: str
    fallback_reason: Optional[str] = None
    
    def __post_init__(self) -> None:
        if self.backend not in (StorageBackend.LOCAL, StorageBackend.REMOTE):
            raise ValueError(f"Unknown storage backend: {self.backend}")
        if not self.key:
            raise ValueError("Storage key is required")
    
    @property
    def is_local(self) -> bool:
        return self.backend == StorageBackend.LOCAL
