"""Local-disk blob store used as the fallback placement backend."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from ...domain.constants import LOCAL_UPLOAD_URL_PREFIX
from ...domain.exceptions import BlobDeletionError, BlobStorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """
    Stores blobs as flat files in a single upload directory.
    
    Keys are plain filenames; anything that would resolve outside the
    upload directory is rejected.
    """
    
    def __init__(self, upload_dir: str, url_prefix: str = LOCAL_UPLOAD_URL_PREFIX) -> None:
        self.upload_dir = Path(upload_dir).resolve()
        self.url_prefix = url_prefix.rstrip("/")
    
    def ensure_directory(self) -> bool:
        """
        Create the upload directory if missing.
        
        Read-only filesystems (serverless hosts) are tolerated: the failure is
        logged and later writes fail individually.
        """
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Could not create upload directory {self.upload_dir}: {e}")
            return False
    
    def url_for(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"
    
    def resolve_path(self, key: str) -> Optional[Path]:
        """Path for a key, or None if the key escapes the upload directory"""
        if not key:
            return None
        candidate = (self.upload_dir / key).resolve()
        if candidate.parent != self.upload_dir:
            return None
        return candidate
    
    def exists(self, key: str) -> bool:
        path = self.resolve_path(key)
        return path is not None and path.is_file()
    
    async def save(self, key: str, data: bytes) -> Path:
        path = self.resolve_path(key)
        if path is None:
            raise BlobStorageError(f"Invalid storage key: {key!r}")
        
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            raise BlobStorageError(f"Could not write {path}: {e}") from e
        
        logger.debug(f"Stored {len(data)} bytes at {path}")
        return path
    
    async def delete(self, key: str) -> bool:
        """
        Remove a stored blob.
        
        Returns:
            True if a file was removed, False if there was nothing to remove
            
        Raises:
            BlobDeletionError: If the file exists but cannot be removed
        """
        path = self.resolve_path(key)
        if path is None or not path.exists():
            return False
        
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BlobDeletionError(f"Could not delete {path}: {e}") from e
        return True
    
    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
