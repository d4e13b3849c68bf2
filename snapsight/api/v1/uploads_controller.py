"""
Byte-serving of locally stored photo blobs.

Endpoint:
  GET /uploads/{filename}
"""

import logging
from typing import Union

from fastapi import APIRouter, status
from fastapi.responses import FileResponse, JSONResponse

from ...di.container import get_container
from ...infrastructure.storage.local_blob_store import LocalBlobStore
from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.get("/uploads/{filename}", response_model=None)
async def serve_upload(filename: str) -> Union[FileResponse, JSONResponse]:
    """Return a locally stored blob, or 404 if it is absent"""
    local_store: LocalBlobStore = get_container().get(LocalBlobStore)
    
    if not local_store.exists(filename):
        logger.debug(f"Upload not found: {filename}")
        return error_response(status.HTTP_404_NOT_FOUND, "Image not found")
    
    return FileResponse(path=str(local_store.resolve_path(filename)))
