# Standard library imports
import logging
from typing import List, Optional, Union

# External package imports
from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.photo_dto import (
    DeletePhotoResponse,
    ErrorResponse,
    PhotoResponse,
    UploadedImage,
    UploadPhotoResponse,
)
from ...application.use_cases.photo.ingest_photo import IngestPhotoUseCase
from ...application.use_cases.photo.list_photos import ListPhotosUseCase
from ...application.use_cases.photo.get_photo import GetPhotoUseCase
from ...application.use_cases.photo.delete_photo import DeletePhotoUseCase
from ...di.container import get_container
from ...domain.exceptions import (
    BlobDeletionError,
    InvalidUploadError,
    PhotoNotFoundError,
    PhotoRepositoryError,
)
from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["photos"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post("/upload", response_model=UploadPhotoResponse, responses=_ERROR_RESPONSES)
async def upload_photo(
    photo: Optional[UploadFile] = File(None),
) -> Union[UploadPhotoResponse, JSONResponse]:
    """
    Upload a photo, analyze it and store its metadata
    
    Args:
        photo: Multipart file field "photo"
        
    Returns:
        UploadPhotoResponse whose data is the stored photo's metadata
    """
    container = get_container()
    ingest_photo_use_case = container.get(IngestPhotoUseCase)
    
    upload = None
    if photo is not None:
        upload = UploadedImage(
            data=await photo.read(),
            original_name=photo.filename,
            content_type=photo.content_type,
        )
    
    try:
        metadata = await ingest_photo_use_case.execute(upload)
    except InvalidUploadError as exception:
        return error_response(status.HTTP_400_BAD_REQUEST, exception.user_message)
    except PhotoRepositoryError as exception:
        logger.error(f"Database error while storing upload: {exception.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exception.user_message)
    
    return UploadPhotoResponse(data=metadata)


@router.get("/photos", response_model=List[PhotoResponse], responses=_ERROR_RESPONSES)
async def list_photos() -> Union[List[PhotoResponse], JSONResponse]:
    """
    List all photos, newest first
    
    Returns:
        List of PhotoResponse objects
    """
    container = get_container()
    list_photos_use_case = container.get(ListPhotosUseCase)
    
    try:
        return await list_photos_use_case.execute()
    except PhotoRepositoryError as exception:
        logger.error(f"Database error while listing photos: {exception.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exception.user_message)


@router.get("/photos/{photo_id}", response_model=PhotoResponse, responses=_ERROR_RESPONSES)
async def get_photo(photo_id: str) -> Union[PhotoResponse, JSONResponse]:
    """
    Get a photo by ID
    
    Args:
        photo_id: ID of the photo
        
    Returns:
        PhotoResponse with photo information
    """
    container = get_container()
    get_photo_use_case = container.get(GetPhotoUseCase)
    
    try:
        return await get_photo_use_case.execute(photo_id)
    except PhotoNotFoundError as exception:
        return error_response(status.HTTP_404_NOT_FOUND, exception.user_message)
    except PhotoRepositoryError as exception:
        logger.error(f"Database error while fetching photo {photo_id}: {exception.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exception.user_message)


@router.delete("/photos/{photo_id}", response_model=DeletePhotoResponse, responses=_ERROR_RESPONSES)
async def delete_photo(photo_id: str) -> Union[DeletePhotoResponse, JSONResponse]:
    """
    Delete a photo's blob and then its record
    
    Args:
        photo_id: ID of the photo
        
    Returns:
        DeletePhotoResponse with the deleted ID
    """
    container = get_container()
    delete_photo_use_case = container.get(DeletePhotoUseCase)
    
    try:
        deleted_id = await delete_photo_use_case.execute(photo_id)
    except PhotoNotFoundError as exception:
        return error_response(status.HTTP_404_NOT_FOUND, exception.user_message)
    except BlobDeletionError as exception:
        logger.error(f"Blob deletion failed for photo {photo_id}: {exception.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exception.user_message)
    except PhotoRepositoryError as exception:
        logger.error(f"Database error while deleting photo {photo_id}: {exception.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exception.user_message)
    
    return DeletePhotoResponse(deleted_id=deleted_id)
