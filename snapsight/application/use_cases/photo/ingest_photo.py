# Standard library imports
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Callable, List, Optional

# Local application imports
from ....domain.constants import DEFAULT_IMAGE_EXTENSION, DEFAULT_IMAGE_MIME
from ....domain.exceptions import InvalidUploadError
from ....domain.models.detected_object import DetectedObject
from ....domain.models.photo import Photo
from ....domain.repositories.photo_repository import PhotoRepository
from ....infrastructure.storage.storage_placement import StoragePlacementService
from ....utils.datetime_utils import utc_now
from ...dto.photo_dto import PhotoMetadataResponse, UploadedImage, to_photo_metadata
from ...services.object_detection_service import ObjectDetectionService

logger = logging.getLogger(__name__)

UPLOAD_ONLY_DESCRIPTION = "Image uploaded successfully"
NO_OBJECTS_DESCRIPTION = "No specific objects detected"
ANALYSIS_FAILED_ERROR = "Object detection failed"


def describe_objects(objects: List[DetectedObject]) -> str:
    """Human-readable summary of detected objects"""
    if not objects:
        return NO_OBJECTS_DESCRIPTION
    return "Objects detected: " + ", ".join(obj.name for obj in objects)


def distinct_categories(objects: List[DetectedObject]) -> List[str]:
    """Distinct categories in order of first appearance"""
    return list(dict.fromkeys(obj.category for obj in objects))


class IngestPhotoUseCase:
    """Use case for ingesting an uploaded photo: store, analyze, persist"""
    
    def __init__(
        self,
        photo_repository: PhotoRepository,
        storage_placement: StoragePlacementService,
        object_detection: ObjectDetectionService,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.photo_repository = photo_repository
        self.storage_placement = storage_placement
        self.object_detection = object_detection
        self.id_factory = id_factory
    
    async def execute(self, upload: Optional[UploadedImage]) -> PhotoMetadataResponse:
        """
        Ingest one uploaded photo
        
        Steps run strictly in sequence: placement, detection, persistence.
        Placement and detection absorb their own failures. A persistence
        failure propagates and leaves the stored blob in place.
        
        Args:
            upload: The uploaded file, or None if the request carried none
            
        Returns:
            PhotoMetadataResponse for the persisted record
            
        Raises:
            InvalidUploadError: If no file (or an empty one) was uploaded
            PhotoRepositoryError: If the record cannot be persisted
        """
        if upload is None or not upload.data:
            raise InvalidUploadError("No file uploaded")
        
        photo_id = self.id_factory()
        mime_type = self._resolve_mime_type(upload)
        storage_key = f"{uuid.uuid4()}{self._resolve_extension(upload, mime_type)}"
        
        placement = await self.storage_placement.place(upload.data, mime_type, storage_key)
        if placement.fallback_reason:
            logger.info(
                f"Photo {photo_id} stored on {placement.backend} backend ({placement.fallback_reason})"
            )
        
        analysis_error = None
        analysis_timestamp = None
        try:
            outcome = await self.object_detection.detect(upload.data, mime_type)
            detected_objects = outcome.objects
            description = describe_objects(detected_objects)
            analysis_timestamp = utc_now()
            logger.info(
                f"Photo {photo_id}: {len(detected_objects)} object(s) via {outcome.strategy}"
                + (f" ({outcome.fallback_reason})" if outcome.fallback_reason else "")
            )
        except Exception as e:
            logger.error(f"Error processing image {photo_id}: {e}", exc_info=True)
            detected_objects = []
            description = UPLOAD_ONLY_DESCRIPTION
            analysis_error = ANALYSIS_FAILED_ERROR
        
        now = utc_now()
        photo = Photo(
            id=photo_id,
            filename=placement.key,
            file_url=placement.url,
            storage_backend=placement.backend,
            description=description,
            created_at=now,
            uploaded_at=now,
            detected_objects=list(detected_objects),
            object_categories=distinct_categories(detected_objects),
            original_name=upload.original_name,
            size=len(upload.data),
            mimetype=mime_type,
            analysis_timestamp=analysis_timestamp,
            analysis_error=analysis_error,
        )
        
        saved_photo = await self.photo_repository.insert(photo)
        logger.info(f"Successfully saved photo {saved_photo.id}")
        
        return to_photo_metadata(saved_photo)
    
    @staticmethod
    def _resolve_mime_type(upload: UploadedImage) -> str:
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type.startswith("image/"):
            return content_type
        if upload.original_name:
            guessed, _ = mimetypes.guess_type(upload.original_name)
            if guessed and guessed.startswith("image/"):
                return guessed
        return DEFAULT_IMAGE_MIME
    
    @staticmethod
    def _resolve_extension(upload: UploadedImage, mime_type: str) -> str:
        if upload.original_name:
            suffix = Path(upload.original_name).suffix.lower()
            if suffix and suffix[1:].isalnum():
                return suffix
        return mimetypes.guess_extension(mime_type) or DEFAULT_IMAGE_EXTENSION
