from .ingest_photo import IngestPhotoUseCase
from .list_photos import ListPhotosUseCase
from .get_photo import GetPhotoUseCase
from .delete_photo import DeletePhotoUseCase

__all__ = ["IngestPhotoUseCase", "ListPhotosUseCase", "GetPhotoUseCase", "DeletePhotoUseCase"]
