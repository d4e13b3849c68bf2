from .photo_repository import PhotoRepository

__all__ = ["PhotoRepository"]
