from .mongo_connection import (
    connect_to_database,
    close_database_connection,
    get_database,
    get_photo_collection,
)
from .mongo_photo_repository import MongoPhotoRepository

__all__ = [
    "connect_to_database",
    "close_database_connection",
    "get_database",
    "get_photo_collection",
    "MongoPhotoRepository",
]
