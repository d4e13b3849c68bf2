from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_photo_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the database and its collections in the container.
        Reuses the handle created at startup if the connection already exists.
        """
        container.register_singleton("database", get_database())
        container.register_singleton("photo_collection", get_photo_collection())
