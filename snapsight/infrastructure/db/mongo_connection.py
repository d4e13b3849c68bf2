# Standard library imports
import asyncio
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

# Local application imports
from ...core.config import get_settings

logger = logging.getLogger(__name__)


# Process-scoped MongoDB connection state
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None
# Serializes first-connection attempts; later callers reuse the cached handle
_connect_lock = asyncio.Lock()


def _create_client() -> AsyncIOMotorClient:
    settings = get_settings()
    return AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )


async def connect_to_database() -> AsyncIOMotorDatabase:
    """
    Connect once or reuse the cached database handle.
    
    Concurrent first callers wait on the same lock, so only one connection
    attempt is in flight. A failed attempt is not cached; the next caller
    tries again.
    
    Returns:
        MongoDB database instance
        
    Raises:
        Exception: whatever the driver raises when the server is unreachable
    """
    global _mongo_client, _mongo_database
    
    if _mongo_database is not None:
        return _mongo_database
    
    async with _connect_lock:
        if _mongo_database is not None:
            return _mongo_database
        
        settings = get_settings()
        client = _create_client()
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise
        
        _mongo_client = client
        _mongo_database = client[settings.mongo_database_name]
        logger.info(f"Connected to MongoDB database '{settings.mongo_database_name}'")
        return _mongo_database


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance without waiting for a server round trip.
    
    Motor connects lazily, so the handle is usable before
    connect_to_database() has verified the server. The handle created here
    is the one connect_to_database() later reuses.
    
    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database
    
    if _mongo_database is not None:
        return _mongo_database
    
    settings = get_settings()
    _mongo_client = _create_client()
    _mongo_database = _mongo_client[settings.mongo_database_name]
    return _mongo_database


def get_photo_collection() -> AsyncIOMotorCollection:
    """
    Get photos collection from MongoDB
    
    Returns:
        MongoDB collection for photos
    """
    settings = get_settings()
    return get_database()[settings.mongo_collection_name]


def close_database_connection() -> None:
    """Close the cached client (call on application shutdown)"""
    global _mongo_client, _mongo_database
    
    if _mongo_client is not None:
        _mongo_client.close()
        logger.info("MongoDB connection closed")
    _mongo_client = None
    _mongo_database = None
