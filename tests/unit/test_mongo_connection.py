"""
Unit tests for the process-scoped MongoDB connection.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from snapsight.infrastructure.db import mongo_connection


@pytest.fixture(autouse=True)
def fresh_connection_state():
    mongo_connection.close_database_connection()
    with patch.object(mongo_connection, "_connect_lock", asyncio.Lock()):
        yield
    mongo_connection.close_database_connection()


def _fake_client(ping_side_effect=None):
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=ping_side_effect)
    return client


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_connection(mock_settings):
    async def slow_ping(*args, **kwargs):
        await asyncio.sleep(0.01)
        return {"ok": 1}

    client = _fake_client(slow_ping)
    with patch.object(mongo_connection, "_create_client", return_value=client) as create_client:
        databases = await asyncio.gather(*(mongo_connection.connect_to_database() for _ in range(5)))

    create_client.assert_called_once()
    client.admin.command.assert_awaited_once_with("ping")
    assert all(database is databases[0] for database in databases)


@pytest.mark.asyncio
async def test_failed_connection_not_cached(mock_settings):
    failing = _fake_client(ServerSelectionTimeoutError("no servers"))
    healthy = _fake_client()

    with patch.object(mongo_connection, "_create_client", side_effect=[failing, healthy]):
        with pytest.raises(ServerSelectionTimeoutError):
            await mongo_connection.connect_to_database()
        failing.close.assert_called_once()

        database = await mongo_connection.connect_to_database()

    assert database is healthy["test_db"]


def test_photo_collection_uses_configured_names(mock_settings):
    client = MagicMock()
    with patch.object(mongo_connection, "_create_client", return_value=client):
        mongo_connection.get_photo_collection()
    client.__getitem__.assert_called_with("test_db")


def test_close_resets_state(mock_settings):
    client = MagicMock()
    with patch.object(mongo_connection, "_create_client", return_value=client):
        mongo_connection.get_database()
    mongo_connection.close_database_connection()
    client.close.assert_called_once()
    assert mongo_connection._mongo_database is None
