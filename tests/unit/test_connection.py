from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from chatter.shared.infrastructure.database.connection import MongoConnectionManager


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    return client


async def test_health_before_connect():
    manager = MongoConnectionManager("mongodb://localhost:27017", "chatter")

    health = await manager.health_check()

    assert health["status"] == "unhealthy"
    with pytest.raises(RuntimeError):
        manager.database


async def test_connect_pings_and_exposes_database(fake_client):
    manager = MongoConnectionManager("mongodb://db:27017", "chatter", server_selection_timeout_ms=1500)

    with patch(
        "chatter.shared.infrastructure.database.connection.AsyncIOMotorClient",
        return_value=fake_client,
    ) as client_cls:
        database = await manager.connect()

    client_cls.assert_called_once_with("mongodb://db:27017", serverSelectionTimeoutMS=1500, tz_aware=True)
    fake_client.admin.command.assert_awaited_with("ping")
    assert database is fake_client.__getitem__.return_value
    fake_client.__getitem__.assert_called_with("chatter")
    assert (await manager.health_check())["status"] == "healthy"


async def test_unreachable_server_reports_unhealthy(fake_client):
    fake_client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("timeout"))
    manager = MongoConnectionManager("mongodb://db:27017", "chatter", retry_attempts=2, retry_delay=0)

    with patch(
        "chatter.shared.infrastructure.database.connection.AsyncIOMotorClient",
        return_value=fake_client,
    ):
        await manager.connect()

    health = await manager.health_check()
    assert health["status"] == "unhealthy"
    assert fake_client.admin.command.await_count == 4


async def test_disconnect_closes_client(fake_client):
    manager = MongoConnectionManager("mongodb://db:27017", "chatter")

    with patch(
        "chatter.shared.infrastructure.database.connection.AsyncIOMotorClient",
        return_value=fake_client,
    ):
        await manager.connect()
    await manager.disconnect()
    await manager.disconnect()

    fake_client.close.assert_called_once()
    with pytest.raises(RuntimeError):
        manager.database
