"""
Showcase Backend — Record Store Unit Tests
==========================================

What:  Tests for RecordStore with a mocked motor client and collection.
Why:   Tests should not require a running MongoDB.

What we test:
    ✅ insert returns the record with a string _id and leaves the input untouched
    ✅ list_all renders every _id as a string
    ✅ Driver errors become RecordStoreError
    ✅ Unconnected store refuses operations
    ✅ connect() pings and raises when the server is unreachable
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from app.config import Settings
from app.exceptions import RecordStoreError
from app.services.record_store import RecordStore


def make_client(collection):
    """A MagicMock motor client whose default database yields `collection`."""
    client = MagicMock()
    client.get_default_database.return_value.__getitem__.return_value = collection
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


class TestRecordStoreOperations:

    @pytest.mark.asyncio
    async def test_insert_returns_record_with_string_id(self, mock_collection):
        oid = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=oid)
        store = RecordStore(client=make_client(mock_collection))
        record = {"artist_name": "Jane", "artist_image": ""}

        stored = await store.insert(record)

        assert stored == {"artist_name": "Jane", "artist_image": "", "_id": str(oid)}
        assert "_id" not in record
        mock_collection.insert_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_wraps_driver_errors(self, mock_collection):
        mock_collection.insert_one.side_effect = ServerSelectionTimeoutError("no servers")
        store = RecordStore(client=make_client(mock_collection))

        with pytest.raises(RecordStoreError, match="no servers"):
            await store.insert({"artist_name": "Jane"})

    @pytest.mark.asyncio
    async def test_list_all_serializes_ids(self, mock_collection):
        first, second = ObjectId(), ObjectId()
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[
            {"_id": first, "artist_name": "One"},
            {"_id": second, "artist_name": "Two"},
        ])
        mock_collection.find.return_value = cursor
        store = RecordStore(client=make_client(mock_collection))

        records = await store.list_all()

        assert records == [
            {"_id": str(first), "artist_name": "One"},
            {"_id": str(second), "artist_name": "Two"},
        ]
        mock_collection.find.assert_called_once_with({})

    @pytest.mark.asyncio
    async def test_list_all_empty(self, mock_collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        mock_collection.find.return_value = cursor
        store = RecordStore(client=make_client(mock_collection))

        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_unconnected_store_refuses_operations(self):
        store = RecordStore()

        assert store.connected is False
        with pytest.raises(RecordStoreError, match="not connected"):
            await store.insert({"artist_name": "Jane"})
        with pytest.raises(RecordStoreError, match="not connected"):
            await store.list_all()


class TestRecordStoreLifecycle:

    @pytest.mark.asyncio
    async def test_connect_pings_server(self, mock_collection):
        client = make_client(mock_collection)
        store = RecordStore(client=client)

        await store.connect()

        client.admin.command.assert_awaited_with("ping")
        assert store.connected is True

    @pytest.mark.asyncio
    async def test_connect_failure_raises(self, mock_collection):
        client = make_client(mock_collection)
        client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("timed out"))
        store = RecordStore(client=client)

        with pytest.raises(RecordStoreError, match="Could not connect"):
            await store.connect()
        assert store.connected is False

    def test_explicit_database_name_wins(self):
        client = MagicMock()
        config = Settings(mongo_database="site", mongo_collection="entries")

        RecordStore(config=config, client=client)

        client.__getitem__.assert_called_once_with("site")
        client.__getitem__.return_value.__getitem__.assert_called_once_with("entries")
        client.get_default_database.assert_not_called()

    @pytest.mark.asyncio
    async def test_ping_without_client_is_false(self):
        assert await RecordStore().ping() is False

    @pytest.mark.asyncio
    async def test_close_disconnects(self, mock_collection):
        client = make_client(mock_collection)
        store = RecordStore(client=client)

        await store.close()

        client.close.assert_called_once()
        assert store.connected is False
