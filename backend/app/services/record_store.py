"""
Showcase Backend — MongoDB Record Store
=======================================

What:  Insert-one and list-all over the `uploads` collection, plus the
       connection lifecycle (connect, readiness ping, close).
Why:   Keeps every MongoDB detail (client, ObjectId, driver errors) out of the
       workflow and route layers.
How:   Motor's AsyncIOMotorClient provides non-blocking access from the event
       loop. One client is created at startup and shared by all requests.
Who:   Created and connected in the application lifespan; injected into
       SubmissionService through FastAPI dependencies.

Connection Lifecycle:
    startup  → RecordStore.connect()   (create client, ping; raise if unreachable)
    requests → insert() / list_all()   (reuse the shared client)
    shutdown → RecordStore.close()

    A store that was never connected refuses every operation with
    RecordStoreError instead of failing on a missing handle.

Identifier handling:
    MongoDB assigns an ObjectId to `_id` on insert. Every document leaving this
    module has `_id` converted to its 24-character hex string so it can be
    JSON-serialized directly.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from app.config import Settings, settings as default_settings
from app.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

# What: Database used when neither MONGO_DATABASE nor the URI names one
DEFAULT_DATABASE = "showcase"


def _serialize(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a Mongo document with `_id` rendered as a string."""
    serialized = dict(document)
    if "_id" in serialized:
        serialized["_id"] = str(serialized["_id"])
    return serialized


class RecordStore:
    """
    Persists upload records in a MongoDB collection.

    Args:
        config: Settings to read the connection string and names from.
        client: Pre-built motor client (tests); when given, connect() only pings.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self.settings = config or default_settings
        self._client = client
        self._collection: Optional[AsyncIOMotorCollection] = None
        if client is not None:
            self._collection = self._resolve_collection(client)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @property
    def connected(self) -> bool:
        return self._collection is not None

    def _resolve_collection(self, client: AsyncIOMotorClient) -> AsyncIOMotorCollection:
        if self.settings.mongo_database:
            database = client[self.settings.mongo_database]
        else:
            database = client.get_default_database(default=DEFAULT_DATABASE)
        return database[self.settings.mongo_collection]

    async def connect(self) -> None:
        """
        Create the shared client and wait until the server answers a ping.

        Raises:
            RecordStoreError: The server could not be reached within
                MONGO_SERVER_SELECTION_TIMEOUT_MS.
        """
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.settings.mongo_uri,
                serverSelectionTimeoutMS=self.settings.mongo_server_selection_timeout_ms,
            )
        collection = self._resolve_collection(self._client)

        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error("Error connecting to MongoDB: %s", e)
            self._collection = None
            raise RecordStoreError(
                message=f"Could not connect to MongoDB: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        self._collection = collection
        logger.info(
            "Connected to MongoDB (database=%s, collection=%s)",
            collection.database.name,
            collection.name,
        )

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._collection = None

    async def ping(self) -> bool:
        """Lightweight reachability check for the health endpoint. Never raises."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False

    # ── Operations ────────────────────────────────────────────────────────

    def _require_collection(self) -> AsyncIOMotorCollection:
        if self._collection is None:
            raise RecordStoreError(message="Record store is not connected")
        return self._collection

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one record and return it with its generated `_id`.

        The caller's dict is not modified.

        Raises:
            RecordStoreError: Not connected, or the driver rejected the write.
        """
        collection = self._require_collection()
        document = dict(record)
        try:
            result = await collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Insert into %s failed: %s", collection.name, e)
            raise RecordStoreError(
                message=str(e),
                context={"operation": "insert_one", "error_type": type(e).__name__},
            ) from e

        document["_id"] = result.inserted_id
        logger.info("Inserted record %s", result.inserted_id)
        return _serialize(document)

    async def list_all(self) -> List[Dict[str, Any]]:
        """
        Return every stored record in the collection's natural order.

        No filtering, sorting or pagination.

        Raises:
            RecordStoreError: Not connected, or the query failed.
        """
        collection = self._require_collection()
        try:
            documents = await collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Listing %s failed: %s", collection.name, e)
            raise RecordStoreError(
                message=str(e),
                context={"operation": "find", "error_type": type(e).__name__},
            ) from e

        logger.debug("Fetched %d records", len(documents))
        return [_serialize(doc) for doc in documents]
