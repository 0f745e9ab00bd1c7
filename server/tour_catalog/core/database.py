"""Document store connection management."""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..models.admin import ADMIN_COLLECTION
from ..models.tour import TOURS_COLLECTION, TourFlag
from .config import settings

logger = logging.getLogger(__name__)


class StoreConnectionError(ConnectionError):
    """Raised when the document store is unreachable or rejects the credentials."""


class MongoGateway:
    """
    Owner of the single client handle to the document store.

    The client is created on the first call to ``connect`` and reused by
    every request afterwards. Motor clients are safe to share between
    concurrent tasks, so no per-request locking is needed once connected.
    """

    def __init__(self, uri: str, database: str, timeout_ms: int = 5000):
        self.uri = uri
        self.database_name = database
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> AsyncIOMotorDatabase:
        """
        Return the database handle, connecting on first use.

        Returns:
            AsyncIOMotorDatabase: Shared database handle

        Raises:
            StoreConnectionError: If the store cannot be reached or authenticated
        """
        if self._db is not None:
            return self._db

        async with self._lock:
            if self._db is not None:
                return self._db

            client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,
                appname="tour-catalog-api",
            )
            try:
                await client.admin.command("ping")
            except PyMongoError as e:
                client.close()
                logger.error(
                    "Database connection failed",
                    extra={"database": self.database_name, "error": str(e)}
                )
                raise StoreConnectionError(f"Database connection failed: {e}") from e

            self._client = client
            self._db = client[self.database_name]
            logger.info("Database connected", extra={"database": self.database_name})
            return self._db

    async def ping(self) -> bool:
        """Return True if the store answers a ping on the current connection."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("Database ping failed", extra={"error": str(e)})
            return False
        return True

    async def ensure_indexes(self) -> None:
        """Create the lookup indexes used by the catalog queries."""
        db = await self.connect()
        tours = db[TOURS_COLLECTION]
        await tours.create_index([("url", ASCENDING)])
        await tours.create_index([("theme", ASCENDING)])
        for flag in TourFlag:
            await tours.create_index([(flag.value, ASCENDING)])
        await db[ADMIN_COLLECTION].create_index([("username", ASCENDING)], unique=True)

    async def close(self) -> None:
        """Close the client connection."""
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


def create_gateway() -> MongoGateway:
    """Build a gateway from application settings."""
    return MongoGateway(
        settings.mongodb_uri,
        settings.mongodb_db,
        timeout_ms=settings.mongodb_timeout_ms,
    )
