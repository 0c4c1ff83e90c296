from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from app.core.config import settings
from app.core.logger import logs
import logging

class AsyncDBConnection:
    """
    Manages the asynchronous connection to the MongoDB database.
    Only used when STORAGE_MODE=mongodb
    """
    _client: AsyncIOMotorClient | None = None

    def connect(self):
        if AsyncDBConnection._client is None:
            # Motor connects lazily, on the first operation
            AsyncDBConnection._client = AsyncIOMotorClient(settings.MONGO_URI)
            logs.log(logging.INFO, "MongoDB client initialized", extra={"db": settings.MONGO_DB_NAME})
        return AsyncDBConnection._client

    def get_database(self) -> AsyncIOMotorDatabase:
        if settings.STORAGE_MODE != "mongodb":
            raise RuntimeError("MongoDB not available - STORAGE_MODE is set to 'local'")
        return self.connect()[settings.MONGO_DB_NAME]

    def close(self):
        if AsyncDBConnection._client is not None:
            AsyncDBConnection._client.close()
            AsyncDBConnection._client = None
            logs.log(logging.INFO, "MongoDB client closed")

# Instantiate the connection manager
db_connection = AsyncDBConnection()

async def ensure_indexes(db: AsyncIOMotorDatabase):
    """Indexes for the saved_places collection: list by user, point lookups by id."""
    collection = db["saved_places"]
    await collection.create_index([("user_id", ASCENDING), ("id", ASCENDING)])
    await collection.create_index([("id", ASCENDING)], unique=True)
    await collection.create_index([("user_id", ASCENDING), ("osm_id", ASCENDING)], unique=True)
    logs.log(logging.INFO, "saved_places indexes ensured")

# Dependency for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return db_connection.get_database()
