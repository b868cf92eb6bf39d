"""
MongoDB connection management.

The client is created per run and handed to the caller; nothing is cached
at module level.
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from mongo_bootstrap.config import Settings
from mongo_bootstrap.database.databases import admin_db


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """Create a MongoDB client for the configured URI."""
    return AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )


def get_database(client: AsyncIOMotorClient, db_name: str) -> AsyncIOMotorDatabase:
    """Get a specific MongoDB database by name."""
    return client[db_name]


async def ping(client: AsyncIOMotorClient) -> None:
    """
    Check that the server is reachable.

    Raises:
        pymongo.errors.PyMongoError: If the server cannot be reached
    """
    await client[admin_db.DB_NAME].command(admin_db.Commands.PING)
