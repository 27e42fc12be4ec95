"""
MongoDB connection lifecycle (Motor client + Beanie ODM)
"""

import logging
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import settings
from app.models import document_models

# Configure logging based on environment
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

logger.info(f"Environment: {getattr(settings, 'ENVIRONMENT', 'Unknown')}")
logger.info(f"Database URL configured: {bool(settings.MONGO_URL)}")


class MongoDatabase:
    """Holds the Motor client between application startup and shutdown."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.is_initialized = False

    async def connect(self, url: str, db_name: str) -> None:
        self.client = AsyncIOMotorClient(
            url,
            serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            appname="follow_api",
        )
        await init_beanie(database=self.client[db_name], document_models=document_models)
        self.is_initialized = True

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()  # Motor client's close() is not async
        self.client = None
        self.is_initialized = False


mongo = MongoDatabase()


async def init_db():
    """
    Connect to MongoDB and register the document models.

    A failure is logged and swallowed so the process still starts; requests
    that reach the database will then fail with a 500.
    """
    try:
        await mongo.connect(settings.MONGO_URL, settings.MONGO_DB_NAME)
        logger.info("Database is connected")
    except Exception as e:
        logger.error(f"Error while connecting to the database: {str(e)}", exc_info=True)


async def close_db():
    """Close the MongoDB client"""
    await mongo.close()
    logger.info("Database connection closed")
