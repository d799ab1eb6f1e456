"""MongoDB client lifecycle."""

import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from quizbank.core.config import settings

logger = logging.getLogger(__name__)

# Singleton client instance; MongoClient pools connections internally
_client: MongoClient | None = None


def get_client() -> MongoClient:
    """Get the MongoClient singleton, creating it on first use.

    Creating the client does not connect; the driver connects lazily on the
    first operation.
    """
    global _client

    if _client is None:
        logger.info("Creating MongoDB client", extra={"database": settings.MONGO_DB_NAME})
        _client = MongoClient(
            settings.MONGO_URL,
            serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            retryReads=True,
        )
    return _client


def get_database() -> Database:
    return get_client()[settings.MONGO_DB_NAME]


def get_collection(name: str) -> Collection:
    return get_database()[name]


def close_client() -> None:
    """Close the client (application shutdown)."""
    global _client

    if _client is not None:
        _client.close()
        _client = None
