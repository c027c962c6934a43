from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from src.core.config import AppConfig
from src.core.errors import ConnectionFailure

logger = logging.getLogger(__name__)


def get_mongo_client(
    uri: str,
    *,
    connect_timeout_ms: int = 10000,
    wait_ready: bool = True,
) -> MongoClient:
    """Create a MongoDB client and optionally verify the server answers a ping.

    There is no retry: a failed handshake raises ConnectionFailure immediately.
    """
    client: MongoClient = MongoClient(
        uri,
        serverSelectionTimeoutMS=connect_timeout_ms,
        appname="movie-search-api",
    )

    if wait_ready:
        try:
            # A light call to verify connectivity
            client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise ConnectionFailure(f"MongoDB connection error: {exc}") from exc
    return client


class MongoConnection:
    """Owns the single MongoClient for the lifetime of the process.

    The movies collection handle is shared read-only with the search service;
    the driver pools sockets internally so no locking happens here.
    """

    def __init__(self, client: MongoClient, database: str, collection_name: str) -> None:
        self.client = client
        self.database = database
        self.collection_name = collection_name
        self._closed = False

    @property
    def collection(self) -> Collection:
        return self.client[self.database][self.collection_name]

    @property
    def closed(self) -> bool:
        return self._closed

    def ping(self) -> Dict[str, Any]:
        return self.client.admin.command("ping")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.client.close()
        logger.info("MongoDB connection closed")


def open_connection(config: AppConfig, client: Optional[MongoClient] = None) -> MongoConnection:
    """Connect using the resolved config and return the process-wide handle."""

    client = client or get_mongo_client(
        config.mongodb_uri, connect_timeout_ms=config.connect_timeout_ms
    )
    connection = MongoConnection(client, config.database, config.collection_name)
    logger.info("✓ Connected to MongoDB")
    logger.info(f"✓ Database: {config.database}")
    logger.info(f"✓ Collection: {config.collection_name}")
    return connection
