"""
DevCamper Backend — MongoDB Connector
=======================================

What:  Owns the single MongoDB client used by a process.
Why:   Keeps connection setup, fail-fast startup and shutdown in one place.
How:   MongoConnector wraps pymongo's AsyncMongoClient. It is constructed
       explicitly and handed to whoever needs it: the server keeps it on
       app.state.mongo, the seeder builds its own.
When:  Connected once at process start; closed at shutdown.

Connection Strategy:
    The driver pools connections internally, so one client per process is
    enough. connect() pings the server so a bad URI or an unreachable host
    fails at startup instead of on the first request.
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from devcamper.config import Settings
from devcamper.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

BOOTCAMP_COLLECTION = "bootcamps"


class MongoConnector:
    """
    Explicit handle on the MongoDB client and its default database.

    Usage:
        connector = MongoConnector.from_settings(settings)
        db = await connector.connect()      # raises DatabaseConnectionError
        bootcamps = connector.collection(BOOTCAMP_COLLECTION)
        ...
        await connector.close()
    """

    def __init__(
        self,
        uri: str,
        default_db_name: str = "devcamper",
        server_selection_timeout_ms: int = 5000,
    ):
        self.uri = uri
        self.default_db_name = default_db_name
        # The client does not touch the network until the first operation
        self.client: AsyncMongoClient = AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnector":
        return cls(
            uri=settings.mongo_uri,
            default_db_name=settings.mongo_db_name,
            server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
        )

    @property
    def database(self) -> AsyncDatabase:
        """Database named in the URI, or default_db_name when it names none."""
        return self.client.get_default_database(default=self.default_db_name)

    def collection(self, name: str) -> AsyncCollection:
        return self.database[name]

    @property
    def host(self) -> str:
        nodes = sorted(self.client.nodes)
        if not nodes:
            return "unknown"
        host, port = nodes[0]
        return f"{host}:{port}"

    async def connect(self) -> AsyncDatabase:
        """
        Verify the server is reachable and return the default database.

        Raises:
            DatabaseConnectionError: the ping failed (bad URI, auth, timeout).
        """
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.critical("Error: %s", str(e))
            raise DatabaseConnectionError(
                message=f"Could not connect to MongoDB: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("MongoDB Connected: %s", self.host)
        return self.database

    async def ping(self) -> bool:
        """Lightweight reachability check for /health."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("Health check: database unreachable: %s", str(e))
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB connection closed")


def get_connector(app_state) -> Optional[MongoConnector]:
    """Returns the connector stored on app.state, or None before startup."""
    return getattr(app_state, "mongo", None)
