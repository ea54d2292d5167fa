"""
Database connection management for MongoDB.

One motor client per logical database name, opened on first use and kept
for the life of the process.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from app.core.errors import DatabaseConnectionError, UnconfiguredDatabase
from app.database.single_flight import SingleFlightCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseConnection:
    """Live handle to the database behind one logical name."""
    name: str
    client: AsyncIOMotorClient
    database: AsyncIOMotorDatabase


Connector = Callable[[str, str], Awaitable[DatabaseConnection]]


class ConnectionRegistry:
    """Maps logical database names to shared, lazily opened connections."""

    def __init__(
        self,
        uri_map: Mapping[str, str],
        connector: Optional[Connector] = None,
        server_selection_timeout_ms: int = 5000,
    ):
        self._uri_map = dict(uri_map)
        self._connector = connector or self._open_connection
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._connections: SingleFlightCache[str, DatabaseConnection] = SingleFlightCache()

    def is_configured(self, name: str) -> bool:
        return name in self._uri_map

    def configured_databases(self) -> list[str]:
        return list(self._uri_map)

    def cached_databases(self) -> list[str]:
        return self._connections.keys()

    async def get_connection(self, name: str) -> DatabaseConnection:
        """
        Get or create the connection for a logical database.

        Raises:
            UnconfiguredDatabase: If no URI is mapped for ``name``
            DatabaseConnectionError: If the server cannot be reached; nothing
                is cached, so the next call tries again
        """
        if name not in self._uri_map:
            raise UnconfiguredDatabase(name)

        connection = self._connections.get(name)
        if connection is not None:
            logger.debug(f"Reusing existing connection for database: {name}")
            return connection

        return await self._connections.get_or_create(name, lambda: self._connect(name))

    async def _connect(self, name: str) -> DatabaseConnection:
        logger.info(f"Creating new connection for {name}")
        generation = self._connections.generation
        connection = await self._connector(name, self._uri_map[name])
        if generation != self._connections.generation:
            # close() ran while connecting; nothing else will close this client
            connection.client.close()
            logger.info(f"Discarded connection for {name} opened during close")
            raise DatabaseConnectionError(name, "connection registry was closed")
        logger.info(f"New connection established for database: {name}")
        return connection

    async def _open_connection(self, name: str, uri: str) -> DatabaseConnection:
        """Open a motor client and confirm the server answers a ping."""
        try:
            client = AsyncIOMotorClient(
                uri, serverSelectionTimeoutMS=self._server_selection_timeout_ms
            )
        except ConfigurationError as e:
            logger.warning(f"Invalid connection settings for database {name}: {type(e).__name__}")
            raise DatabaseConnectionError(name, "invalid connection settings") from e

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            logger.warning(f"Connection to database {name} failed: {type(e).__name__}")
            raise DatabaseConnectionError(name) from e

        database = client.get_default_database(default=name)
        return DatabaseConnection(name=name, client=client, database=database)

    async def ping(self, name: str) -> None:
        """Round-trip a ping on the (possibly new) connection for ``name``."""
        connection = await self.get_connection(name)
        try:
            await connection.client.admin.command("ping")
        except PyMongoError as e:
            raise DatabaseConnectionError(name) from e

    def close(self) -> None:
        """
        Close all database connections.

        Connections still being opened are closed as soon as they finish and
        are never cached.
        """
        for connection in self._connections.values():
            connection.client.close()
        self._connections.clear()
