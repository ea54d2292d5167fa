"""
Collection accessor registry.

Resolves (database, collection) pairs to shared accessors, opening the
database connection on the way if needed.
"""
import logging

from app.database.accessor import CollectionAccessor
from app.database.connections import ConnectionRegistry
from app.database.single_flight import SingleFlightCache
from app.models.contracts import SchemaProvider

logger = logging.getLogger(__name__)

AccessorKey = tuple[str, str]


class ModelRegistry:
    """Maps (database, collection) to a single cached CollectionAccessor."""

    def __init__(self, connections: ConnectionRegistry, schemas: SchemaProvider):
        self.connections = connections
        self.schemas = schemas
        self._accessors: SingleFlightCache[AccessorKey, CollectionAccessor] = SingleFlightCache()

    def cached_keys(self) -> list[AccessorKey]:
        return self._accessors.keys()

    async def get_accessor(self, database: str, collection: str) -> CollectionAccessor:
        """
        Get or create the accessor for a collection.

        The connection is resolved before the collection name is checked, so
        an unknown collection still leaves the database connection cached.

        Raises:
            UnconfiguredDatabase: From the connection registry
            DatabaseConnectionError: From the connection registry
            UnknownCollection: If the collection has no registered contract
        """
        key = (database, collection)
        accessor = self._accessors.get(key)
        if accessor is not None:
            logger.debug(f"Reusing cached accessor for: {database}-{collection}")
            return accessor

        return await self._accessors.get_or_create(key, lambda: self._build(database, collection))

    async def _build(self, database: str, collection: str) -> CollectionAccessor:
        connection = await self.connections.get_connection(database)
        contract = self.schemas.get(collection)
        accessor = CollectionAccessor(
            database=database,
            collection_name=collection,
            connection=connection,
            contract=contract,
        )
        logger.info(f"Created new accessor for collection: {database}-{collection}")
        return accessor
