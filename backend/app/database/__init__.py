"""
Database module - MongoDB connection and collection accessor registries.
"""
from app.database.connections import ConnectionRegistry, DatabaseConnection
from app.database.accessor import CollectionAccessor
from app.database.registry import ModelRegistry
from app.database.single_flight import SingleFlightCache

__all__ = [
    "ConnectionRegistry",
    "DatabaseConnection",
    "CollectionAccessor",
    "ModelRegistry",
    "SingleFlightCache",
]
