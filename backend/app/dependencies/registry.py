"""
Registry dependencies shared by the document routes.
"""
from functools import lru_cache

from app.config import get_settings
from app.database.connections import ConnectionRegistry
from app.database.registry import ModelRegistry
from app.models.contracts import default_schema_provider


@lru_cache
def get_connection_registry() -> ConnectionRegistry:
    """Process-wide connection registry built from settings."""
    settings = get_settings()
    return ConnectionRegistry(
        settings.database_uri_map(),
        server_selection_timeout_ms=settings.server_selection_timeout_ms,
    )


@lru_cache
def get_model_registry() -> ModelRegistry:
    """Process-wide accessor registry."""
    return ModelRegistry(get_connection_registry(), default_schema_provider())
