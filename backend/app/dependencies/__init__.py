"""
Dependencies for dependency injection in routes.
"""
from app.dependencies.registry import get_connection_registry, get_model_registry

__all__ = [
    "get_connection_registry",
    "get_model_registry",
]
