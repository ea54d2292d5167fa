"""
Core module - Error taxonomy and logging setup.
"""
from app.core.errors import (
    BadRequest,
    DatabaseConnectionError,
    DocumentNotFound,
    DocumentValidationError,
    GatewayError,
    UnconfiguredDatabase,
    UnknownCollection,
)
from app.core.logging_setup import setup_logging

__all__ = [
    "BadRequest",
    "DatabaseConnectionError",
    "DocumentNotFound",
    "DocumentValidationError",
    "GatewayError",
    "UnconfiguredDatabase",
    "UnknownCollection",
    "setup_logging",
]
