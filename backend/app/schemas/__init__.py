"""
Request and response schemas for API endpoints.
"""
from app.schemas.documents import (
    InsertRequest,
    InsertOneResponse,
    InsertManyResponse,
    UpdateRequest,
    UpdateResponse,
    DeleteResponse,
)

__all__ = [
    "InsertRequest",
    "InsertOneResponse",
    "InsertManyResponse",
    "UpdateRequest",
    "UpdateResponse",
    "DeleteResponse",
]
