"""
Document CRUD request/response schemas.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InsertRequest(BaseModel):
    """Insert request: exactly one of ``document`` or ``documents``."""
    document: Optional[dict[str, Any]] = Field(None, description="Single record to insert")
    documents: Optional[list[Any]] = Field(None, description="Records to insert as one batch")


class UpdateRequest(BaseModel):
    """Update request."""
    update: Optional[dict[str, Any]] = Field(None, description="Fields to merge into the document")


class InsertOneResponse(BaseModel):
    """Single insert response."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted_id: str = Field(..., alias="insertedId")


class InsertManyResponse(BaseModel):
    """Batch insert response."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted_ids: list[str] = Field(..., alias="insertedIds")


class DeleteResponse(BaseModel):
    """Delete response."""
    message: str


class UpdateResponse(BaseModel):
    """Update response with the document as stored after the update."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    modified_document: dict[str, Any] = Field(..., alias="modifiedDocument")
