"""
Generic document CRUD router.

The database and collection come from the path; everything else is
delegated to the accessor registry.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, status

from app.core.errors import BadRequest, DocumentNotFound
from app.database.registry import ModelRegistry
from app.dependencies.registry import get_model_registry
from app.schemas.documents import (
    DeleteResponse,
    InsertManyResponse,
    InsertOneResponse,
    InsertRequest,
    UpdateRequest,
    UpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Documents"])


@router.get(
    "/find/{database}/{collection}",
    response_model=list[dict[str, Any]],
    summary="List all documents",
)
async def find_documents(
    database: str,
    collection: str,
    registry: ModelRegistry = Depends(get_model_registry),
):
    """Return every document in a collection."""
    accessor = await registry.get_accessor(database, collection)
    documents = [doc async for doc in accessor.list_all()]
    logger.debug(f"Query executed on {database}.{collection}, document count: {len(documents)}")
    return documents


@router.post(
    "/insert/{database}/{collection}",
    response_model=InsertOneResponse | InsertManyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Insert one or many documents",
)
async def insert_documents(
    database: str,
    collection: str,
    body: Optional[InsertRequest] = None,
    registry: ModelRegistry = Depends(get_model_registry),
):
    """
    Insert documents into a collection.

    - **document**: a single record
    - **documents**: a list of records, inserted as one batch

    Exactly one of the two must be present.
    """
    body = body or InsertRequest()
    if body.document is not None and body.documents is not None:
        raise BadRequest("Request body must contain either 'document' or 'documents', not both")
    if body.document is None and body.documents is None:
        raise BadRequest("Request body must contain either 'document' or 'documents' as array")

    accessor = await registry.get_accessor(database, collection)

    if body.document is not None:
        inserted_id = await accessor.insert_one(body.document)
        return InsertOneResponse(
            message="Document inserted successfully",
            inserted_id=inserted_id,
        )

    inserted_ids = await accessor.insert_many(body.documents)
    return InsertManyResponse(
        message=f"{len(inserted_ids)} documents inserted",
        inserted_ids=inserted_ids,
    )


@router.delete(
    "/delete/{database}/{collection}/{document_id}",
    response_model=DeleteResponse,
    summary="Delete a document by ID",
)
async def delete_document(
    database: str,
    collection: str,
    document_id: str,
    registry: ModelRegistry = Depends(get_model_registry),
):
    """Delete a document. Returns 404 if no document has this ID."""
    accessor = await registry.get_accessor(database, collection)
    if not await accessor.delete_by_id(document_id):
        raise DocumentNotFound(document_id)
    return DeleteResponse(message=f"Document with ID {document_id} deleted successfully.")


@router.put(
    "/update/{database}/{collection}/{document_id}",
    response_model=UpdateResponse,
    summary="Update a document by ID",
)
async def update_document(
    database: str,
    collection: str,
    document_id: str,
    body: Optional[UpdateRequest] = None,
    registry: ModelRegistry = Depends(get_model_registry),
):
    """
    Merge the fields in **update** into a document.

    The merged document is validated against the collection contract.
    Returns 404 if no document has this ID.
    """
    if body is None or body.update is None:
        raise BadRequest("Update data not provided")

    accessor = await registry.get_accessor(database, collection)
    updated = await accessor.update_by_id(document_id, body.update)
    if updated is None:
        raise DocumentNotFound(document_id)

    return UpdateResponse(
        message="Document updated successfully",
        modified_document=updated,
    )
