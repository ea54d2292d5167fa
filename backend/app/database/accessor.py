"""
Typed accessor for one collection on one connection.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Iterable, Mapping, Optional

from bson import Decimal128, ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from app.core.errors import DocumentValidationError
from app.database.connections import DatabaseConnection
from app.models.contracts import StructuralContract


def _to_object_id(document_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None


def _to_json_value(value: Any) -> Any:
    if isinstance(value, (ObjectId, Decimal128)):
        return str(value)
    if isinstance(value, Mapping):
        return {key: _to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    return value


def serialize_document(doc: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a MongoDB document to a JSON-friendly dict.

    ObjectId and Decimal128 values become strings at any depth, so documents
    written by other clients (references, embedded arrays) still render.
    """
    return _to_json_value(doc)


@dataclass(frozen=True)
class CollectionAccessor:
    """
    Collection bound to its connection and structural contract.

    Every write is validated against the contract before it reaches MongoDB.
    Missing documents are reported with ``None``/``False``, not exceptions.
    """
    database: str
    collection_name: str
    connection: DatabaseConnection
    contract: StructuralContract

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self.connection.database[self.collection_name]

    async def list_all(self) -> AsyncIterator[dict[str, Any]]:
        """Iterate over every document in the collection."""
        async for doc in self.collection.find({}):
            yield serialize_document(doc)

    async def insert_one(self, record: Any) -> str:
        """
        Validate and insert a single record.

        Returns:
            The generated document ID

        Raises:
            DocumentValidationError: If the record breaks the contract
        """
        doc = self._prepare(record)
        result = await self.collection.insert_one(doc)
        return str(result.inserted_id)

    async def insert_many(self, records: Iterable[Any]) -> list[str]:
        """
        Validate every record, then insert them as one ordered batch.

        Nothing is written if any record fails validation; the error names
        the first failing record's index.
        """
        docs = []
        for index, record in enumerate(records):
            try:
                docs.append(self._prepare(record))
            except DocumentValidationError as e:
                raise DocumentValidationError(e.collection, e.errors, index=index) from e

        if not docs:
            return []

        result = await self.collection.insert_many(docs, ordered=True)
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    async def delete_by_id(self, document_id: str) -> bool:
        """Delete a document. Returns False if it does not exist."""
        oid = _to_object_id(document_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def update_by_id(
        self, document_id: str, partial: Mapping[str, Any]
    ) -> Optional[dict[str, Any]]:
        """
        Merge ``partial`` into a document and re-validate the result.

        Returns:
            The updated document, or None if it does not exist

        Raises:
            DocumentValidationError: If the merged document breaks the contract
        """
        oid = _to_object_id(document_id)
        if oid is None:
            return None

        existing = await self.collection.find_one({"_id": oid})
        if existing is None:
            return None

        changes = self.contract.validate_partial(existing, partial)
        if self.contract.timestamps:
            changes["updatedAt"] = datetime.now(timezone.utc)
        if not changes:
            return serialize_document(existing)

        updated = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return None
        return serialize_document(updated)

    async def estimated_count(self) -> int:
        return await self.collection.estimated_document_count()

    def _prepare(self, record: Any) -> dict[str, Any]:
        doc = self.contract.validate(record)
        if self.contract.timestamps:
            now = datetime.now(timezone.utc)
            doc["createdAt"] = now
            doc["updatedAt"] = now
        return doc
