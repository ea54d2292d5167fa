"""
Structural contracts for collections and the table that registers them.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Type

from pydantic import BaseModel, ValidationError

from app.core.errors import DocumentValidationError, UnknownCollection

# Fields managed by the gateway rather than the contract
RESERVED_FIELDS = ("_id", "createdAt", "updatedAt")


class StructuralContract(Protocol):
    """Capability set every collection contract provides."""

    name: str
    timestamps: bool

    def validate(self, record: Any) -> dict[str, Any]:
        ...

    def validate_partial(self, existing: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
        ...

    def required_fields(self) -> list[str]:
        ...


def _format_errors(exc: ValidationError) -> list[dict[str, Any]]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "record"
        errors.append({"field": field, "message": err["msg"]})
    return errors


@dataclass(frozen=True)
class ModelContract:
    """
    Contract backed by a pydantic model.

    Unknown fields are dropped by the model's own config; reserved fields
    never reach it.
    """
    name: str
    model: Type[BaseModel]
    timestamps: bool = True

    def validate(self, record: Any) -> dict[str, Any]:
        """
        Validate a full record and return the cleaned fields.

        Raises:
            DocumentValidationError: If a field is missing or breaks a constraint
        """
        if isinstance(record, Mapping):
            record = {k: v for k, v in record.items() if k not in RESERVED_FIELDS}
        try:
            return self.model.model_validate(record).model_dump()
        except ValidationError as e:
            raise DocumentValidationError(self.name, _format_errors(e)) from e

    def validate_partial(self, existing: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
        """
        Merge ``partial`` over ``existing``, validate the result, and return
        the cleaned values of the fields ``partial`` touched.
        """
        if not isinstance(partial, Mapping):
            raise DocumentValidationError(
                self.name, [{"field": "update", "message": "Input should be an object"}]
            )
        cleaned = self.validate({**existing, **partial})
        return {k: v for k, v in cleaned.items() if k in partial}

    def required_fields(self) -> list[str]:
        return [name for name, field in self.model.model_fields.items() if field.is_required()]


class SchemaProvider:
    """Closed registration table of collection name -> structural contract."""

    def __init__(self) -> None:
        self._contracts: dict[str, StructuralContract] = {}

    def register(self, contract: StructuralContract) -> None:
        if contract.name in self._contracts:
            raise ValueError(f"Contract already registered for collection: {contract.name}")
        self._contracts[contract.name] = contract

    def get(self, collection: str) -> StructuralContract:
        """
        Look up the contract for a collection.

        Raises:
            UnknownCollection: If no contract is registered under that name
        """
        try:
            return self._contracts[collection]
        except KeyError:
            raise UnknownCollection(collection) from None

    def names(self) -> list[str]:
        return list(self._contracts)

    def __contains__(self, collection: object) -> bool:
        return collection in self._contracts


def default_schema_provider() -> SchemaProvider:
    """Schema provider with every built-in collection registered."""
    from app.models.product import PRODUCT_CONTRACT

    provider = SchemaProvider()
    provider.register(PRODUCT_CONTRACT)
    return provider
