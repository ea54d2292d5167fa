"""
Tests for structural contracts and the schema provider.
"""

import pytest
from pydantic import BaseModel, Field

from app.core.errors import DocumentValidationError, UnknownCollection
from app.models.contracts import ModelContract, SchemaProvider, default_schema_provider
from app.models.product import PRODUCT_CONTRACT


class TestProductContract:
    """Tests for the Products contract."""

    def test_valid_record_is_cleaned(self):
        cleaned = PRODUCT_CONTRACT.validate({"name": " Widget ", "price": "9.99"})

        assert cleaned == {"name": "Widget", "price": 9.99}

    def test_required_fields(self):
        assert sorted(PRODUCT_CONTRACT.required_fields()) == ["name", "price"]

    @pytest.mark.parametrize(
        "record, field",
        [
            ({"price": 1}, "name"),
            ({"name": "   ", "price": 1}, "name"),
            ({"name": "Widget"}, "price"),
            ({"name": "Widget", "price": -0.01}, "price"),
            ({"name": "Widget", "price": "cheap"}, "price"),
        ],
    )
    def test_invalid_records_name_the_failing_field(self, record, field):
        with pytest.raises(DocumentValidationError) as exc_info:
            PRODUCT_CONTRACT.validate(record)

        assert field in [e["field"] for e in exc_info.value.errors]

    def test_zero_price_is_allowed(self):
        assert PRODUCT_CONTRACT.validate({"name": "Freebie", "price": 0})["price"] == 0

    def test_reserved_fields_are_stripped(self):
        cleaned = PRODUCT_CONTRACT.validate({
            "_id": "x",
            "name": "Widget",
            "price": 1,
            "createdAt": "2024-01-01",
        })

        assert set(cleaned) == {"name", "price"}

    def test_validate_partial_returns_only_touched_fields(self):
        existing = {"_id": "abc", "name": "Widget", "price": 9.99}

        changes = PRODUCT_CONTRACT.validate_partial(existing, {"price": 5})

        assert changes == {"price": 5.0}

    def test_validate_partial_checks_merged_record(self):
        with pytest.raises(DocumentValidationError):
            PRODUCT_CONTRACT.validate_partial({"name": "Widget", "price": 1}, {"name": ""})

    def test_validate_partial_rejects_non_object(self):
        with pytest.raises(DocumentValidationError):
            PRODUCT_CONTRACT.validate_partial({"name": "Widget", "price": 1}, ["price", 5])


class TestSchemaProvider:
    """Tests for the contract registration table."""

    def test_default_provider_knows_products(self):
        provider = default_schema_provider()

        assert provider.names() == ["Products"]
        assert "Products" in provider
        assert provider.get("Products") is PRODUCT_CONTRACT

    def test_unknown_collection_is_rejected(self):
        provider = default_schema_provider()

        with pytest.raises(UnknownCollection) as exc_info:
            provider.get("Users")

        assert exc_info.value.kind == "UnknownCollection"
        assert "Users" in exc_info.value.message

    def test_lookup_is_exact(self):
        """Collection names are matched exactly, not case-folded."""
        provider = default_schema_provider()

        assert "products" not in provider
        with pytest.raises(UnknownCollection):
            provider.get("products")

    def test_new_collections_register_a_contract(self):
        class Employee(BaseModel):
            name: str
            salary: float = Field(..., ge=0)

        provider = SchemaProvider()
        provider.register(ModelContract(name="Employees", model=Employee, timestamps=False))

        contract = provider.get("Employees")
        assert contract.validate({"name": "Ada", "salary": 10}) == {"name": "Ada", "salary": 10.0}
        assert contract.timestamps is False

    def test_duplicate_registration_is_rejected(self):
        provider = SchemaProvider()
        provider.register(PRODUCT_CONTRACT)

        with pytest.raises(ValueError):
            provider.register(PRODUCT_CONTRACT)
