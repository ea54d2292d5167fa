"""
Structural contracts for the collections the gateway serves.
"""
from app.models.contracts import (
    ModelContract,
    SchemaProvider,
    StructuralContract,
    default_schema_provider,
)
from app.models.product import Product, PRODUCT_CONTRACT

__all__ = [
    "ModelContract",
    "SchemaProvider",
    "StructuralContract",
    "default_schema_provider",
    "Product",
    "PRODUCT_CONTRACT",
]
