"""
Product model for the ProductsDB.Products collection.
"""
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.database.databases import products_db
from app.models.contracts import ModelContract


class Product(BaseModel):
    """
    Product document model. createdAt/updatedAt are added by the accessor.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        ..., description="Product name"
    )
    price: float = Field(..., ge=0, description="Unit price, never negative")


PRODUCT_CONTRACT = ModelContract(
    name=products_db.Collections.PRODUCTS,
    model=Product,
    timestamps=True,
)
