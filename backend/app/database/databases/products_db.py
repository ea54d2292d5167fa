"""
Products database configuration.
Stores the product catalogue.
"""

DB_NAME = "ProductsDB"


class Collections:
    """Collection names in ProductsDB."""
    PRODUCTS = "Products"


# Manifest for startup warmup
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Product catalogue",
    "collections": [Collections.PRODUCTS],
}
