"""
Database definitions and collection constants.
"""
from app.database.databases import products_db, users_employees_db

# All database manifests
ALL_DB_MANIFESTS = [
    products_db.DB_MANIFEST,
    users_employees_db.DB_MANIFEST,
]

__all__ = ["products_db", "users_employees_db", "ALL_DB_MANIFESTS"]
