"""
API Routers module.
"""
from app.routers import documents, health

__all__ = ["documents", "health"]
