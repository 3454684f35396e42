"""Database models."""
from app.models.tenant import Tenant
from app.models.collection import Collection
from app.models.document import Document

__all__ = [
    "Tenant",
    "Collection",
    "Document",
]
