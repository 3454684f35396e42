"""Pydantic schemas for API request/response."""
from app.schemas.tenant import (
    TenantCreate, TenantRead, TenantSummary, TenantOverview, TenantActionResult
)
from app.schemas.collection import CollectionCreate, CollectionRead
from app.schemas.document import document_to_response, Pagination, DocumentList

__all__ = [
    "TenantCreate", "TenantRead", "TenantSummary", "TenantOverview", "TenantActionResult",
    "CollectionCreate", "CollectionRead",
    "document_to_response", "Pagination", "DocumentList",
]
