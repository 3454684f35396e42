"""Tenant schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.schemas.collection import CollectionRead


class TenantCreate(BaseModel):
    """Create tenant form (createTenantAction)."""
    name: str = ""
    icon: str | None = None


class TenantRead(BaseModel):
    """Tenant response."""
    name: str
    icon: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantSummary(TenantRead):
    """Tenant row in the admin listing."""
    collection_count: int = 0
    document_count: int = 0


class TenantOverview(TenantRead):
    """Tenant home: its collections and how many documents they hold."""
    collections: list[CollectionRead] = []
    total_documents: int = 0


class TenantActionResult(BaseModel):
    """Structured outcome of the tenant create/delete actions."""
    success: bool
    message: str | None = None
    error: str | None = None
    name: str | None = None
    icon: str | None = None
    redirect_url: str | None = None
