"""Tenant router: the current tenant's overview and its collections."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError
from app.routers.documents import get_resolver
from app.schemas.collection import CollectionCreate, CollectionRead
from app.schemas.tenant import TenantOverview
from app.services.collections import CollectionRegistry, validate_collection_name
from app.services.provisioning import ProvisioningWorkflow
from app.services.resolver import RequestResolver

router = APIRouter(prefix="/tenant", tags=["tenant"])


@router.get("", response_model=TenantOverview)
def get_tenant_overview(
    request: Request,
    resolver: RequestResolver = Depends(get_resolver),
    db: Session = Depends(get_db)
):
    """Tenant info with collections and document counts."""
    tenant = resolver.resolve_tenant(request.headers.get("host"))
    collections = [
        CollectionRead(name=c.name, created_at=c.created_at, document_count=count)
        for c, count in CollectionRegistry(db).list_with_counts(tenant)
    ]
    return TenantOverview(
        name=tenant.name,
        icon=tenant.icon,
        created_at=tenant.created_at,
        collections=collections,
        total_documents=sum(c.document_count for c in collections)
    )


@router.post("/collections", response_model=CollectionRead, status_code=status.HTTP_201_CREATED)
def create_collection(
    body: CollectionCreate,
    request: Request,
    resolver: RequestResolver = Depends(get_resolver),
    db: Session = Depends(get_db)
):
    """Create a collection; returns the existing one if the name is taken."""
    tenant = resolver.resolve_tenant(request.headers.get("host"))
    collection = ProvisioningWorkflow(db).create_collection(tenant, body.name)
    return CollectionRead(name=collection.name, created_at=collection.created_at)


@router.delete("/collections/{name}")
def delete_collection(
    name: str,
    request: Request,
    resolver: RequestResolver = Depends(get_resolver),
    db: Session = Depends(get_db)
):
    """Delete a collection and all its documents."""
    tenant = resolver.resolve_tenant(request.headers.get("host"))
    validate_collection_name(name)
    if not CollectionRegistry(db).delete(tenant, name):
        raise NotFoundError("Collection not found")
    return {"message": "Collection deleted successfully"}
