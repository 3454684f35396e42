"""Admin router for tenant management."""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import Settings
from app.database import get_db
from app.exceptions import StorageError
from app.routers.documents import get_settings_from_app
from app.schemas.tenant import TenantActionResult, TenantCreate, TenantSummary
from app.services.collections import CollectionRegistry
from app.services.documents import DocumentStore
from app.services.provisioning import Created, ProvisioningWorkflow, RejectionKind
from app.services.tenants import TenantRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

REJECTION_STATUS = {
    RejectionKind.INVALID: status.HTTP_400_BAD_REQUEST,
    RejectionKind.CONFLICT: status.HTTP_409_CONFLICT,
    RejectionKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get("/tenants", response_model=List[TenantSummary])
def list_tenants(db: Session = Depends(get_db)):
    """List all tenants, newest first, with their collection and document counts."""
    collection_counts = CollectionRegistry(db).counts_by_tenant()
    document_counts = DocumentStore(db).counts_by_tenant()
    return [
        TenantSummary(
            name=t.name,
            icon=t.icon,
            created_at=t.created_at,
            collection_count=collection_counts.get(t.id, 0),
            document_count=document_counts.get(t.id, 0)
        )
        for t in TenantRegistry(db).list_all()
    ]


@router.post("/tenants", response_model=TenantActionResult, status_code=status.HTTP_201_CREATED)
def create_tenant(
    form: TenantCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_app)
):
    """Create a new tenant (createTenantAction)."""
    result = ProvisioningWorkflow(db).create_tenant(form.name, form.icon)

    if isinstance(result, Created):
        tenant = result.tenant
        return TenantActionResult(
            success=True,
            name=tenant.name,
            icon=tenant.icon,
            redirect_url=f"{settings.protocol}://{tenant.name}.{settings.root_domain}"
        )

    body = TenantActionResult(success=False, error=result.reason, name=form.name, icon=form.icon)
    return JSONResponse(
        status_code=REJECTION_STATUS[result.kind],
        content=jsonable_encoder(body, exclude_none=True)
    )


@router.delete("/tenants/{name}", response_model=TenantActionResult)
def delete_tenant(name: str, db: Session = Depends(get_db)):
    """Delete a tenant with its collections and documents (deleteTenantAction)."""
    try:
        deleted = ProvisioningWorkflow(db).delete_tenant(name)
    except StorageError:
        logger.error(f"Error deleting tenant {name}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to delete tenant"}
        )

    if not deleted:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Tenant not found"}
        )
    return TenantActionResult(success=True, name=name, message="Tenant deleted successfully")
