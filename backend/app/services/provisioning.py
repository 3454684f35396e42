"""Self-service provisioning of tenants and collections.

Tenant creation never raises for user mistakes: it returns ``Created`` or
``Rejected`` and the HTTP layer decides how to present it (redirect, form
error). Collections are created idempotently instead of being rejected.
"""
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from app.exceptions import ConflictError, StorageError, ValidationError
from app.models.collection import Collection
from app.models.tenant import Tenant
from app.services.collections import CollectionRegistry
from app.services.documents import DocumentStore
from app.services.naming import MAX_NAME_LENGTH, sanitize_name
from app.services.storage import storage_operation
from app.services.tenants import TenantRegistry

logger = logging.getLogger(__name__)

MAX_ICON_LENGTH = 10


@dataclass
class Created:
    tenant: Tenant


class RejectionKind(str, Enum):
    INVALID = "invalid"
    CONFLICT = "conflict"
    STORAGE = "storage"


@dataclass
class Rejected:
    reason: str
    kind: RejectionKind = RejectionKind.INVALID


def validate_icon(icon: str) -> bool:
    """Display attribute: 1-10 characters, not just whitespace."""
    return bool(icon.strip()) and len(icon) <= MAX_ICON_LENGTH


class ProvisioningWorkflow:
    """Creation and removal of tenants and collections."""

    def __init__(self, db: Session):
        self.db = db
        self.tenants = TenantRegistry(db)
        self.collections = CollectionRegistry(db)
        self.documents = DocumentStore(db)

    def create_tenant(self, name: str | None, icon: str | None = None) -> Created | Rejected:
        if not name:
            return Rejected("Tenant name is required")

        if icon is not None and not validate_icon(icon):
            return Rejected(f"Please enter a valid emoji (maximum {MAX_ICON_LENGTH} characters)")

        if sanitize_name(name) != name:
            return Rejected(
                "Subdomain can only have lowercase letters, numbers, and hyphens. Please try again."
            )

        if len(name) > MAX_NAME_LENGTH:
            return Rejected(f"Subdomain must be between 1 and {MAX_NAME_LENGTH} characters")

        try:
            tenant = self.tenants.create(name, icon)
        except ConflictError as e:
            return Rejected(e.message, RejectionKind.CONFLICT)
        except ValidationError as e:
            return Rejected(e.message)
        except StorageError:
            logger.error(f"Error creating tenant {name}")
            return Rejected("Failed to create tenant. Please try again.", RejectionKind.STORAGE)

        return Created(tenant)

    def create_collection(self, tenant: Tenant, name: str) -> Collection:
        """Create or return the existing collection."""
        return self.collections.create(tenant, name)

    @storage_operation
    def delete_tenant(self, name: str) -> bool:
        """Remove the tenant with all its collections and documents atomically."""
        tenant = self.tenants.lookup(name)
        if tenant is None:
            return False

        documents = self.documents.delete_all_for_tenant(tenant, commit=False)
        collections = self.collections.delete_all_for_tenant(tenant, commit=False)
        self.tenants.delete(name, commit=False)
        self.db.commit()

        logger.info(
            f"Deleted tenant {name} with {collections} collections and {documents} documents"
        )
        return True
