"""Collection registry: named document groups inside a tenant."""
import logging

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import utcnow
from app.exceptions import ValidationError
from app.models.collection import Collection
from app.models.document import Document
from app.models.tenant import Tenant
from app.services.naming import is_valid_name
from app.services.storage import storage_operation

logger = logging.getLogger(__name__)

INVALID_COLLECTION_NAME = (
    "Invalid collection name. Must be lowercase alphanumeric with hyphens only (1-63 characters)."
)

# Dialects with native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def validate_collection_name(name: str) -> None:
    if not is_valid_name(name):
        raise ValidationError(INVALID_COLLECTION_NAME)


class CollectionRegistry:
    """Collections keyed by (tenant, name)."""

    def __init__(self, db: Session):
        self.db = db

    @storage_operation
    def lookup(self, tenant: Tenant, name: str) -> Collection | None:
        return self.db.query(Collection).filter(
            Collection.tenant_id == tenant.id,
            Collection.name == name
        ).first()

    @storage_operation
    def create(self, tenant: Tenant, name: str) -> Collection:
        """Create the collection, or return it if it already exists.

        Concurrent creators of the same name all get the same row back.
        """
        validate_collection_name(name)

        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Collection).values(
                tenant_id=tenant.id, name=name, created_at=utcnow()
            ).on_conflict_do_nothing(index_elements=["tenant_id", "name"])
            inserted = self.db.execute(stmt).rowcount
            self.db.commit()
        else:
            try:
                with self.db.begin_nested():
                    self.db.add(Collection(tenant_id=tenant.id, name=name))
                inserted = 1
            except IntegrityError:
                inserted = 0
            self.db.commit()

        if inserted:
            logger.info(f"Created collection {tenant.name}/{name}")
        return self.lookup(tenant, name)

    @storage_operation
    def list_all(self, tenant: Tenant) -> list[Collection]:
        return self.db.query(Collection).filter(
            Collection.tenant_id == tenant.id
        ).order_by(Collection.created_at.asc(), Collection.id.asc()).all()

    @storage_operation
    def list_with_counts(self, tenant: Tenant) -> list[tuple[Collection, int]]:
        """Collections in creation order with their live document counts."""
        rows = self.db.query(
            Collection, func.count(Document.id)
        ).outerjoin(
            Document, Document.collection_id == Collection.id
        ).filter(
            Collection.tenant_id == tenant.id
        ).group_by(
            Collection.id
        ).order_by(
            Collection.created_at.asc(), Collection.id.asc()
        ).all()
        return [(collection, int(count)) for collection, count in rows]

    @storage_operation
    def delete(self, tenant: Tenant, name: str) -> bool:
        """Delete the collection and its documents in one transaction."""
        collection = self.lookup(tenant, name)
        if collection is None:
            return False

        self.db.query(Document).filter(
            Document.collection_id == collection.id
        ).delete(synchronize_session=False)
        self.db.query(Collection).filter(
            Collection.id == collection.id
        ).delete(synchronize_session=False)
        self.db.commit()
        logger.info(f"Deleted collection {tenant.name}/{name}")
        return True

    @storage_operation
    def delete_all_for_tenant(self, tenant: Tenant, commit: bool = True) -> int:
        removed = self.db.query(Collection).filter(
            Collection.tenant_id == tenant.id
        ).delete(synchronize_session=False)
        if commit:
            self.db.commit()
        return removed

    @storage_operation
    def counts_by_tenant(self) -> dict[int, int]:
        """Number of collections per tenant id."""
        rows = self.db.query(
            Collection.tenant_id, func.count(Collection.id)
        ).group_by(Collection.tenant_id).all()
        return {tenant_id: int(count) for tenant_id, count in rows}
