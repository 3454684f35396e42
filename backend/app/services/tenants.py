"""Tenant registry: lookup, creation and removal of tenants by name."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, ValidationError
from app.models.tenant import Tenant
from app.services.naming import is_valid_name
from app.services.storage import storage_operation

logger = logging.getLogger(__name__)


class TenantRegistry:
    """Tenants keyed by their unique subdomain name."""

    def __init__(self, db: Session):
        self.db = db

    @storage_operation
    def lookup(self, name: str) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.name == name).first()

    @storage_operation
    def create(self, name: str, icon: str | None = None) -> Tenant:
        """Insert a tenant.

        The name is taken exactly as submitted; anything outside
        ``^[a-z0-9-]{1,63}$`` is a ``ValidationError``. A taken name raises
        ``ConflictError``, including when a concurrent insert wins the race.
        """
        if not is_valid_name(name):
            raise ValidationError(
                "Invalid tenant name. Must be lowercase alphanumeric with hyphens only (1-63 characters)."
            )
        if self.lookup(name) is not None:
            raise ConflictError("This subdomain is already taken")

        tenant = Tenant(name=name, icon=icon)
        self.db.add(tenant)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("This subdomain is already taken")
        self.db.refresh(tenant)
        logger.info(f"Created tenant {name}")
        return tenant

    @storage_operation
    def delete(self, name: str, commit: bool = True) -> bool:
        """Remove the tenant row only; dependent rows are the caller's job."""
        removed = self.db.query(Tenant).filter(Tenant.name == name).delete(
            synchronize_session=False
        )
        if commit:
            self.db.commit()
        return removed > 0

    @storage_operation
    def list_all(self) -> list[Tenant]:
        """All tenants, newest first."""
        return self.db.query(Tenant).order_by(
            Tenant.created_at.desc(), Tenant.id.desc()
        ).all()
