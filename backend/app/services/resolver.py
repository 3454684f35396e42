"""Request resolution: host header → tenant → collection → document scope.

Every document endpoint goes through ``RequestResolver.resolve``; the only
thing that varies per endpoint is the ``Operation``.
"""
import logging
from enum import Enum
from typing import Iterable

from sqlalchemy.orm import Session

from app.exceptions import NoTenantError, NotFoundError, ValidationError
from app.models.tenant import Tenant
from app.services.collections import CollectionRegistry, validate_collection_name
from app.services.documents import DocumentScope
from app.services.tenants import TenantRegistry

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_SUFFIXES = (".localhost",)


class Operation(str, Enum):
    """Document endpoint operations."""
    LIST = "list"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def creates_collection(self) -> bool:
        """Only a document write may provision an unknown collection."""
        return self is Operation.CREATE


def extract_tenant_name(
    host: str | None,
    local_suffixes: Iterable[str] = DEFAULT_LOCAL_SUFFIXES,
) -> str | None:
    """Tenant subdomain carried by ``host``, or None.

    ``acme.localhost:3000`` and ``acme.example.com`` both give ``acme``;
    ``example.com`` and ``localhost:3000`` give None.
    """
    hostname = (host or "").split(":")[0].strip().lower()
    if not hostname:
        return None

    if any(suffix in hostname for suffix in local_suffixes):
        return hostname.split(".")[0] or None

    parts = hostname.split(".")
    if len(parts) > 2:
        return parts[0] or None

    return None


def parse_document_id(raw: str) -> int:
    """Path segment to document id; digits only."""
    if not raw or not raw.isascii() or not raw.isdigit():
        raise ValidationError("Invalid document ID")
    return int(raw)


class RequestResolver:
    """Turns the request host and path into a validated document scope."""

    def __init__(self, db: Session, local_suffixes: Iterable[str] = DEFAULT_LOCAL_SUFFIXES):
        self.tenants = TenantRegistry(db)
        self.collections = CollectionRegistry(db)
        self.local_suffixes = tuple(local_suffixes)

    def resolve_tenant(self, host: str | None) -> Tenant:
        name = extract_tenant_name(host, self.local_suffixes)
        if name is None:
            raise NoTenantError()

        tenant = self.tenants.lookup(name)
        if tenant is None:
            logger.warning(f"Tenant not found for host {host}")
            raise NotFoundError("Subdomain not found")
        return tenant

    def resolve(self, host: str | None, collection_name: str, operation: Operation) -> DocumentScope:
        tenant = self.resolve_tenant(host)
        validate_collection_name(collection_name)

        collection = self.collections.lookup(tenant, collection_name)
        if collection is None:
            if not operation.creates_collection:
                raise NotFoundError("Collection not found")
            collection = self.collections.create(tenant, collection_name)

        return DocumentScope(tenant=tenant, collection=collection)
