"""Document store: schema-less JSON CRUD scoped by tenant and collection."""
import json
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import utcnow
from app.exceptions import ValidationError
from app.models.collection import Collection
from app.models.document import Document
from app.models.tenant import Tenant
from app.services.storage import storage_operation

logger = logging.getLogger(__name__)

MIN_LIMIT = 1
MAX_LIMIT = 1000

# Largest value a 64-bit integer column or OFFSET accepts
MAX_ROW_NUMBER = 2**63 - 1

INVALID_DATA = "Invalid JSON data. Must be a valid JSON object."


@dataclass(frozen=True)
class DocumentScope:
    """Addressing context for document operations."""
    tenant: Tenant
    collection: Collection


@dataclass
class Page:
    """One page of documents plus the exact size of the scope."""
    items: list[Document]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


def is_json_object(data: Any) -> bool:
    """True if ``data`` is a dict that survives a JSON round trip unchanged."""
    if not isinstance(data, dict):
        return False
    try:
        return json.loads(json.dumps(data)) == data
    except (TypeError, ValueError):
        return False


def validate_data(data: Any) -> None:
    if not is_json_object(data):
        raise ValidationError(INVALID_DATA)


def validate_pagination(limit: int, offset: int, max_limit: int = MAX_LIMIT) -> None:
    if limit < MIN_LIMIT or limit > max_limit:
        raise ValidationError(f"Limit must be between {MIN_LIMIT} and {max_limit}")
    if offset < 0:
        raise ValidationError("Offset must be non-negative")


class DocumentStore:
    """CRUD over documents. ``data`` is opaque beyond being a JSON object."""

    def __init__(self, db: Session, max_limit: int = MAX_LIMIT):
        self.db = db
        self.max_limit = max_limit

    def _scoped(self, scope: DocumentScope):
        return self.db.query(Document).filter(
            Document.tenant_id == scope.tenant.id,
            Document.collection_id == scope.collection.id
        )

    @storage_operation
    def create(self, scope: DocumentScope, data: dict) -> Document:
        validate_data(data)
        now = utcnow()
        document = Document(
            tenant_id=scope.tenant.id,
            collection_id=scope.collection.id,
            data=data,
            created_at=now,
            updated_at=now,
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    @storage_operation
    def get(self, scope: DocumentScope, document_id: int) -> Document | None:
        if document_id > MAX_ROW_NUMBER:
            return None
        return self._scoped(scope).filter(Document.id == document_id).first()

    @storage_operation
    def list(self, scope: DocumentScope, limit: int, offset: int) -> Page:
        """Newest first page of the scope.

        Out-of-range ``limit``/``offset`` are rejected, never clamped. An
        offset past anything the database can hold is simply an empty page.
        """
        validate_pagination(limit, offset, self.max_limit)

        total = self.count(scope)
        if offset > MAX_ROW_NUMBER:
            return Page(items=[], total=total, limit=limit, offset=offset)

        items = self._scoped(scope).order_by(
            Document.created_at.desc(), Document.id.desc()
        ).offset(offset).limit(limit).all()
        return Page(items=items, total=total, limit=limit, offset=offset)

    @storage_operation
    def update(self, scope: DocumentScope, document_id: int, data: dict) -> Document | None:
        """Replace ``data`` wholesale. Returns None if the id is not in scope."""
        validate_data(data)
        if document_id > MAX_ROW_NUMBER:
            return None

        document = self._scoped(scope).filter(Document.id == document_id).first()
        if document is None:
            return None

        now = utcnow()
        if now <= document.updated_at:
            now = document.updated_at + timedelta(microseconds=1)
        document.data = data
        document.updated_at = now
        self.db.commit()
        self.db.refresh(document)
        return document

    @storage_operation
    def delete(self, scope: DocumentScope, document_id: int) -> bool:
        if document_id > MAX_ROW_NUMBER:
            return False
        removed = self._scoped(scope).filter(Document.id == document_id).delete(
            synchronize_session=False
        )
        self.db.commit()
        return removed > 0

    @storage_operation
    def count(self, scope: DocumentScope) -> int:
        return self.db.query(func.count(Document.id)).filter(
            Document.tenant_id == scope.tenant.id,
            Document.collection_id == scope.collection.id
        ).scalar() or 0

    @storage_operation
    def delete_all_for_tenant(self, tenant: Tenant, commit: bool = True) -> int:
        """Remove every document of the tenant, across all its collections."""
        removed = self.db.query(Document).filter(
            Document.tenant_id == tenant.id
        ).delete(synchronize_session=False)
        if commit:
            self.db.commit()
        return removed

    @storage_operation
    def counts_by_tenant(self) -> dict[int, int]:
        """Number of documents per tenant id."""
        rows = self.db.query(
            Document.tenant_id, func.count(Document.id)
        ).group_by(Document.tenant_id).all()
        return {tenant_id: int(count) for tenant_id, count in rows}
