"""Document model: an opaque JSON object owned by a collection."""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.database import Base, utcnow


class Document(Base):
    """Schema-less JSON document."""

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_created", "collection_id", "created_at"),
        Index("ix_documents_tenant", "tenant_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    collection_id = Column(Integer, ForeignKey("collections.id", ondelete="CASCADE"), nullable=False)

    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    collection = relationship("Collection", back_populates="documents")
