"""Tenant model for multi-tenancy."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base, utcnow


class Tenant(Base):
    """Tenant addressed by its subdomain name."""

    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(63), nullable=False, unique=True)
    icon = Column(String(10), nullable=True)  # Display attribute, usually an emoji
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    collections = relationship("Collection", back_populates="tenant", passive_deletes=True)
