"""Collection schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class CollectionCreate(BaseModel):
    """Create collection request."""
    name: str


class CollectionRead(BaseModel):
    """Collection response."""
    name: str
    created_at: datetime
    document_count: int = 0

    model_config = ConfigDict(from_attributes=True)
