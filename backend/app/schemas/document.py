"""Document schemas.

A document is returned with its JSON payload spread at the top level next to
``id``, and its timestamps under ``_meta``. ``id`` and ``_meta`` always come
from the record, even when the payload has keys with those names.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.document import Document

RESERVED_KEYS = ("id", "_meta")


def document_to_response(document: Document) -> dict[str, Any]:
    body: dict[str, Any] = {"id": document.id}
    body.update(
        (key, value) for key, value in document.data.items() if key not in RESERVED_KEYS
    )
    body["_meta"] = {
        "created_at": document.created_at.isoformat(),
        "updated_at": document.updated_at.isoformat(),
    }
    return body


class Pagination(BaseModel):
    """Pagination block of a list response."""
    total: int
    limit: int
    offset: int
    has_more: bool = Field(alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class DocumentList(BaseModel):
    """List response: a page of documents and where it sits in the collection."""
    data: list[dict[str, Any]]
    pagination: Pagination
