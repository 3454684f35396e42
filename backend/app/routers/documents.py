"""Documents router: generic CRUD over a tenant's collections.

The tenant comes from the request host (``acme.localhost:3000`` → ``acme``),
the collection from the path.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.config import Settings
from app.database import get_db
from app.exceptions import NotFoundError
from app.schemas.document import DocumentList, Pagination, document_to_response
from app.services.documents import DocumentStore, validate_data
from app.services.resolver import Operation, RequestResolver, parse_document_id

router = APIRouter(prefix="/api", tags=["documents"])


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_app)
) -> RequestResolver:
    return RequestResolver(db, settings.local_dev_suffixes)


def get_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_app)
) -> DocumentStore:
    return DocumentStore(db, max_limit=settings.max_page_limit)


@router.get("/{collection}", response_model=DocumentList)
def list_documents(
    collection: str,
    request: Request,
    limit: int | None = Query(None),
    offset: int = Query(0),
    resolver: RequestResolver = Depends(get_resolver),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings_from_app)
):
    """List documents of a collection, newest first."""
    scope = resolver.resolve(request.headers.get("host"), collection, Operation.LIST)
    page = store.list(scope, limit if limit is not None else settings.default_page_limit, offset)
    return DocumentList(
        data=[document_to_response(doc) for doc in page.items],
        pagination=Pagination(
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more
        )
    )


@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
def create_document(
    collection: str,
    request: Request,
    payload: Any = Body(...),
    resolver: RequestResolver = Depends(get_resolver),
    store: DocumentStore = Depends(get_store)
):
    """Create a document; the collection is created on first write."""
    # Reject bad bodies before anything gets provisioned
    validate_data(payload)
    scope = resolver.resolve(request.headers.get("host"), collection, Operation.CREATE)
    return document_to_response(store.create(scope, payload))


@router.get("/{collection}/{document_id}")
def get_document(
    collection: str,
    document_id: str,
    request: Request,
    resolver: RequestResolver = Depends(get_resolver),
    store: DocumentStore = Depends(get_store)
):
    """Get document by ID."""
    doc_id = parse_document_id(document_id)
    scope = resolver.resolve(request.headers.get("host"), collection, Operation.READ)

    doc = store.get(scope, doc_id)
    if not doc:
        raise NotFoundError("Document not found")
    return document_to_response(doc)


@router.put("/{collection}/{document_id}")
def update_document(
    collection: str,
    document_id: str,
    request: Request,
    payload: Any = Body(...),
    resolver: RequestResolver = Depends(get_resolver),
    store: DocumentStore = Depends(get_store)
):
    """Replace a document's data."""
    doc_id = parse_document_id(document_id)
    validate_data(payload)
    scope = resolver.resolve(request.headers.get("host"), collection, Operation.UPDATE)

    doc = store.update(scope, doc_id, payload)
    if not doc:
        raise NotFoundError("Document not found")
    return document_to_response(doc)


@router.delete("/{collection}/{document_id}")
def delete_document(
    collection: str,
    document_id: str,
    request: Request,
    resolver: RequestResolver = Depends(get_resolver),
    store: DocumentStore = Depends(get_store)
):
    """Delete a document."""
    doc_id = parse_document_id(document_id)
    scope = resolver.resolve(request.headers.get("host"), collection, Operation.DELETE)

    if not store.delete(scope, doc_id):
        raise NotFoundError("Document not found")
    return {"message": "Document deleted successfully"}
