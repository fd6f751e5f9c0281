"""
Book endpoints of the JSON API.

These routes translate requests into ``BookService`` calls.  Failures
are raised as ``CatalogError`` subclasses by the service and rendered
as ``{"message": ...}`` by the handler in ``core.errors``; successful
mutations answer with ``{"message": ..., "id": ...}``.

Handlers are plain functions: FastAPI runs them in its thread pool, so
blocking driver calls do not stall the event loop.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.collection import Collection

from book_catalog_api.app.core.db import get_collection, get_store_timeout
from book_catalog_api.app.schemas.book import (
    BookCreate,
    BookRead,
    BookUpdate,
    ErrorMessage,
    MutationResult,
    Projection,
)
from book_catalog_api.app.services.book_service import BookService

router = APIRouter()

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorMessage},
}


@router.get("", response_model=List[BookRead], responses=_ERRORS)
def list_books(
    collection: Collection = Depends(get_collection),
    timeout: float = Depends(get_store_timeout),
) -> List[BookRead]:
    """Return every book in the catalog."""
    return BookService.list_books(collection, Projection.API, timeout)


@router.post(
    "",
    response_model=MutationResult,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, status.HTTP_409_CONFLICT: {"model": ErrorMessage}},
)
def create_book(
    book_in: BookCreate,
    collection: Collection = Depends(get_collection),
    timeout: float = Depends(get_store_timeout),
) -> MutationResult:
    """Create a book unless an identical one already exists."""
    book = BookService.create_book(collection, book_in.to_book(), timeout)
    return MutationResult(message="Book created successfully", id=book.id)


@router.put(
    "",
    response_model=MutationResult,
    responses={
        **_ERRORS,
        status.HTTP_404_NOT_FOUND: {"model": ErrorMessage},
        status.HTTP_409_CONFLICT: {"model": ErrorMessage},
    },
)
def update_book(
    book_in: BookUpdate,
    collection: Collection = Depends(get_collection),
    timeout: float = Depends(get_store_timeout),
) -> MutationResult:
    """Replace all fields of the book identified by ``id`` in the body."""
    book = BookService.update_book(collection, book_in.id, book_in.to_book(), timeout)
    return MutationResult(message="Book modified successfully", id=book.id)


@router.delete(
    "/{book_id}",
    response_model=MutationResult,
    responses={**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorMessage}},
)
def delete_book(
    book_id: str,
    collection: Collection = Depends(get_collection),
    timeout: float = Depends(get_store_timeout),
) -> MutationResult:
    deleted_id = BookService.delete_book(collection, book_id, timeout)
    return MutationResult(message="Book deleted successfully", id=deleted_id)
