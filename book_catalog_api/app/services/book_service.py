"""
Service layer for books.

``BookService`` implements listing, creation, replacement and deletion
of book records.  Every method receives the collection explicitly;
the service keeps no state and no cached copies between calls, so
each operation is a round trip to MongoDB.

Creation checks for an identical (name, author, pages, year) book
before inserting.  The check and the insert are two separate store
operations, so two concurrent requests can both pass the check; the
unique index created at startup rejects the second insert when it is
present, and that rejection is reported as ``DuplicateBook`` too.

Replacement is a single ``find_one_and_update`` returning the document
after the change, so callers never observe a half-applied update.
"""

from __future__ import annotations

import logging
from typing import List, Union

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from book_catalog_api.app.core.db import DEFAULT_STORE_TIMEOUT, store_operation
from book_catalog_api.app.core.errors import (
    BookNotFound,
    DuplicateBook,
    InvalidBook,
    InvalidBookId,
)
from book_catalog_api.app.schemas.book import (
    Book,
    BookRead,
    BookView,
    Projection,
    parse_object_id,
    to_api,
    to_view,
)


logger = logging.getLogger(__name__)


class BookService:
    """Service class for managing books."""

    @classmethod
    def list_books(
        cls,
        collection: Collection,
        projection: Projection = Projection.API,
        timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> List[Union[BookRead, BookView]]:
        """Return every stored book in the requested shape.

        No filter, limit or sort is applied; the order is whatever the
        store returns.  An empty collection yields an empty list.
        """
        with store_operation("Error reading books", timeout):
            documents = list(collection.find({}))
        books = [Book.from_document(doc) for doc in documents]
        if projection is Projection.VIEW:
            return [to_view(book) for book in books]
        return [to_api(book) for book in books]

    @classmethod
    def create_book(cls, collection: Collection, candidate: Book, timeout: float = DEFAULT_STORE_TIMEOUT) -> Book:
        """Validate and insert a new book, returning it with its id."""
        if not candidate.name or not candidate.author or candidate.pages == 0 or candidate.year == 0:
            raise InvalidBook()

        with store_operation("Error checking for same book!", timeout):
            count = collection.count_documents(candidate.identity_filter())
        if count > 0:
            raise DuplicateBook()

        with store_operation("Error creating book", timeout):
            try:
                result = collection.insert_one(candidate.to_document())
            except DuplicateKeyError as exc:
                # Lost the race against a concurrent create.
                raise DuplicateBook() from exc
        book_id = str(result.inserted_id)
        logger.info("Created book %s (%s by %s)", book_id, candidate.name, candidate.author)
        return candidate.model_copy(update={"id": book_id})

    @classmethod
    def update_book(
        cls,
        collection: Collection,
        book_id: str,
        replacement: Book,
        timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> Book:
        """Overwrite every field of a book and return the post-image.

        ``name``, ``author``, ``year``, ``isbn`` and ``pages`` are all
        replaced, whatever their values; the id never changes.
        """
        object_id = parse_object_id(book_id)
        if object_id is None:
            raise InvalidBookId()

        update = {
            "$set": {
                "name": replacement.name,
                "author": replacement.author,
                "year": replacement.year,
                "isbn": replacement.isbn,
                "pages": replacement.pages,
            }
        }
        with store_operation("Unable to update", timeout):
            try:
                document = collection.find_one_and_update(
                    {"_id": object_id},
                    update,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as exc:
                raise DuplicateBook() from exc
        if document is None:
            raise BookNotFound()
        logger.info("Updated book %s", book_id)
        return Book.from_document(document)

    @classmethod
    def delete_book(cls, collection: Collection, book_id: str, timeout: float = DEFAULT_STORE_TIMEOUT) -> str:
        """Delete a book by id and return that id.

        A well-formed id that matches nothing is ``BookNotFound``, even
        though the store call itself succeeded.
        """
        object_id = parse_object_id(book_id)
        if object_id is None:
            raise InvalidBookId()

        with store_operation("Error deleting book", timeout):
            result = collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise BookNotFound()
        logger.info("Deleted book %s", book_id)
        return book_id
