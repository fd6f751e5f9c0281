"""
Pydantic schemas for book records.

A book is the only entity the catalog stores.  ``Book`` is the
canonical record decoded from a MongoDB document; it is never sent to
clients directly.  Two read-time projections are derived from it:

* ``BookRead`` uses the lowercase keys of the JSON API
  (``id``, ``name``, ``author``, ``isbn``, ``pages``, ``year``).
* ``BookView`` uses the capitalised keys expected by the HTML
  templates (``ID``, ``BookName``, ``BookAuthor``, ``BookISBN``,
  ``BookPages``, ``BookYears``).

Both are produced by the pure functions ``to_api`` and ``to_view`` so
the two shapes can never drift apart.  Identifiers always travel as
the 24 character hex form of the ``ObjectId``.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from book_catalog_api.app.core.errors import BookDecodeError


class Projection(str, Enum):
    """Presentation shape requested from the query service."""

    API = "api"
    VIEW = "view"


class Book(BaseModel):
    """Canonical book record as stored in the collection."""

    id: Optional[str] = Field(None, description="Hex form of the store-assigned ObjectId")
    name: str = ""
    author: str = ""
    isbn: str = ""
    pages: int = 0
    year: int = 0

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Book":
        """Decode a raw MongoDB document.

        Raises ``BookDecodeError`` when a field has the wrong type, for
        example a ``pages`` value stored as free text.
        """
        raw_id = document.get("_id")
        try:
            return cls(
                id=str(raw_id) if raw_id is not None else None,
                name=document.get("name", ""),
                author=document.get("author", ""),
                isbn=document.get("isbn") or "",
                pages=document.get("pages", 0),
                year=document.get("year", 0),
            )
        except ValidationError as exc:
            raise BookDecodeError(f"Cannot decode book document {raw_id}: {exc}") from exc

    def to_document(self) -> Dict[str, Any]:
        """Return the persisted layout, without ``_id``.

        An empty ISBN is left out of the document entirely.
        """
        document: Dict[str, Any] = {
            "name": self.name,
            "author": self.author,
            "pages": self.pages,
            "year": self.year,
        }
        if self.isbn:
            document["isbn"] = self.isbn
        return document

    def identity_filter(self) -> Dict[str, Any]:
        """Fields that make two books the same logical book."""
        return {
            "name": self.name,
            "author": self.author,
            "pages": self.pages,
            "year": self.year,
        }


class BookCreate(BaseModel):
    """Request body for creating a book.

    Missing fields fall back to their "unset" values so that the
    service, not the parser, decides what is invalid.
    """

    name: str = ""
    author: str = ""
    isbn: Optional[str] = None
    pages: int = 0
    year: int = 0

    def to_book(self) -> Book:
        return Book(
            name=self.name,
            author=self.author,
            isbn=self.isbn or "",
            pages=self.pages,
            year=self.year,
        )


class BookUpdate(BaseModel):
    """Request body for replacing a book.

    All fields are overwritten; there is no partial update.
    """

    id: str = Field(..., description="Hex identifier of the book to replace")
    name: str = ""
    author: str = ""
    isbn: Optional[str] = None
    pages: int = 0
    year: int = 0

    def to_book(self) -> Book:
        return Book(
            id=self.id,
            name=self.name,
            author=self.author,
            isbn=self.isbn or "",
            pages=self.pages,
            year=self.year,
        )


class BookRead(BaseModel):
    """API projection of a book."""

    id: str
    name: str
    author: str
    isbn: str
    pages: int
    year: int


class BookView(BaseModel):
    """View projection of a book, keyed the way the templates expect."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="ID")
    name: str = Field(..., alias="BookName")
    author: str = Field(..., alias="BookAuthor")
    isbn: str = Field(..., alias="BookISBN")
    pages: int = Field(..., alias="BookPages")
    year: int = Field(..., alias="BookYears")

    def as_context(self) -> Dict[str, Any]:
        """Return the dict handed to the template engine."""
        return self.model_dump(by_alias=True)


class MutationResult(BaseModel):
    """Body returned by create, update and delete."""

    message: str
    id: str


class ErrorMessage(BaseModel):
    """Body returned for every failed request."""

    message: str


def to_api(book: Book) -> BookRead:
    """Project a stored book onto the JSON API shape."""
    return BookRead(
        id=book.id or "",
        name=book.name,
        author=book.author,
        isbn=book.isbn,
        pages=book.pages,
        year=book.year,
    )


def to_view(book: Book) -> BookView:
    """Project a stored book onto the template shape."""
    return BookView(
        id=book.id or "",
        name=book.name,
        author=book.author,
        isbn=book.isbn,
        pages=book.pages,
        year=book.year,
    )


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return the ``ObjectId`` for a hex string, or ``None`` if malformed."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
