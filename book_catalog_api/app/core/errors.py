"""
Typed errors raised by the catalog services.

Every error that can reach an HTTP caller derives from ``CatalogError``
and carries the status code the API answers with.  The handler
registered by ``register_exception_handlers`` turns them into the
``{"message": ...}`` body used by all failed requests, so endpoint
functions never build error responses themselves.

``SeedIntegrityError`` and ``ConfigurationError`` only occur while the
application starts and abort the process.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal catalog error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidBook(CatalogError):
    """Required book fields are missing or left at their unset value."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Name, author, pages and year cannot be empty!"


class DuplicateBook(CatalogError):
    """A book with the same name, author, pages and year already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "There already exists the exact book!"


class BookNotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Book not found"


class InvalidBookId(CatalogError):
    """The identifier is not a well-formed ObjectId hex string."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid ID format"


class StoreUnavailable(CatalogError):
    """MongoDB could not be reached, timed out or rejected the operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Book store is unavailable"


class BookDecodeError(CatalogError):
    """A stored document does not decode into a book."""

    default_message = "Stored book could not be decoded"


class SeedIntegrityError(CatalogError):
    """Seed data is present more than once or cannot be decoded."""

    default_message = "Seed data integrity violated"


class ConfigurationError(CatalogError):
    """A required setting is missing."""

    default_message = "Invalid configuration"


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer unparseable request bodies with the catalog error shape."""
    logger.warning("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid book data"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
