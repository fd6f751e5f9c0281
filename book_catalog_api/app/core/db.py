"""
MongoDB integration.

This module owns everything that touches the driver directly:
building the ``MongoClient`` (``connect``), provisioning the book
collection on first use (``ensure_collection``, ``ensure_indexes``),
the FastAPI dependencies that hand the collection and the store
deadline to route handlers (``get_collection``, ``get_store_timeout``)
and ``store_operation``, the context manager every service wraps its
store calls in.

``store_operation`` applies the deadline it is given with
``pymongo.timeout`` and converts any driver failure into
``StoreUnavailable``.  The deadline always comes from the caller, which
takes it from the ``Settings`` the application was created with.
Nothing here retries.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import pymongo
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import CollectionInvalid, DuplicateKeyError, PyMongoError

from .config import Settings
from .errors import ConfigurationError, StoreUnavailable


logger = logging.getLogger(__name__)

# Fields identifying a logical book; also the unique index key.
BOOK_IDENTITY_FIELDS = ("name", "author", "pages", "year")
BOOK_IDENTITY_INDEX = "book_identity"

# Seconds; used when a service is called without an explicit deadline.
DEFAULT_STORE_TIMEOUT = 5.0


@contextmanager
def store_operation(description: str, timeout: float) -> Iterator[None]:
    """Run a block of store calls under a deadline.

    Parameters
    ----------
    description : str
        Human readable message used for the ``StoreUnavailable`` raised
        when the block fails, e.g. ``"Error creating book"``.
    timeout : float
        Deadline in seconds for the whole block.
    """
    try:
        with pymongo.timeout(timeout):
            yield
    except PyMongoError as exc:
        logger.error("%s: %s", description, exc)
        raise StoreUnavailable(description) from exc


def connect(config: Settings) -> MongoClient:
    """Create a client for ``config.database_uri`` and make sure it answers.

    Raises ``ConfigurationError`` when no URI is configured and
    ``StoreUnavailable`` when the server cannot be reached in time.
    """
    if not config.database_uri:
        raise ConfigurationError("DATABASE_URI is not set")
    client: MongoClient = MongoClient(
        config.database_uri,
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
    )
    try:
        ping(client, config.store_timeout)
    except StoreUnavailable:
        client.close()
        raise
    logger.info("Connected to MongoDB")
    return client


def ping(client: MongoClient, timeout: float = DEFAULT_STORE_TIMEOUT) -> None:
    with store_operation("Failed to connect to MongoDB, please make sure the database is running", timeout):
        client.admin.command("ping")


def ensure_collection(
    client: MongoClient,
    database_name: str,
    collection_name: str,
    timeout: float = DEFAULT_STORE_TIMEOUT,
) -> Collection:
    """Return the book collection, creating it if it does not exist yet.

    Safe to call on every start: an existing collection is simply
    returned, and losing a creation race to another process is treated
    the same way.
    """
    database = client[database_name]
    with store_operation(f"Unable to prepare collection {database_name}.{collection_name}", timeout):
        names = database.list_collection_names()
        if collection_name not in names:
            try:
                database.create_collection(collection_name)
                logger.info("Created collection %s.%s", database_name, collection_name)
            except CollectionInvalid:
                logger.info("Collection %s.%s was created concurrently", database_name, collection_name)
    return database[collection_name]


def ensure_indexes(collection: Collection, timeout: float = DEFAULT_STORE_TIMEOUT) -> bool:
    """Create the unique index on the book identity fields.

    Returns ``False`` when existing documents already violate the
    constraint; the index is then skipped and only the check performed
    by ``BookService.create_book`` guards against duplicates.
    """
    keys = [(field, pymongo.ASCENDING) for field in BOOK_IDENTITY_FIELDS]
    with store_operation("Unable to create book indexes", timeout):
        try:
            collection.create_index(keys, unique=True, name=BOOK_IDENTITY_INDEX)
        except DuplicateKeyError as exc:
            logger.warning("Duplicate books already stored, unique index not created: %s", exc)
            return False
    return True


def get_collection(request: Request) -> Collection:
    """FastAPI dependency returning the collection prepared at startup."""
    return request.app.state.collection


def get_store_timeout(request: Request) -> float:
    """FastAPI dependency returning the deadline the app was configured with."""
    return request.app.state.settings.store_timeout
