"""
Bootstrap data for an empty catalog.

``SeedService.ensure_seeded`` makes sure each seed book is stored
exactly once.  Every seed is looked up by an exact match on all of its
fields: a missing seed is inserted, a single match is left alone, and
more than one match means the store was seeded twice or corrupted,
which aborts startup with ``SeedIntegrityError``.

The loop is not transactional.  If the process stops half way, the
next start inserts only the seeds that are still missing.
"""

import logging
from typing import Iterable, Sequence

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from book_catalog_api.app.core.db import DEFAULT_STORE_TIMEOUT, store_operation
from book_catalog_api.app.core.errors import BookDecodeError, SeedIntegrityError
from book_catalog_api.app.schemas.book import Book


logger = logging.getLogger(__name__)


SEED_BOOKS: Sequence[Book] = (
    Book(
        name="The Vortex",
        author="José Eustasio Rivera",
        isbn="958-30-0804-4",
        pages=292,
        year=1924,
    ),
    Book(
        name="Frankenstein",
        author="Mary Shelley",
        isbn="978-3-649-64609-9",
        pages=280,
        year=1818,
    ),
    Book(
        name="The Black Cat",
        author="Edgar Allan Poe",
        isbn="978-3-99168-238-7",
        pages=280,
        year=1843,
    ),
)


class SeedService:
    """Insert the bootstrap books that are not stored yet."""

    @classmethod
    def ensure_seeded(
        cls,
        collection: Collection,
        seeds: Iterable[Book] = SEED_BOOKS,
        timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> int:
        """Insert missing seed books and return how many were inserted."""
        inserted = 0
        for seed in seeds:
            document = seed.to_document()
            with store_operation(f"Error looking up seed book {seed.name!r}", timeout):
                # Two results are enough to detect a double seed.
                matches = list(collection.find(document).limit(2))

            for match in matches:
                try:
                    Book.from_document(match)
                except BookDecodeError as exc:
                    raise SeedIntegrityError(f"Seed book {seed.name!r} is stored in an unreadable form") from exc

            if len(matches) > 1:
                raise SeedIntegrityError(f"More than one record found for seed book {seed.name!r}")
            if matches:
                logger.debug("Seed book %r already present as %s", seed.name, matches[0]["_id"])
                continue

            with store_operation(f"Error inserting seed book {seed.name!r}", timeout):
                try:
                    result = collection.insert_one(document)
                except DuplicateKeyError:
                    # Same identity stored with a different ISBN.
                    logger.warning("Seed book %r conflicts with a stored book, skipped", seed.name)
                    continue
            inserted += 1
            logger.info("Inserted seed book %r as %s", seed.name, result.inserted_id)
        return inserted
