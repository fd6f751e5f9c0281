"""Tests for seeding the catalog."""

import pytest

from book_catalog_api.app.core.db import ensure_indexes
from book_catalog_api.app.core.errors import SeedIntegrityError
from book_catalog_api.app.schemas.book import Book
from book_catalog_api.app.services.seed_service import SEED_BOOKS, SeedService


class TestEnsureSeeded:
    def test_seeds_empty_collection(self, collection) -> None:
        inserted = SeedService.ensure_seeded(collection)
        assert inserted == len(SEED_BOOKS)
        assert collection.count_documents({}) == len(SEED_BOOKS)

    def test_idempotent(self, collection) -> None:
        SeedService.ensure_seeded(collection)
        assert SeedService.ensure_seeded(collection) == 0
        for seed in SEED_BOOKS:
            assert collection.count_documents(seed.to_document()) == 1

    def test_fills_partially_seeded_store(self, collection) -> None:
        collection.insert_one(SEED_BOOKS[0].to_document())
        assert SeedService.ensure_seeded(collection) == len(SEED_BOOKS) - 1
        assert collection.count_documents({}) == len(SEED_BOOKS)

    def test_double_seed_is_fatal(self, collection) -> None:
        collection.insert_one(SEED_BOOKS[1].to_document())
        collection.insert_one(SEED_BOOKS[1].to_document())
        with pytest.raises(SeedIntegrityError):
            SeedService.ensure_seeded(collection)

    def test_extra_stored_fields_still_match(self, collection) -> None:
        seed = Book(name="Odd", author="Someone", isbn="1", pages=5, year=2000)
        collection.insert_one({**seed.to_document(), "shelf": "B3"})
        assert SeedService.ensure_seeded(collection, [seed]) == 0
        assert collection.count_documents({}) == 1

    def test_undecodable_match_is_fatal(self, collection) -> None:
        seed = Book(name="Bad", author="Someone", pages=5, year=2000)
        collection.insert_one({**seed.to_document(), "isbn": ["not", "text"]})
        with pytest.raises(SeedIntegrityError):
            SeedService.ensure_seeded(collection, [seed])

    def test_custom_seed_set(self, collection) -> None:
        seeds = [Book(name="Dune", author="Frank Herbert", pages=412, year=1965)]
        assert SeedService.ensure_seeded(collection, seeds) == 1
        stored = collection.find_one({"name": "Dune"})
        assert "isbn" not in stored

    def test_conflicting_identity_is_skipped(self, collection) -> None:
        ensure_indexes(collection)
        seed = SEED_BOOKS[2]
        collection.insert_one({**seed.identity_filter(), "isbn": "different"})
        assert SeedService.ensure_seeded(collection, [seed]) == 0
        assert collection.count_documents(seed.identity_filter()) == 1
