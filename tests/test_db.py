"""Tests for collection provisioning and store error mapping."""

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from book_catalog_api.app.core.config import Settings
from book_catalog_api.app.core.db import (
    BOOK_IDENTITY_INDEX,
    connect,
    ensure_collection,
    ensure_indexes,
    store_operation,
)
from book_catalog_api.app.core.errors import ConfigurationError, StoreUnavailable


class TestEnsureCollection:
    def test_creates_missing_collection(self, mongo_client) -> None:
        collection = ensure_collection(mongo_client, "catalog", "books")
        assert collection.name == "books"
        assert "books" in mongo_client["catalog"].list_collection_names()

    def test_idempotent(self, mongo_client) -> None:
        ensure_collection(mongo_client, "catalog", "books")
        collection = ensure_collection(mongo_client, "catalog", "books")  # Should not raise
        assert mongo_client["catalog"].list_collection_names().count("books") == 1
        assert collection.name == "books"

    def test_keeps_existing_documents(self, mongo_client) -> None:
        mongo_client["catalog"]["books"].insert_one({"name": "A"})
        collection = ensure_collection(mongo_client, "catalog", "books")
        assert collection.count_documents({}) == 1


class TestEnsureIndexes:
    def test_creates_unique_index(self, collection) -> None:
        assert ensure_indexes(collection) is True
        index = collection.index_information()[BOOK_IDENTITY_INDEX]
        assert index["unique"] is True

    def test_skips_index_when_duplicates_exist(self, collection) -> None:
        document = {"name": "A", "author": "B", "pages": 1, "year": 2}
        collection.insert_one(dict(document))
        collection.insert_one(dict(document))
        assert ensure_indexes(collection) is False


class TestStoreOperation:
    def test_driver_errors_become_store_unavailable(self) -> None:
        with pytest.raises(StoreUnavailable) as excinfo:
            with store_operation("Error reading books", 1.0):
                raise ServerSelectionTimeoutError("timed out")
        assert excinfo.value.message == "Error reading books"
        assert isinstance(excinfo.value.__cause__, ServerSelectionTimeoutError)

    def test_applies_given_deadline(self, recorded_deadlines) -> None:
        with store_operation("Error reading books", 0.25):
            pass
        assert recorded_deadlines == [0.25]

    def test_other_errors_pass_through(self) -> None:
        with pytest.raises(KeyError):
            with store_operation("Error reading books", 1.0):
                raise KeyError("name")


class TestConnect:
    def test_requires_uri(self) -> None:
        with pytest.raises(ConfigurationError):
            connect(Settings(database_uri=""))
