"""Shared fixtures: an in-memory MongoDB and a test client wired to it."""

import contextlib
from typing import Iterator, List

import mongomock
import pymongo
import pytest
from fastapi.testclient import TestClient
from pymongo.collection import Collection

from book_catalog_api.app.core.config import Settings
from book_catalog_api.app.main import create_app


@pytest.fixture
def mongo_client() -> mongomock.MongoClient:
    return mongomock.MongoClient()


@pytest.fixture
def collection(mongo_client: mongomock.MongoClient) -> Collection:
    return mongo_client["exercise-2"]["information"]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_uri="mongodb://localhost:27017",
        database_name="catalog-test",
        collection_name="books",
        seed_on_startup=False,
    )


@pytest.fixture
def api_client(test_settings: Settings, mongo_client: mongomock.MongoClient) -> Iterator[TestClient]:
    app = create_app(test_settings, client=mongo_client)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def book_payload() -> dict:
    return {
        "name": "Dune",
        "author": "Frank Herbert",
        "isbn": "978-0-441-17271-9",
        "pages": 412,
        "year": 1965,
    }


@pytest.fixture
def recorded_deadlines(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record every deadline passed to ``pymongo.timeout``."""
    deadlines: List[float] = []

    def fake_timeout(seconds: float):
        deadlines.append(seconds)
        return contextlib.nullcontext()

    monkeypatch.setattr(pymongo, "timeout", fake_timeout)
    return deadlines
