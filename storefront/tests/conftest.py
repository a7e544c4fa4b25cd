"""Shared fixtures for the storefront test suite."""

from datetime import datetime
from typing import List

import pytest

from catalog.db import CatalogUnavailableError
from catalog.models import ProductRecord, SearchLogEntry
from catalog.seed import SEED_BRANDS, SEED_LAPTOPS, seed_catalog


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Keep JSONL search events out of the project logs/ directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr("storefront.logging_utils.LOG_DIR", log_dir)
    return log_dir


def _sample_products() -> List[ProductRecord]:
    brand_names = {b["slug"]: b["name"] for b in SEED_BRANDS}
    return [
        ProductRecord(
            id=index,
            name=laptop["name"],
            slug=laptop["slug"],
            brand_name=brand_names[laptop["brand"]],
            processor=laptop["processor"],
            description=laptop["description"],
            image=laptop["main_image"],
            price=laptop["price"],
            ram=laptop["ram"],
            storage=laptop["storage"],
            graphics=laptop["graphics"],
            display=laptop["display"],
        )
        for index, laptop in enumerate(SEED_LAPTOPS, start=1)
    ]


@pytest.fixture
def products() -> List[ProductRecord]:
    """The sample catalog as in-memory snapshot records."""
    return _sample_products()


class FakeStore:
    """In-memory catalog store that counts collaborator calls."""

    def __init__(self, products: List[ProductRecord]):
        self.products = products
        self.full_reads = 0
        self.suggestion_reads = 0
        self.logs: List[SearchLogEntry] = []

    def list_available_products(self) -> List[ProductRecord]:
        self.full_reads += 1
        return [p for p in self.products if p.available]

    def list_available_suggestions(self) -> List[ProductRecord]:
        self.suggestion_reads += 1
        return [
            ProductRecord(
                id=p.id,
                name=p.name,
                slug=p.slug,
                brand_name=p.brand_name,
                image=p.image,
                price=p.price,
            )
            for p in self.products
            if p.available
        ]

    def append_search_log(self, query: str, results_count: int) -> SearchLogEntry:
        entry = SearchLogEntry(query=query, results_count=results_count, created_at=datetime.now())
        self.logs.append(entry)
        return entry

    def product_count(self) -> int:
        return len(self.products)


class FailingStore(FakeStore):
    """Store whose every operation fails like an unreachable database."""

    def __init__(self):
        super().__init__([])

    def list_available_products(self):
        raise CatalogUnavailableError("Failed to read catalog: disk I/O error")

    def list_available_suggestions(self):
        raise CatalogUnavailableError("Failed to read catalog: disk I/O error")

    def append_search_log(self, query, results_count):
        raise CatalogUnavailableError("Failed to write search log: database is locked")

    def product_count(self):
        raise CatalogUnavailableError("Failed to count products: disk I/O error")


@pytest.fixture
def fake_store(products) -> FakeStore:
    return FakeStore(products)


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def seeded_db(tmp_path) -> str:
    """SQLite database holding the sample catalog."""
    db_path = str(tmp_path / "storefront.db")
    seed_catalog(db_path)
    return db_path


@pytest.fixture
def store_factory():
    """The FakeStore class, for tests that build their own catalog."""
    return FakeStore
