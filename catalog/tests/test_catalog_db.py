"""Tests for the SQLite catalog store."""

from datetime import datetime

import pytest

from catalog.db import (
    CatalogStore,
    CatalogUnavailableError,
    append_search_log,
    get_available_products,
    get_available_suggestion_rows,
    get_connection,
    get_product_count,
    get_recent_search_logs,
    upsert_brand,
    upsert_laptop,
)
from catalog.models import ProductRecord, SearchLogEntry
from catalog.seed import SEED_LAPTOPS, seed_catalog


class TestSchema:
    """init_db creates every table the storefront needs."""

    @pytest.mark.parametrize("table", ["brands", "laptops", "search_logs"])
    def test_init_db_creates_table(self, empty_db, table):
        with get_connection(empty_db) as conn:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
            ).fetchone()
        assert row is not None

    def test_seed_is_idempotent(self, seeded_db):
        seed_catalog(seeded_db)
        assert get_product_count(seeded_db) == len(SEED_LAPTOPS)


class TestSnapshots:
    """Snapshot reads only ever contain available laptops."""

    def test_full_projection_fields(self, seeded_db):
        products = get_available_products(seeded_db)
        assert len(products) == len(SEED_LAPTOPS)

        xps = next(p for p in products if p.slug == "dell-xps-15-9520")
        assert isinstance(xps, ProductRecord)
        assert xps.brand_name == "Dell"
        assert xps.processor == "Intel Core i7 12th Gen"
        assert xps.description.startswith("Premium laptop")
        assert xps.price == 185000
        assert xps.available is True

    def test_unavailable_laptops_are_excluded(self, seeded_db):
        brand_id = upsert_brand(seeded_db, "Acer", "acer")
        upsert_laptop(
            seeded_db,
            brand_id=brand_id,
            name="Acer Swift 3",
            slug="acer-swift-3",
            price=70000,
            is_available=False,
        )

        slugs = {p.slug for p in get_available_products(seeded_db)}
        assert "acer-swift-3" not in slugs
        suggestion_slugs = {p.slug for p in get_available_suggestion_rows(seeded_db)}
        assert "acer-swift-3" not in suggestion_slugs
        assert get_product_count(seeded_db, available_only=False) == len(SEED_LAPTOPS) + 1

    def test_snapshot_is_in_catalog_order(self, seeded_db):
        ids = [p.id for p in get_available_products(seeded_db)]
        assert ids == sorted(ids)

    def test_suggestion_projection_is_minimal(self, seeded_db):
        rows = get_available_suggestion_rows(seeded_db)
        assert len(rows) == len(SEED_LAPTOPS)
        for row in rows:
            assert row.name and row.slug and row.brand_name
            assert row.image is not None
            assert row.processor is None
            assert row.description is None


class TestSearchLog:
    """Search log writes are append-only and read newest first."""

    def test_append_returns_persisted_entry(self, empty_db):
        entry = append_search_log(empty_db, "dell xps", 3)
        assert isinstance(entry, SearchLogEntry)
        assert entry.id is not None
        assert entry.results_count == 3

        with get_connection(empty_db) as conn:
            rows = conn.execute("SELECT search_query, results_count FROM search_logs").fetchall()
        assert [(r["search_query"], r["results_count"]) for r in rows] == [("dell xps", 3)]

    def test_zero_result_searches_are_kept(self, empty_db):
        append_search_log(empty_db, "zzzz", 0)
        assert get_recent_search_logs(empty_db)[0].results_count == 0

    def test_recent_searches_newest_first(self, empty_db):
        for query in ["first", "second", "third"]:
            append_search_log(empty_db, query, 1)

        recent = get_recent_search_logs(empty_db, limit=2)
        assert [e.query for e in recent] == ["third", "second"]
        assert all(isinstance(e.created_at, datetime) for e in recent)

    def test_entry_to_dict(self, empty_db):
        data = append_search_log(empty_db, "hp", 2).to_dict()
        assert data["query"] == "hp"
        assert data["results_count"] == 2
        assert isinstance(data["created_at"], str)


class TestCatalogStore:
    """CatalogStore maps storage failures to CatalogUnavailableError."""

    def test_reads_through_to_database(self, seeded_db):
        store = CatalogStore(seeded_db)
        assert len(store.list_available_products()) == len(SEED_LAPTOPS)
        assert len(store.list_available_suggestions()) == len(SEED_LAPTOPS)
        assert store.product_count() == len(SEED_LAPTOPS)

    def test_log_write_and_read(self, seeded_db):
        store = CatalogStore(seeded_db)
        store.append_search_log("ryzen", 1)
        assert [e.query for e in store.recent_searches()] == ["ryzen"]

    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.list_available_products(),
            lambda s: s.list_available_suggestions(),
            lambda s: s.append_search_log("dell", 0),
            lambda s: s.recent_searches(),
            lambda s: s.product_count(),
        ],
    )
    def test_uninitialized_database_raises(self, tmp_path, operation):
        store = CatalogStore(str(tmp_path / "missing.db"))
        with pytest.raises(CatalogUnavailableError):
            operation(store)
