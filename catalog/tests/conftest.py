"""Shared fixtures for the catalog test suite."""

import pytest

from catalog.db import init_db
from catalog.seed import seed_catalog


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Keep JSONL search events out of the project logs/ directory."""
    monkeypatch.setattr("storefront.logging_utils.LOG_DIR", tmp_path / "logs")


@pytest.fixture
def empty_db(tmp_path):
    """Initialized database with no rows."""
    db_path = str(tmp_path / "catalog.db")
    init_db(db_path)
    return db_path


@pytest.fixture
def seeded_db(tmp_path):
    """Database holding the sample catalog."""
    db_path = str(tmp_path / "catalog.db")
    seed_catalog(db_path)
    return db_path
