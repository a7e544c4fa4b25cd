"""Laptop catalog storage, seed data and search analytics."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog.config import DB_PATH
from catalog.db import (
    CatalogStore,
    CatalogUnavailableError,
    append_search_log,
    get_available_products,
    get_available_suggestion_rows,
    init_db,
)
from catalog.models import ProductRecord, SearchLogEntry, SuggestionItem

__all__ = [
    # Version
    "__version__",
    # Config
    "DB_PATH",
    # Models
    "ProductRecord",
    "SearchLogEntry",
    "SuggestionItem",
    # Storage
    "CatalogStore",
    "CatalogUnavailableError",
    "init_db",
    "get_available_products",
    "get_available_suggestion_rows",
    "append_search_log",
]
