"""Centralized configuration for the storefront app."""

import os

from catalog.config import DB_PATH, LOG_DIR

__all__ = [
    "DB_PATH",
    "LOG_DIR",
    "FLASK_HOST",
    "FLASK_PORT",
    "FLASK_DEBUG",
    "SEARCH_THRESHOLD",
    "SUGGESTION_LIMIT",
    "MIN_SUGGEST_QUERY_LENGTH",
    "DEBOUNCE_SECONDS",
    "CLIENT_TIMEOUT",
    "HIGHLIGHT_CLASS",
]

# Flask app settings (allow env overrides; default debug off for safety)
# Hosting platforms set PORT dynamically; fall back to FLASK_PORT or 5000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Fuzzy search: 0 = exact match, 1 = no similarity
SEARCH_THRESHOLD = float(os.getenv("SEARCH_THRESHOLD", "0.4"))

# Autocomplete
SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", "8"))
MIN_SUGGEST_QUERY_LENGTH = int(os.getenv("MIN_SUGGEST_QUERY_LENGTH", "2"))
DEBOUNCE_SECONDS = float(os.getenv("DEBOUNCE_SECONDS", "0.3"))

# HTTP client (autocomplete + search results page)
CLIENT_TIMEOUT = float(os.getenv("CLIENT_TIMEOUT", "5"))

# UI
HIGHLIGHT_CLASS = os.getenv("HIGHLIGHT_CLASS", "search-highlight")
