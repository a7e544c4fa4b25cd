"""Configuration and constants for the laptop catalog store."""

import os
from pathlib import Path

__all__ = [
    "DB_PATH",
    "LOG_DIR",
    "RECENT_SEARCHES_LIMIT",
    "TOP_QUERIES_LIMIT",
]

_PROJECT_ROOT = Path(__file__).parent.parent

# SQLite database shared by the storefront and the CLI
DB_PATH = os.getenv("DB_PATH", "data/laptops.db")

# Log directory (JSONL + console)
LOG_DIR = Path(os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs")))

# Analytics
RECENT_SEARCHES_LIMIT = int(os.getenv("RECENT_SEARCHES_LIMIT", "20"))
TOP_QUERIES_LIMIT = int(os.getenv("TOP_QUERIES_LIMIT", "10"))
