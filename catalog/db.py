"""SQLite database schema and helpers for the laptop catalog."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, List, Optional

from catalog.config import DB_PATH, RECENT_SEARCHES_LIMIT
from catalog.models import ProductRecord, SearchLogEntry

__all__ = [
    "DEFAULT_DB_PATH",
    "CatalogUnavailableError",
    "CatalogStore",
    "get_connection",
    "init_db",
    "upsert_brand",
    "upsert_laptop",
    "get_available_products",
    "get_available_suggestion_rows",
    "append_search_log",
    "get_recent_search_logs",
    "get_product_count",
]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = DB_PATH

_FULL_PROJECTION = """
    SELECT l.id, l.name, l.slug, b.name AS brand_name, l.processor,
           l.description, l.main_image, l.price, l.is_available,
           l.ram, l.storage, l.graphics, l.display
    FROM laptops l
    JOIN brands b ON b.id = l.brand_id
    WHERE l.is_available = 1
    ORDER BY l.id
"""

_SUGGESTION_PROJECTION = """
    SELECT l.id, l.name, l.slug, l.main_image, l.price, b.name AS brand_name
    FROM laptops l
    JOIN brands b ON b.id = l.brand_id
    WHERE l.is_available = 1
    ORDER BY l.id
"""


class CatalogUnavailableError(Exception):
    """Raised when the catalog store cannot be read or written."""


@contextmanager
def get_connection(db_path: str = DEFAULT_DB_PATH) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections."""
    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS brands (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                slug TEXT UNIQUE NOT NULL,
                logo_url TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS laptops (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                brand_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                slug TEXT UNIQUE NOT NULL,
                description TEXT,
                processor TEXT,
                ram TEXT,
                storage TEXT,
                graphics TEXT,
                display TEXT,
                price REAL NOT NULL DEFAULT 0,
                stock_quantity INTEGER NOT NULL DEFAULT 0,
                is_available INTEGER NOT NULL DEFAULT 1,
                main_image TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (brand_id) REFERENCES brands(id) ON DELETE CASCADE
            )
        """)

        # Append-only; one row per committed full-text search
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS search_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                search_query TEXT NOT NULL,
                results_count INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_laptops_available ON laptops(is_available)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_laptops_brand_id ON laptops(brand_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_search_logs_created_at ON search_logs(created_at)")

        conn.commit()


def upsert_brand(
    db_path: str,
    name: str,
    slug: str,
    logo_url: Optional[str] = None,
) -> int:
    """Insert or update a brand by slug. Returns the brand ID."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM brands WHERE slug = ?", (slug,))
        existing = cursor.fetchone()

        if existing:
            brand_id = existing["id"]
            cursor.execute(
                """
                UPDATE brands
                SET name = ?, logo_url = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (name, logo_url, brand_id),
            )
        else:
            cursor.execute(
                "INSERT INTO brands (name, slug, logo_url) VALUES (?, ?, ?)",
                (name, slug, logo_url),
            )
            brand_id = cursor.lastrowid

        conn.commit()
        return brand_id


def upsert_laptop(
    db_path: str,
    brand_id: int,
    name: str,
    slug: str,
    price: float,
    description: Optional[str] = None,
    processor: Optional[str] = None,
    ram: Optional[str] = None,
    storage: Optional[str] = None,
    graphics: Optional[str] = None,
    display: Optional[str] = None,
    stock_quantity: int = 0,
    is_available: bool = True,
    main_image: Optional[str] = None,
) -> int:
    """Insert or update a laptop by slug. Returns the laptop ID."""
    values = (
        brand_id, name, description, processor, ram, storage, graphics,
        display, price, stock_quantity, int(is_available), main_image,
    )
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM laptops WHERE slug = ?", (slug,))
        existing = cursor.fetchone()

        if existing:
            laptop_id = existing["id"]
            cursor.execute(
                """
                UPDATE laptops
                SET brand_id = ?, name = ?, description = ?, processor = ?,
                    ram = ?, storage = ?, graphics = ?, display = ?, price = ?,
                    stock_quantity = ?, is_available = ?, main_image = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                values + (laptop_id,),
            )
        else:
            cursor.execute(
                """
                INSERT INTO laptops (
                    brand_id, name, description, processor, ram, storage,
                    graphics, display, price, stock_quantity, is_available,
                    main_image, slug
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                values + (slug,),
            )
            laptop_id = cursor.lastrowid

        conn.commit()
        return laptop_id


def get_available_products(db_path: str = DEFAULT_DB_PATH) -> List[ProductRecord]:
    """Full projection of every available laptop, in catalog order."""
    with get_connection(db_path) as conn:
        rows = conn.execute(_FULL_PROJECTION).fetchall()

    return [
        ProductRecord(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            brand_name=row["brand_name"],
            processor=row["processor"],
            description=row["description"],
            image=row["main_image"],
            price=row["price"],
            available=bool(row["is_available"]),
            ram=row["ram"],
            storage=row["storage"],
            graphics=row["graphics"],
            display=row["display"],
        )
        for row in rows
    ]


def get_available_suggestion_rows(db_path: str = DEFAULT_DB_PATH) -> List[ProductRecord]:
    """Minimal projection (display + matching fields) of available laptops."""
    with get_connection(db_path) as conn:
        rows = conn.execute(_SUGGESTION_PROJECTION).fetchall()

    return [
        ProductRecord(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            brand_name=row["brand_name"],
            image=row["main_image"],
            price=row["price"],
        )
        for row in rows
    ]


def append_search_log(db_path: str, query: str, results_count: int) -> SearchLogEntry:
    """Append one search log row and commit before returning."""
    created_at = datetime.now()
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO search_logs (search_query, results_count, created_at) VALUES (?, ?, ?)",
            (query, results_count, created_at.isoformat()),
        )
        conn.commit()
        entry_id = cursor.lastrowid

    return SearchLogEntry(
        query=query,
        results_count=results_count,
        created_at=created_at,
        id=entry_id,
    )


def get_recent_search_logs(
    db_path: str = DEFAULT_DB_PATH,
    limit: int = RECENT_SEARCHES_LIMIT,
) -> List[SearchLogEntry]:
    """Most recent search log entries, newest first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """
            SELECT id, search_query, results_count, created_at
            FROM search_logs
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (int(limit),),
        ).fetchall()

    return [
        SearchLogEntry(
            id=row["id"],
            query=row["search_query"],
            results_count=row["results_count"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
        for row in rows
    ]


def get_product_count(db_path: str = DEFAULT_DB_PATH, available_only: bool = True) -> int:
    """Count laptops, by default only those currently available."""
    query = "SELECT COUNT(*) AS count FROM laptops"
    if available_only:
        query += " WHERE is_available = 1"

    with get_connection(db_path) as conn:
        return int(conn.execute(query).fetchone()["count"])


class CatalogStore:
    """Catalog read and search-log write access bound to one database.

    Every call opens its own connection, so concurrent requests share
    nothing but the database file. Storage failures surface as
    ``CatalogUnavailableError``; retrying is left to the caller.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path

    def list_available_products(self) -> List[ProductRecord]:
        try:
            return get_available_products(self.db_path)
        except sqlite3.Error as e:
            raise CatalogUnavailableError(f"Failed to read catalog: {e}") from e

    def list_available_suggestions(self) -> List[ProductRecord]:
        try:
            return get_available_suggestion_rows(self.db_path)
        except sqlite3.Error as e:
            raise CatalogUnavailableError(f"Failed to read catalog: {e}") from e

    def append_search_log(self, query: str, results_count: int) -> SearchLogEntry:
        try:
            return append_search_log(self.db_path, query, results_count)
        except sqlite3.Error as e:
            raise CatalogUnavailableError(f"Failed to write search log: {e}") from e

    def recent_searches(self, limit: int = RECENT_SEARCHES_LIMIT) -> List[SearchLogEntry]:
        try:
            return get_recent_search_logs(self.db_path, limit)
        except sqlite3.Error as e:
            raise CatalogUnavailableError(f"Failed to read search logs: {e}") from e

    def product_count(self) -> int:
        try:
            return get_product_count(self.db_path)
        except sqlite3.Error as e:
            raise CatalogUnavailableError(f"Failed to count products: {e}") from e
