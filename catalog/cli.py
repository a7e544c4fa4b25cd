"""Command-line interface for the laptop catalog."""

import argparse
import json
import logging
import sqlite3
import sys
from typing import List, Optional

from pandas.errors import DatabaseError as PandasDatabaseError

from catalog.analytics import summarize_search_logs
from catalog.config import DB_PATH, RECENT_SEARCHES_LIMIT
from catalog.db import CatalogStore, CatalogUnavailableError, get_product_count, init_db
from catalog.logging_config import setup_logging
from catalog.seed import seed_catalog

__all__ = ["main", "parse_args", "setup_database", "show_stats", "show_recent_searches", "run_search"]

logger = logging.getLogger("catalog.cli")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Laptop catalog: database setup, search analytics and search from the shell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the schema and load the sample laptops
  python -m catalog.cli --init-db --seed

  # Catalog and search-log statistics
  python -m catalog.cli --stats

  # Last 50 committed searches
  python -m catalog.cli --recent-searches 50

  # Run a full fuzzy search (logged like a storefront search)
  python -m catalog.cli --search "dlel xps"
        """,
    )
    parser.add_argument("--db", default=DB_PATH, help=f"SQLite database path (default: {DB_PATH})")
    parser.add_argument("--init-db", action="store_true", help="Create tables and indexes")
    parser.add_argument("--seed", action="store_true", help="Upsert the sample brands and laptops")
    parser.add_argument("--stats", action="store_true", help="Show catalog and search statistics")
    parser.add_argument(
        "--recent-searches",
        type=_positive_int,
        nargs="?",
        const=RECENT_SEARCHES_LIMIT,
        metavar="N",
        help=f"Show the N most recent searches (default: {RECENT_SEARCHES_LIMIT})",
    )
    parser.add_argument("--search", metavar="QUERY", help="Run a full-text fuzzy search")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def show_stats(db_path: str, as_json: bool = False) -> None:
    """Print catalog size and a search-log summary."""
    try:
        summary = summarize_search_logs(db_path)
        summary["available_laptops"] = get_product_count(db_path)
        summary["total_laptops"] = get_product_count(db_path, available_only=False)
    except (sqlite3.Error, PandasDatabaseError) as e:
        raise CatalogUnavailableError(f"Failed to read catalog statistics: {e}") from e

    if as_json:
        print(json.dumps(summary, indent=2))
        return

    print(f"Laptops: {summary['available_laptops']} available / {summary['total_laptops']} total")
    print(f"Searches: {summary['total_searches']} "
          f"({summary['zero_result_searches']} with no results, "
          f"{summary['zero_result_rate']:.1%})")
    if summary["top_queries"]:
        print("\nTop queries:")
        for item in summary["top_queries"]:
            print(f"  {item['count']:>5}  {item['query']}")
    if summary["top_zero_result_queries"]:
        print("\nTop queries with no results:")
        for item in summary["top_zero_result_queries"]:
            print(f"  {item['count']:>5}  {item['query']}")


def show_recent_searches(db_path: str, limit: int, as_json: bool = False) -> None:
    entries = CatalogStore(db_path).recent_searches(limit)
    if as_json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return
    if not entries:
        print("No search data yet")
        return
    for entry in entries:
        print(f"{entry.created_at:%Y-%m-%d %H:%M:%S}  {entry.results_count:>4} results  {entry.query}")


def run_search(db_path: str, query: str, as_json: bool = False) -> int:
    """Search the catalog like the storefront does. Returns the result count."""
    # Imported here: the storefront depends on the catalog, not the reverse
    from storefront.search import handle_search

    response = handle_search(query, CatalogStore(db_path))
    if as_json:
        print(json.dumps(response.to_dict(), indent=2))
    else:
        print(f"{len(response.results)} results for {query!r}")
        for rank, laptop in enumerate(response.results, start=1):
            print(f"  {rank:>2}. {laptop.name} ({laptop.brand_name}) - {laptop.processor}")
    return len(response.results)


def setup_database(db_path: str, init: bool, seed: bool) -> None:
    """Create the schema and/or load the sample laptops."""
    try:
        if init:
            init_db(db_path)
            logger.info(f"Initialized database at {db_path}")
        if seed:
            seed_catalog(db_path)
    except sqlite3.Error as e:
        raise CatalogUnavailableError(f"Failed to set up database {db_path}: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_to_file=False)

    try:
        if args.init_db or args.seed:
            setup_database(args.db, args.init_db, args.seed)
        if args.stats:
            show_stats(args.db, args.json)
        if args.recent_searches is not None:
            show_recent_searches(args.db, args.recent_searches, args.json)
        if args.search is not None:
            run_search(args.db, args.search, args.json)
    except CatalogUnavailableError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
