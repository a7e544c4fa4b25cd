"""Flask app serving laptop search and autocomplete suggestions."""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

# Load environment variables from .env file before reading configuration
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

from catalog.db import CatalogStore  # noqa: E402
from catalog.logging_config import setup_logging  # noqa: E402
from storefront.api import api  # noqa: E402
from storefront.config import DB_PATH, FLASK_DEBUG, FLASK_HOST, FLASK_PORT  # noqa: E402
from storefront.error_logging import ErrorLogger  # noqa: E402

__all__ = ["app", "create_app"]


def create_app(
    db_path: Optional[str] = None,
    store=None,
    error_logger: Optional[ErrorLogger] = None,
) -> Flask:
    """Build the storefront app.

    Args:
        db_path: SQLite database (default: DB_PATH).
        store: Catalog store to use instead of one bound to ``db_path``.
        error_logger: Error sink (default: error_log table in ``db_path``).
    """
    db_path = db_path or DB_PATH

    flask_app = Flask(__name__)
    flask_app.config["CATALOG_STORE"] = store if store is not None else CatalogStore(db_path)
    flask_app.config["ERROR_LOGGER"] = error_logger or ErrorLogger(db_path)
    flask_app.register_blueprint(api)
    return flask_app


app = create_app()


if __name__ == "__main__":
    setup_logging(level=logging.DEBUG if FLASK_DEBUG else logging.INFO)
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
