"""Error logging with database persistence.

Stores storefront errors in the catalog's SQLite database so failed
searches can be reviewed after the fact, next to the search log.

Error types captured:
- database_error: catalog read or search-log write failures
- unexpected_error: anything else that reached a request handler
"""

import json
import logging
import sqlite3
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from storefront.config import DB_PATH

__all__ = ["ErrorLogger"]

logger = logging.getLogger(__name__)


class ErrorLogger:
    """Log errors to SQLite for persistent storage.

    The table is created on first write. Failures to record an error are
    reported through ``logging`` and never raised to the request handler.
    """

    def __init__(self, db_path: Optional[Union[Path, str]] = None):
        self.db_path = db_path or DB_PATH
        self._table_ready = False

    def _get_connection(self) -> sqlite3.Connection:
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path), timeout=10)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_table_exists(self, conn: sqlite3.Connection) -> None:
        if self._table_ready:
            return
        conn.execute("""
            CREATE TABLE IF NOT EXISTS error_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                error_type TEXT NOT NULL,
                error_message TEXT NOT NULL,
                stack_trace TEXT,
                operation TEXT,
                user_input TEXT,
                context JSON
            )
        """)
        conn.execute("CREATE INDEX IF NOT EXISTS idx_error_timestamp ON error_log(timestamp)")
        self._table_ready = True

    def log_error(
        self,
        error_type: str,
        error: Union[BaseException, str],
        operation: Optional[str] = None,
        user_input: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log error to database."""
        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
            stack_trace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        else:
            message = error
            stack_trace = None

        try:
            conn = self._get_connection()
            try:
                self._ensure_table_exists(conn)
                conn.execute(
                    """
                    INSERT INTO error_log (
                        timestamp, error_type, error_message, stack_trace,
                        operation, user_input, context
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        datetime.now().isoformat(),
                        error_type,
                        message,
                        stack_trace,
                        operation,
                        user_input,
                        json.dumps(context) if context else None,
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to log {error_type} to database: {e}")

    def get_errors(self, error_type: Optional[str] = None, limit: int = 100) -> List[Dict[str, Any]]:
        """Query errors from database, newest first."""
        query = "SELECT * FROM error_log WHERE 1=1"
        params: List[Any] = []

        if error_type:
            query += " AND error_type = ?"
            params.append(error_type)

        query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
        params.append(limit)

        try:
            conn = self._get_connection()
            try:
                self._ensure_table_exists(conn)
                rows = conn.execute(query, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to query errors: {e}")
            return []

        errors = []
        for row in rows:
            error = dict(row)
            if error.get("context"):
                error["context"] = json.loads(error["context"])
            errors.append(error)
        return errors
