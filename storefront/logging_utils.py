"""Logging utilities for the storefront.

Provides structured JSONL logging for search events.
"""

import json
from datetime import datetime
from typing import Any, Dict

from storefront.config import LOG_DIR

__all__ = ["log_interaction", "LOG_DIR"]


def log_interaction(event_type: str, data: Dict[str, Any]) -> None:
    """Log a storefront event to a structured JSONL file.

    Args:
        event_type: Type of event (search_query, search_error, etc.)
        data: Event-specific data to log
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"search_events_{datetime.now().strftime('%Y%m%d')}.jsonl"
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **data}
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
