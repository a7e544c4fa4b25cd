"""Per-request timing for the search flow.

Example:
    tracker = TimingTracker()
    with tracker.measure("catalog_snapshot"):
        records = store.list_available_products()

    log_interaction("search_query", {"timings": tracker.get_all()})
"""

import time
from contextlib import contextmanager
from typing import Any, Dict

__all__ = ["TimingTracker"]


class TimingTracker:
    """Track timing for multiple operations within a request."""

    def __init__(self):
        self.timings: Dict[str, float] = {}

    @contextmanager
    def measure(self, operation: str):
        """Context manager for timing an operation."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.timings[operation] = self.timings.get(operation, 0.0) + duration

    def get_all(self) -> Dict[str, Any]:
        """Get all timings in milliseconds, cleaned up for JSON serialization."""
        result: Dict[str, Any] = {
            op: round(seconds * 1000, 2) for op, seconds in self.timings.items()
        }
        result["total_ms"] = round(sum(self.timings.values()) * 1000, 2)
        return result
