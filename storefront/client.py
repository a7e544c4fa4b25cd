"""HTTP client for the search and suggestion endpoints.

Used by the autocomplete controller (suggestions, failing soft) and by the
search results view (full search, failing visibly).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from storefront.config import CLIENT_TIMEOUT

__all__ = ["CatalogClientError", "SuggestionClient", "SearchResultsView"]

logger = logging.getLogger(__name__)


class CatalogClientError(Exception):
    """Raised when an endpoint cannot be reached or returns bad data."""


class SuggestionClient:
    """Thin ``requests`` wrapper around ``/suggest`` and ``/search``."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = CLIENT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_json(self, path: str, query: str) -> Dict[str, Any]:
        # requests URL-encodes params
        try:
            response = self.session.get(
                f"{self.base_url}{path}",
                params={"q": query},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise CatalogClientError(f"GET {path} failed: {e}") from e

        if not isinstance(data, dict):
            raise CatalogClientError(f"GET {path} returned {type(data).__name__}, expected object")
        return data

    def fetch(self, query: str) -> List[Dict[str, Any]]:
        """Fetch ranked suggestions for a partial query."""
        return self._get_json("/suggest", query).get("suggestions") or []

    async def fetch_async(self, query: str) -> List[Dict[str, Any]]:
        """``fetch`` on a worker thread, for use as the controller's fetcher."""
        return await asyncio.to_thread(self.fetch, query)

    def search(self, query: str) -> Dict[str, Any]:
        """Run a full search; returns the raw ``{"results", "query"}`` payload."""
        return self._get_json("/search", query)


class SearchResultsView:
    """State of the full search results page.

    Unlike autocomplete, a failed search is the user's primary action
    failing, so it is kept as a visible ``error`` that ``retry()`` clears.
    """

    ERROR_MESSAGE = "Something went wrong while searching. Please try again."

    def __init__(self, client: SuggestionClient, query: str):
        self.client = client
        self.query = query
        self.results: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None

    def load(self) -> "SearchResultsView":
        if not self.query:
            self.results = []
            return self

        self.loading = True
        self.error = None
        try:
            data = self.client.search(self.query)
        except CatalogClientError:
            logger.warning(f"Search for {self.query!r} failed", exc_info=True)
            self.results = []
            self.error = self.ERROR_MESSAGE
        else:
            self.results = data.get("results") or []
        finally:
            self.loading = False
        return self

    def retry(self) -> "SearchResultsView":
        return self.load()
