"""Search and suggestion orchestration.

Both handlers take a catalog store (anything with the ``CatalogStore``
read/write methods) and a matcher, so they can run against SQLite, an
in-memory fake, or a future indexed matcher without change.

Full searches are logged to the search log, suggestions never are: a
suggestion request fires on nearly every keystroke and would bury the
committed searches the analytics care about.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from catalog.models import ProductRecord, SuggestionItem
from storefront.config import MIN_SUGGEST_QUERY_LENGTH
from storefront.fuzzy import Matcher, search_with_profile
from storefront.logging_utils import log_interaction
from storefront.profiles import FULL_SEARCH_PROFILE, SUGGESTION_PROFILE, SearchProfile
from storefront.timing import TimingTracker

__all__ = [
    "SearchResponse",
    "SuggestResponse",
    "handle_search",
    "handle_suggest",
]

logger = logging.getLogger(__name__)


@dataclass
class SearchResponse:
    """Result of a full-text search. ``query`` is None when none was given."""

    results: List[ProductRecord] = field(default_factory=list)
    query: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"results": [r.to_dict() for r in self.results]}
        if self.query is not None:
            payload["query"] = self.query
        return payload


@dataclass
class SuggestResponse:
    """Ranked autocomplete suggestions, best first."""

    suggestions: List[SuggestionItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"suggestions": [s.to_dict() for s in self.suggestions]}


def handle_search(
    query: Optional[str],
    store,
    profile: SearchProfile = FULL_SEARCH_PROFILE,
    matcher: Matcher = search_with_profile,
) -> SearchResponse:
    """Run a committed full-text search.

    A missing or empty query returns no results without touching the
    catalog or the search log. Any other query is logged exactly once,
    including when nothing matches.

    Raises:
        CatalogUnavailableError: If the catalog read or log write fails.
    """
    if not query:
        return SearchResponse()

    tracker = TimingTracker()

    with tracker.measure("catalog_snapshot"):
        records = store.list_available_products()

    with tracker.measure("fuzzy_match"):
        matches = matcher(records, query, profile)

    results = [match.record for match in matches]

    with tracker.measure("search_log_write"):
        store.append_search_log(query, len(results))

    log_interaction(
        "search_query",
        {
            "query": query,
            "profile": profile.name,
            "results_count": len(results),
            "catalog_size": len(records),
            "timings": tracker.get_all(),
        },
    )
    logger.info(f"Search {query!r}: {len(results)} of {len(records)} laptops")

    return SearchResponse(results=results, query=query)


def handle_suggest(
    query: Optional[str],
    store,
    profile: SearchProfile = SUGGESTION_PROFILE,
    matcher: Matcher = search_with_profile,
    min_query_length: int = MIN_SUGGEST_QUERY_LENGTH,
) -> SuggestResponse:
    """Rank autocomplete suggestions for a partial query.

    Queries shorter than ``min_query_length`` after trimming return an
    empty list without reading the catalog.

    Raises:
        CatalogUnavailableError: If the catalog read fails.
    """
    if not query or len(query.strip()) < min_query_length:
        return SuggestResponse()

    records = store.list_available_suggestions()
    matches = matcher(records, query, profile)

    suggestions = [SuggestionItem.from_match(m.record, m.score) for m in matches]
    logger.debug(f"Suggest {query!r}: {len(suggestions)} suggestions")

    return SuggestResponse(suggestions=suggestions)
