"""Weighted multi-field fuzzy matching over catalog snapshots.

Scores follow the lower-is-better convention: 0.0 is a perfect match and
1.0 means no similarity. Each configured field is scored on its own and a
record is returned when any field scores within the threshold. The fields
that match are combined using their weights to rank records best-first.

Matching is a linear scan over the snapshot. That is fine for a catalog of
a few thousand laptops; a larger catalog would need an n-gram index in
front of this, behind the same ``search`` signature.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from storefront.profiles import SearchProfile, WeightedField

__all__ = [
    "MatchResult",
    "Matcher",
    "field_score",
    "search",
    "search_with_profile",
]

logger = logging.getLogger(__name__)

# Stand-in for a perfect field score so the weighted product stays ordered
EPSILON = sys.float_info.epsilon

SCORE_PRECISION = 6


@dataclass(frozen=True)
class MatchResult:
    """A matched record and its combined score (0 = perfect, 1 = none)."""

    record: Any
    score: float


Matcher = Callable[[Sequence[Any], str, SearchProfile], List[MatchResult]]


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    return default_process(str(value))


def _field_value(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def field_score(query: str, text: str, min_match_length: int = 1) -> Optional[float]:
    """Score a normalized query against one normalized field value.

    The query may sit anywhere in the field. Typos, transpositions and
    reordered words lower the similarity instead of breaking the match.

    Returns:
        Score in [0, 1], or None when there is nothing to compare or the
        matched span is shorter than ``min_match_length``.
    """
    if not query or not text:
        return None

    if len(text) >= len(query):
        alignment = fuzz.partial_ratio_alignment(query, text)
        similarity = max(
            alignment.score if alignment else 0.0,
            fuzz.partial_token_sort_ratio(query, text),
        )
        span = (alignment.dest_end - alignment.dest_start) if alignment else 0
    else:
        # Field shorter than the query: unmatched query characters count as errors
        similarity = fuzz.ratio(query, text)
        span = len(text)

    if span < min_match_length:
        return None
    return 1.0 - similarity / 100.0


def search(
    records: Sequence[Any],
    query: str,
    weights: Sequence[WeightedField],
    threshold: float = 0.4,
    min_match_length: int = 1,
) -> List[MatchResult]:
    """Rank records against a query over weighted fields.

    Args:
        records: Catalog snapshot (dataclasses or mappings).
        query: Raw user query; normalization happens here.
        weights: Fields to search and their weights.
        threshold: Maximum accepted score for a field to count as a match.
        min_match_length: Shortest matched span that counts.

    Returns:
        Matches ordered by ascending score; ties keep catalog order.
    """
    if not weights:
        raise ValueError("search() needs at least one weighted field")

    normalized_query = _normalize(query)
    if not normalized_query:
        return []

    max_weight = max(f.weight for f in weights)
    scored = []

    for index, record in enumerate(records):
        combined = 1.0
        matched = False

        for field in weights:
            score = field_score(
                normalized_query,
                _normalize(_field_value(record, field.key)),
                min_match_length,
            )
            if score is None or score > threshold:
                continue
            matched = True
            # The heaviest field keeps its raw score; lighter fields alone rank lower
            combined *= max(score, EPSILON) ** (field.weight / max_weight)

        # Admission is per field; the weighted product only orders the results
        if matched:
            scored.append((combined, index, record))

    scored.sort(key=lambda item: (item[0], item[1]))
    logger.debug(f"Fuzzy search {query!r}: {len(scored)}/{len(records)} records matched")

    return [
        MatchResult(record=record, score=round(score, SCORE_PRECISION))
        for score, _, record in scored
    ]


def search_with_profile(records: Sequence[Any], query: str, profile: SearchProfile) -> List[MatchResult]:
    """Run ``search`` with a profile's fields and parameters, then apply its limit."""
    matches = search(
        records,
        query,
        profile.fields,
        threshold=profile.threshold,
        min_match_length=profile.min_match_length,
    )
    if profile.limit is not None:
        matches = matches[: profile.limit]
    return matches
