"""Weight profiles for fuzzy product search.

A profile is plain data: which record fields are searched, how much each
one counts, and how strict the match must be. The matching engine never
branches on profile names, so a new profile (say, brand-only search) is
just another ``SearchProfile`` value.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from storefront.config import MIN_SUGGEST_QUERY_LENGTH, SEARCH_THRESHOLD, SUGGESTION_LIMIT

__all__ = [
    "WeightedField",
    "SearchProfile",
    "FULL_SEARCH_PROFILE",
    "SUGGESTION_PROFILE",
]


@dataclass(frozen=True)
class WeightedField:
    """A record field and its contribution to the combined relevance score."""

    key: str
    weight: float

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("WeightedField key must be a non-empty string")
        if not isinstance(self.weight, (int, float)) or not math.isfinite(self.weight) or self.weight <= 0:
            raise ValueError(f"WeightedField weight must be a positive number, got {self.weight!r}")


@dataclass(frozen=True)
class SearchProfile:
    """Named set of weighted fields plus matching parameters.

    Attributes:
        name: Profile identifier (for logs).
        fields: Weighted fields to search.
        threshold: Maximum accepted score (0 = exact, 1 = anything).
        min_match_length: Shortest matched span that counts as a match.
        limit: Maximum number of results, or None for all.
    """

    name: str
    fields: Tuple[WeightedField, ...]
    threshold: float = SEARCH_THRESHOLD
    min_match_length: int = 1
    limit: Optional[int] = None

    def __post_init__(self):
        fields = tuple(self.fields)
        object.__setattr__(self, "fields", fields)

        if not fields:
            raise ValueError(f"Profile {self.name!r} needs at least one field")
        keys = [f.key for f in fields]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Profile {self.name!r} has duplicate field keys: {keys}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"Profile {self.name!r} threshold must be within [0, 1]")
        if self.min_match_length < 1:
            raise ValueError(f"Profile {self.name!r} min_match_length must be >= 1")
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"Profile {self.name!r} limit must be >= 1 or None")

    @classmethod
    def from_weights(cls, name: str, weights: Sequence[Tuple[str, float]], **kwargs) -> "SearchProfile":
        """Build a profile from ``(key, weight)`` pairs."""
        return cls(name=name, fields=tuple(WeightedField(k, w) for k, w in weights), **kwargs)


FULL_SEARCH_PROFILE = SearchProfile.from_weights(
    "full_search",
    [("name", 2.0), ("brand_name", 1.5), ("processor", 1.0), ("description", 0.5)],
    threshold=SEARCH_THRESHOLD,
)

# Narrower for speed and precision while typing
SUGGESTION_PROFILE = SearchProfile.from_weights(
    "suggestion",
    [("name", 2.0), ("brand_name", 1.5)],
    threshold=SEARCH_THRESHOLD,
    min_match_length=MIN_SUGGEST_QUERY_LENGTH,
    limit=SUGGESTION_LIMIT,
)
