"""Data models for catalog records and search analytics."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

__all__ = ["ProductRecord", "SearchLogEntry", "SuggestionItem"]


@dataclass
class ProductRecord:
    """A read-only snapshot entry for one available laptop.

    Snapshots are materialized per request; nothing here is cached or
    written back. Fields not selected by a narrow projection keep their
    defaults.
    """

    id: int
    name: str
    slug: str

    brand_name: Optional[str] = None
    processor: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    available: bool = True

    # Spec sheet (full projection only)
    ram: Optional[str] = None
    storage: Optional[str] = None
    graphics: Optional[str] = None
    display: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchLogEntry:
    """One committed full-text search."""

    query: str
    results_count: int
    created_at: datetime
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "query": self.query,
            "results_count": self.results_count,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class SuggestionItem:
    """Compact autocomplete projection of a matched product.

    Only ever lives in a response payload. ``score`` keeps the matcher's
    convention: 0 is a perfect match, 1 is no similarity.
    """

    id: int
    name: str
    slug: str
    image: Optional[str]
    price: Optional[float]
    brand_name: Optional[str]
    score: float

    @classmethod
    def from_match(cls, record: ProductRecord, score: float) -> "SuggestionItem":
        return cls(
            id=record.id,
            name=record.name,
            slug=record.slug,
            image=record.image,
            price=record.price,
            brand_name=record.brand_name,
            score=score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
