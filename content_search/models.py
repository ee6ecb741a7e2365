"""Data model for content search: results, suggestions, history and content records."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ResultType(str, Enum):
    """Content type discriminator for search results."""
    PRODUCT = "product"
    ARTICLE = "article"
    NEWS = "news"
    RATING = "rating"


class SuggestionType(str, Enum):
    QUERY = "query"
    PRODUCT = "product"
    BRAND = "brand"
    CATEGORY = "category"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into a timezone-aware datetime.

    Args:
        value: ISO string (a trailing 'Z' is accepted), datetime, or None

    Returns:
        Aware datetime (naive values are read as UTC), or None for empty input

    Raises:
        ValueError: If the string is not a valid ISO timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ============================================================================
# Content records (read-only inputs)
# ============================================================================

@dataclass
class Product:
    id: str
    name: str = ""
    description: str = ""
    brand: str = ""
    category: str = ""
    tags: List[str] = field(default_factory=list)
    price: Optional[float] = None
    rating: Optional[float] = None
    images: List[str] = field(default_factory=list)


@dataclass
class Article:
    id: str
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    tags: List[str] = field(default_factory=list)
    category: str = ""
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None


@dataclass
class NewsItem:
    id: str
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    tags: List[str] = field(default_factory=list)
    category: str = ""
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None


@dataclass
class Rating:
    id: str
    title: str = ""
    slug: str = ""
    description: str = ""
    category: str = ""
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None


@dataclass
class ContentSnapshot:
    """All searchable content at a point in time."""
    products: List[Product] = field(default_factory=list)
    articles: List[Article] = field(default_factory=list)
    news: List[NewsItem] = field(default_factory=list)
    ratings: List[Rating] = field(default_factory=list)


# ============================================================================
# Search outputs
# ============================================================================

@dataclass
class SearchResult:
    """One ranked hit, for any content type."""
    id: str
    title: str
    excerpt: str
    type: ResultType
    url: str
    category: str
    tags: List[str]
    relevance_score: float
    highlighted_text: str
    image: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None
    published_at: Optional[datetime] = None
    brand: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape consumed by result renderers.

        Unset optional fields are omitted.
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "type": self.type.value,
            "url": self.url,
            "category": self.category,
            "tags": list(self.tags),
            "relevanceScore": self.relevance_score,
            "highlightedText": self.highlighted_text,
        }
        if self.image is not None:
            data["image"] = self.image
        if self.price is not None:
            data["price"] = self.price
        if self.rating is not None:
            data["rating"] = self.rating
        if self.published_at is not None:
            data["publishedAt"] = self.published_at.isoformat()
        if self.brand is not None:
            data["brand"] = self.brand
        return data


@dataclass
class SearchSuggestion:
    id: str
    text: str
    type: SuggestionType
    category: Optional[str] = None
    count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "text": self.text, "type": self.type.value}
        if self.category is not None:
            data["category"] = self.category
        if self.count is not None:
            data["count"] = self.count
        return data


@dataclass
class SearchFilters:
    """Optional narrowing applied to a unified search.

    type is "all" or a ResultType value; ranges are inclusive.
    """
    type: str = "all"
    category: Optional[str] = None
    price_range: Optional[Tuple[float, float]] = None
    min_rating: Optional[float] = None
    date_range: Optional[Tuple[datetime, datetime]] = None
    brands: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


# ============================================================================
# History
# ============================================================================

@dataclass
class SearchHistoryEntry:
    """One past search. Only clicked_results may grow after creation."""
    id: str
    query: str
    timestamp: datetime
    results_count: int
    clicked_results: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted record shape."""
        return {
            "id": self.id,
            "query": self.query,
            "timestamp": self.timestamp.isoformat(),
            "resultsCount": self.results_count,
            "clickedResults": list(self.clicked_results),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchHistoryEntry":
        """Rehydrate a persisted record.

        Raises:
            KeyError: If a required key is missing
            ValueError: If the timestamp cannot be parsed
        """
        timestamp = parse_timestamp(data["timestamp"])
        if timestamp is None:
            raise ValueError("History entry has an empty timestamp")
        return cls(
            id=str(data["id"]),
            query=str(data["query"]),
            timestamp=timestamp,
            results_count=int(data.get("resultsCount") or 0),
            clicked_results=[str(r) for r in data.get("clickedResults") or []],
        )


@dataclass
class PopularSearch:
    query: str
    count: int
    trend: str = "stable"  # up | down | stable

    def to_dict(self) -> Dict[str, Any]:
        return {"query": self.query, "count": self.count, "trend": self.trend}


@dataclass
class SearchAnalytics:
    total_searches: int = 0
    unique_queries: int = 0
    average_results_per_query: float = 0.0
    top_queries: List[PopularSearch] = field(default_factory=list)
    no_results_queries: List[str] = field(default_factory=list)
    click_through_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSearches": self.total_searches,
            "uniqueQueries": self.unique_queries,
            "averageResultsPerQuery": self.average_results_per_query,
            "topQueries": [p.to_dict() for p in self.top_queries],
            "noResultsQueries": list(self.no_results_queries),
            "clickThroughRate": self.click_through_rate,
        }
