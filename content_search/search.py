"""Search engine module for site content."""
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from content_search.highlight import DEFAULT_HIGHLIGHT_TAG, highlight_text
from content_search.models import (
    Article,
    ContentSnapshot,
    NewsItem,
    Product,
    Rating,
    ResultType,
    SearchFilters,
    SearchResult,
)
from content_search.scoring import calculate_relevance

CONTENT_PREVIEW_CHARS = 500


class SearchEngine(Protocol):
    """Protocol for search engines to allow extensibility."""

    def search(
        self,
        query: str,
        snapshot: ContentSnapshot,
        filters: Optional[SearchFilters] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """Search all content types based on query.

        Args:
            query: Search query string
            snapshot: Content to search
            filters: Optional narrowing of the merged results
            limit: Maximum number of results to return

        Returns:
            List of matching results, sorted by relevance
        """
        ...


def _sort_by_relevance(results: List[SearchResult]) -> List[SearchResult]:
    # sorted() is stable, so ties keep encounter order
    return sorted(results, key=lambda r: r.relevance_score, reverse=True)


class KeywordSearchEngine:
    """Keyword search over products, articles, news and ratings.

    Each item is scored field by field with calculate_relevance and the
    field scores are summed. With use_field_weights=True every field score
    is multiplied by that field's weight before summing; the default keeps
    all fields on the same scale.
    """

    def __init__(self, use_field_weights: bool = False, highlight_tag: str = DEFAULT_HIGHLIGHT_TAG):
        self.use_field_weights = use_field_weights
        self.highlight_tag = highlight_tag

    def _score_fields(self, query: str, fields: Sequence[Tuple[str, float]]) -> float:
        """Sum field scores for one item.

        Args:
            query: Search query string
            fields: (text, weight) pairs

        Returns:
            Total score
        """
        total = 0
        for text, weight in fields:
            score = calculate_relevance(text, query, weight)
            if self.use_field_weights:
                score *= weight
            total += score
        return total

    def _highlight(self, text: str, query: str) -> str:
        return highlight_text(text, query, self.highlight_tag)

    def search_products(self, products: Sequence[Product], query: str) -> List[SearchResult]:
        """Search the product catalog.

        Scored fields: name, description, brand, tags, category.
        """
        if not query or not query.strip():
            return []

        results = []
        for product in products:
            total = self._score_fields(query, [
                (product.name, 3),
                (product.description, 2),
                (product.brand, 2.5),
                (" ".join(product.tags), 1.5),
                (product.category, 2),
            ])
            if total > 0:
                results.append(SearchResult(
                    id=product.id,
                    title=product.name,
                    excerpt=product.description,
                    type=ResultType.PRODUCT,
                    url=f"/catalog?product={product.id}",
                    category=product.category,
                    tags=list(product.tags),
                    relevance_score=total,
                    highlighted_text=self._highlight(product.description, query),
                    image=product.images[0] if product.images else None,
                    price=product.price,
                    rating=product.rating,
                    brand=product.brand or None,
                ))

        return _sort_by_relevance(results)

    def _search_editorial(
        self,
        items: Sequence,
        query: str,
        result_type: ResultType,
        url_prefix: str,
    ) -> List[SearchResult]:
        """Shared search for articles and news, which carry the same fields."""
        if not query or not query.strip():
            return []

        results = []
        for item in items:
            total = self._score_fields(query, [
                (item.title, 3),
                (item.excerpt, 2),
                (item.content[:CONTENT_PREVIEW_CHARS], 1),
                (" ".join(item.tags), 1.5),
                (item.category, 2),
            ])
            if total > 0:
                results.append(SearchResult(
                    id=item.id,
                    title=item.title,
                    excerpt=item.excerpt,
                    type=result_type,
                    url=f"{url_prefix}/{item.slug}",
                    category=item.category,
                    tags=list(item.tags),
                    relevance_score=total,
                    highlighted_text=self._highlight(item.excerpt, query),
                    image=item.featured_image,
                    published_at=item.published_at,
                ))

        return _sort_by_relevance(results)

    def search_articles(self, articles: Sequence[Article], query: str) -> List[SearchResult]:
        """Search articles by title, excerpt, body preview, tags and category."""
        return self._search_editorial(articles, query, ResultType.ARTICLE, "/articles")

    def search_news(self, news: Sequence[NewsItem], query: str) -> List[SearchResult]:
        """Search news by title, excerpt, body preview, tags and category."""
        return self._search_editorial(news, query, ResultType.NEWS, "/news")

    def search_ratings(self, ratings: Sequence[Rating], query: str) -> List[SearchResult]:
        """Search ratings by title, description and category."""
        if not query or not query.strip():
            return []

        results = []
        for rating in ratings:
            total = self._score_fields(query, [
                (rating.title, 3),
                (rating.description, 2),
                (rating.category, 2),
            ])
            if total > 0:
                results.append(SearchResult(
                    id=rating.id,
                    title=rating.title,
                    excerpt=rating.description,
                    type=ResultType.RATING,
                    url=f"/ratings/{rating.slug}",
                    category=rating.category,
                    tags=[],
                    relevance_score=total,
                    highlighted_text=self._highlight(rating.description, query),
                    image=rating.featured_image,
                    published_at=rating.published_at,
                ))

        return _sort_by_relevance(results)

    def search(
        self,
        query: str,
        snapshot: ContentSnapshot,
        filters: Optional[SearchFilters] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """Search every content type and merge the results.

        Args:
            query: Search query string
            snapshot: Content to search
            filters: Optional narrowing of the merged results
            limit: Maximum number of results to return (None = all)

        Returns:
            Merged results, sorted by relevance (highest score first)
        """
        if not query or not query.strip():
            return []

        searches: List[Tuple[ResultType, Callable[[], List[SearchResult]]]] = [
            (ResultType.PRODUCT, lambda: self.search_products(snapshot.products, query)),
            (ResultType.ARTICLE, lambda: self.search_articles(snapshot.articles, query)),
            (ResultType.NEWS, lambda: self.search_news(snapshot.news, query)),
            (ResultType.RATING, lambda: self.search_ratings(snapshot.ratings, query)),
        ]
        wanted = filters.type if filters else "all"

        merged: List[SearchResult] = []
        for result_type, run in searches:
            if wanted in ("all", result_type.value):
                merged.extend(run())

        if filters:
            merged = apply_filters(merged, filters)

        ranked = _sort_by_relevance(merged)
        return ranked[:limit] if limit is not None else ranked


def apply_filters(results: Sequence[SearchResult], filters: SearchFilters) -> List[SearchResult]:
    """Keep only results matching every set filter.

    Results lacking the field a filter needs (price, rating, date, brand)
    are dropped by that filter.
    """
    filtered = []
    for result in results:
        if filters.type not in ("all", result.type.value):
            continue
        if filters.category and result.category != filters.category:
            continue
        if filters.price_range is not None:
            low, high = filters.price_range
            if result.price is None or not low <= result.price <= high:
                continue
        if filters.min_rating is not None:
            if result.rating is None or result.rating < filters.min_rating:
                continue
        if filters.date_range is not None:
            start, end = filters.date_range
            if result.published_at is None or not start <= result.published_at <= end:
                continue
        if filters.brands and result.brand not in filters.brands:
            continue
        if filters.tags and not set(filters.tags) & set(result.tags):
            continue
        filtered.append(result)
    return filtered


def count_by_type(results: Sequence[SearchResult]) -> Dict[str, int]:
    """Count results per content type, in first-seen order."""
    counts: Dict[str, int] = {}
    for result in results:
        counts[result.type.value] = counts.get(result.type.value, 0) + 1
    return counts


# Module-level functions bound to an unweighted engine
_default_engine = KeywordSearchEngine()


def search_products(products: Sequence[Product], query: str) -> List[SearchResult]:
    return _default_engine.search_products(products, query)


def search_articles(articles: Sequence[Article], query: str) -> List[SearchResult]:
    return _default_engine.search_articles(articles, query)


def search_news(news: Sequence[NewsItem], query: str) -> List[SearchResult]:
    return _default_engine.search_news(news, query)


def search_ratings(ratings: Sequence[Rating], query: str) -> List[SearchResult]:
    return _default_engine.search_ratings(ratings, query)
