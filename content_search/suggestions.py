"""Autocomplete suggestions blending search history with catalog facts."""
from typing import List, Sequence

from content_search.models import (
    ContentSnapshot,
    SearchHistoryEntry,
    SearchSuggestion,
    SuggestionType,
    parse_timestamp,
)
from content_search.normalizer import normalize_text

DEFAULT_MAX_SUGGESTIONS = 8
MIN_QUERY_LENGTH = 2

HISTORY_LIMIT = 3
PRODUCT_LIMIT = 5
BRAND_LIMIT = 3
CATEGORY_LIMIT = 3


def _distinct(values: Sequence[str], limit: int) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
            if len(seen) == limit:
                break
    return seen


def generate_suggestions(
    query: str,
    snapshot: ContentSnapshot,
    history: Sequence[SearchHistoryEntry],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> List[SearchSuggestion]:
    """Build the autocomplete list for a partially typed query.

    Candidates are collected in priority order: past queries (newest
    first), products by name or brand, brands, then categories. The list
    is deduplicated case-insensitively on text, first occurrence winning,
    and cut to max_suggestions.

    Args:
        query: What the user has typed so far
        snapshot: Content snapshot; only products are consulted
        history: Past searches
        max_suggestions: Upper bound on the returned list

    Returns:
        Suggestions, empty when the trimmed query is shorter than 2 chars
    """
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    needle = normalize_text(query)
    suggestions: List[SearchSuggestion] = []

    matching_history = [h for h in history if needle in normalize_text(h.query)]
    # naive timestamps are read as UTC so they compare with loaded entries
    matching_history.sort(key=lambda h: parse_timestamp(h.timestamp), reverse=True)
    for entry in matching_history[:HISTORY_LIMIT]:
        suggestions.append(SearchSuggestion(
            id=f"history_{entry.id}",
            text=entry.query,
            type=SuggestionType.QUERY,
            count=entry.results_count,
        ))

    products = snapshot.products
    matching_products = [
        p for p in products
        if needle in normalize_text(p.name) or needle in normalize_text(p.brand)
    ]
    for product in matching_products[:PRODUCT_LIMIT]:
        suggestions.append(SearchSuggestion(
            id=f"product_{product.id}",
            text=product.name,
            type=SuggestionType.PRODUCT,
            category=product.category,
        ))

    brands = _distinct([p.brand for p in products if needle in normalize_text(p.brand)], BRAND_LIMIT)
    for brand in brands:
        suggestions.append(SearchSuggestion(id=f"brand_{brand}", text=brand, type=SuggestionType.BRAND))

    categories = _distinct(
        [p.category for p in products if needle in normalize_text(p.category)], CATEGORY_LIMIT
    )
    for category in categories:
        suggestions.append(SearchSuggestion(
            id=f"category_{category}", text=category, type=SuggestionType.CATEGORY
        ))

    unique: List[SearchSuggestion] = []
    seen_texts = set()
    for suggestion in suggestions:
        key = suggestion.text.lower()
        if key in seen_texts:
            continue
        seen_texts.add(key)
        unique.append(suggestion)

    return unique[:max_suggestions]
