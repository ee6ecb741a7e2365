"""Relevance scoring of a text field against a query."""
from typing import Optional

from content_search.normalizer import normalize_text, query_words

CONTAINS_SCORE = 10
OCCURRENCE_SCORE = 5
PREFIX_SCORE = 15


def calculate_relevance(
    text: Optional[str],
    query: Optional[str],
    title_weight: float = 3,
    description_weight: float = 2,
    tags_weight: float = 1.5,
) -> float:
    """Score how well a text field matches a query.

    For each query word (length > 1): +10 if the normalized text contains
    it, +5 for every occurrence after the first, +15 if the text starts
    with it.

    The weight arguments are accepted for call-site compatibility but do
    not affect the score. Weighted ranking is opt-in on the engine, see
    KeywordSearchEngine(use_field_weights=True).

    Args:
        text: Field text
        query: Raw query
        title_weight: Unused
        description_weight: Unused
        tags_weight: Unused

    Returns:
        Non-negative score, 0 for an empty query or no match
    """
    words = query_words(query)
    if not words:
        return 0

    normalized_text = normalize_text(text)
    score = 0
    for word in words:
        # Words are [а-яa-z0-9] only, so a plain substring count equals a
        # non-overlapping global regex match.
        occurrences = normalized_text.count(word)
        if occurrences:
            score += CONTAINS_SCORE
            score += (occurrences - 1) * OCCURRENCE_SCORE
        if normalized_text.startswith(word):
            score += PREFIX_SCORE
    return score
