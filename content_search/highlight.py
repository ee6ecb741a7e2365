"""Highlighting of query terms inside result excerpts."""
import re
from typing import Optional

from content_search.normalizer import query_words

DEFAULT_HIGHLIGHT_TAG = "mark"


def highlight_text(text: str, query: Optional[str], tag: str = DEFAULT_HIGHLIGHT_TAG) -> str:
    """Wrap every case-insensitive occurrence of each query word in a tag.

    Words come from the normalized query and are matched against the
    original text. Each word is a separate substitution pass over the
    output of the previous one, so overlapping terms may nest.

    Args:
        text: Original (non-normalized) text
        query: Raw query
        tag: Element name used for the marker (default: mark)

    Returns:
        Text with matches wrapped as <tag>...</tag>
    """
    if not text or not query or not query.strip():
        return text

    highlighted = text
    for word in query_words(query):
        pattern = re.compile(f"({re.escape(word)})", re.IGNORECASE)
        highlighted = pattern.sub(rf"<{tag}>\1</{tag}>", highlighted)
    return highlighted
