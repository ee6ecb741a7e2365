"""Text normalization shared by scoring, highlighting and suggestions."""
import re
from typing import List, Optional

_LETTER_FOLDS = str.maketrans({"ё": "е", "й": "и"})
_NON_WORD = re.compile(r"[^а-яa-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Canonicalize text for comparison.

    Lowercases, folds ё/й to е/и, replaces anything that is not a
    Cyrillic/Latin letter, digit or whitespace with a space, then
    collapses whitespace and trims.

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Normalized text
    """
    if not text:
        return ""
    normalized = text.lower().translate(_LETTER_FOLDS)
    normalized = _NON_WORD.sub(" ", normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


def query_words(query: Optional[str]) -> List[str]:
    """Split a query into normalized words longer than one character."""
    return [word for word in normalize_text(query).split(" ") if len(word) > 1]
