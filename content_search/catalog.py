"""Content catalog reader: loads a JSON content snapshot."""
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from content_search.models import (
    Article,
    ContentSnapshot,
    NewsItem,
    Product,
    Rating,
    parse_timestamp,
)


def get_default_catalog_path() -> Path:
    """Get the path to the content catalog file.

    Returns:
        CONTENT_SEARCH_CATALOG if set, else ~/.content-search/catalog.json
    """
    env_path = os.environ.get("CONTENT_SEARCH_CATALOG")
    if env_path:
        return Path(env_path)
    return Path.home() / ".content-search" / "catalog.json"


def load_catalog_file(catalog_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the catalog JSON file.

    Args:
        catalog_path: Optional path to catalog file. If None, uses the default location.

    Returns:
        Parsed JSON catalog data

    Raises:
        FileNotFoundError: If catalog file doesn't exist
        json.JSONDecodeError: If catalog file is malformed
    """
    if catalog_path is None:
        catalog_path = get_default_catalog_path()

    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found at {catalog_path}")

    with open(catalog_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _text(record: Dict[str, Any], *keys: str) -> str:
    """First non-empty value among keys, as a string ("" if none)."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            if isinstance(value, dict):
                # e.g. {"name": "Guides"} for an article category
                return str(value.get("name") or "")
            return str(value)
    return ""


def _names(values: Any, attr: str = "name") -> List[str]:
    """Coerce a list of strings or {attr: ...} objects into strings."""
    names = []
    for value in values or []:
        if isinstance(value, dict):
            value = value.get(attr)
        if value:
            names.append(str(value))
    return names


def _number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _timestamp(record: Dict[str, Any]) -> Optional[datetime]:
    try:
        return parse_timestamp(record.get("publishedAt") or record.get("published_at"))
    except ValueError:
        return None


def parse_product(record: Dict[str, Any]) -> Product:
    images = _names(record.get("images"), "url")
    if not images and record.get("image"):
        images = [str(record["image"])]
    return Product(
        id=_text(record, "id"),
        name=_text(record, "name"),
        description=_text(record, "description"),
        brand=_text(record, "brand"),
        category=_text(record, "category"),
        tags=_names(record.get("tags")),
        price=_number(record.get("price")),
        rating=_number(record.get("rating")),
        images=images,
    )


def parse_article(record: Dict[str, Any]) -> Article:
    return Article(
        id=_text(record, "id"),
        title=_text(record, "title"),
        slug=_text(record, "slug"),
        excerpt=_text(record, "excerpt"),
        content=_text(record, "content"),
        tags=_names(record.get("tags")),
        category=_text(record, "category"),
        featured_image=_text(record, "featuredImage", "featured_image") or None,
        published_at=_timestamp(record),
    )


def parse_news_item(record: Dict[str, Any]) -> NewsItem:
    return NewsItem(
        id=_text(record, "id"),
        title=_text(record, "title"),
        slug=_text(record, "slug"),
        excerpt=_text(record, "excerpt"),
        content=_text(record, "content"),
        tags=_names(record.get("tags")),
        category=_text(record, "category"),
        featured_image=_text(record, "featuredImage", "featured_image") or None,
        published_at=_timestamp(record),
    )


def parse_rating(record: Dict[str, Any]) -> Rating:
    return Rating(
        id=_text(record, "id"),
        title=_text(record, "title"),
        slug=_text(record, "slug"),
        description=_text(record, "description"),
        category=_text(record, "category"),
        featured_image=_text(record, "featuredImage", "featured_image") or None,
        published_at=_timestamp(record),
    )


def snapshot_from_dict(data: Dict[str, Any]) -> ContentSnapshot:
    """Build a content snapshot from parsed catalog data.

    Non-object records are skipped; missing fields become empty values.

    Raises:
        ValueError: If data is not a JSON object
    """
    if not isinstance(data, dict):
        raise ValueError("Catalog must be a JSON object")

    def records(key: str) -> List[Dict[str, Any]]:
        return [r for r in data.get(key) or [] if isinstance(r, dict)]

    return ContentSnapshot(
        products=[parse_product(r) for r in records("products")],
        articles=[parse_article(r) for r in records("articles")],
        news=[parse_news_item(r) for r in records("news")],
        ratings=[parse_rating(r) for r in records("ratings")],
    )


def load_catalog(catalog_path: Optional[Path] = None) -> ContentSnapshot:
    """Read the content snapshot from the catalog file.

    Args:
        catalog_path: Optional path to catalog file. If None, uses the default location.

    Returns:
        ContentSnapshot with products, articles, news and ratings

    Raises:
        FileNotFoundError: If catalog file doesn't exist
        json.JSONDecodeError: If catalog file is malformed
    """
    return snapshot_from_dict(load_catalog_file(catalog_path))
