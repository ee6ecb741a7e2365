"""Shared fixtures for tests."""
import json
import pytest
from datetime import datetime, timezone

from content_search.models import (
    Article,
    ContentSnapshot,
    NewsItem,
    Product,
    Rating,
)
from content_search.storage import MemoryStorage


SAMPLE_CATALOG = {
    "products": [
        {
            "id": "p1",
            "name": "Умная розетка Xiaomi",
            "description": "Розетка с голосовым управлением и таймером",
            "brand": "Xiaomi",
            "category": "sockets",
            "tags": ["розетка", "wi-fi"],
            "price": 1290,
            "rating": 4.7,
            "images": [{"url": "/img/p1.jpg"}],
        },
        {
            "id": "p2",
            "name": "Датчик движения Aqara",
            "description": "Беспроводной датчик для сценариев освещения",
            "brand": "Aqara",
            "category": "sensors",
            "tags": ["zigbee"],
            "price": 990,
            "rating": 4.5,
            "images": ["/img/p2.jpg"],
        },
        {
            "id": "p3",
            "name": "Лампа Yeelight",
            "description": "Умная лампа с регулировкой яркости",
            "brand": "Xiaomi",
            "category": "lighting",
            "tags": [],
            "price": 1590,
        },
    ],
    "articles": [
        {
            "id": "a1",
            "title": "Как выбрать умную розетку",
            "slug": "kak-vybrat-rozetku",
            "excerpt": "Гид по выбору розетки для дома",
            "content": "Розетка бывает разной. " * 10,
            "tags": [{"name": "гайд"}],
            "category": {"name": "Гайды"},
            "featuredImage": "/img/a1.jpg",
            "publishedAt": "2024-03-01T10:00:00Z",
        }
    ],
    "news": [
        {
            "id": "n1",
            "title": "Xiaomi представила новый хаб",
            "slug": "xiaomi-hub",
            "excerpt": "Хаб управляет освещением",
            "content": "Новый хаб.",
            "tags": ["xiaomi"],
            "category": "Новости",
            "publishedAt": "2024-05-10T08:30:00+00:00",
        }
    ],
    "ratings": [
        {
            "id": "r1",
            "title": "Лучшие розетки 2024",
            "slug": "best-sockets",
            "description": "Рейтинг умных розеток",
            "category": "sockets",
            "publishedAt": "2024-02-01T00:00:00Z",
        }
    ],
}


@pytest.fixture
def sample_catalog_path(tmp_path):
    """Create a temporary catalog file with sample data."""
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(json.dumps(SAMPLE_CATALOG, ensure_ascii=False), encoding="utf-8")
    return catalog_file


@pytest.fixture
def products():
    return [
        Product(
            id="p1",
            name="Умная розетка Xiaomi",
            description="Розетка с голосовым управлением и таймером",
            brand="Xiaomi",
            category="sockets",
            tags=["розетка", "wi-fi"],
            price=1290,
            rating=4.7,
            images=["/img/p1.jpg"],
        ),
        Product(
            id="p2",
            name="Датчик движения Aqara",
            description="Беспроводной датчик для сценариев освещения",
            brand="Aqara",
            category="sensors",
            tags=["zigbee"],
            price=990,
            rating=4.5,
            images=["/img/p2.jpg"],
        ),
        Product(
            id="p3",
            name="Лампа Yeelight",
            description="Умная лампа с регулировкой яркости",
            brand="Xiaomi",
            category="lighting",
            price=1590,
        ),
    ]


@pytest.fixture
def snapshot(products):
    """Return a content snapshot covering every content type."""
    return ContentSnapshot(
        products=products,
        articles=[
            Article(
                id="a1",
                title="Как выбрать умную розетку",
                slug="kak-vybrat-rozetku",
                excerpt="Гид по выбору розетки для дома",
                content="Розетка бывает разной. " * 10,
                tags=["гайд"],
                category="Гайды",
                featured_image="/img/a1.jpg",
                published_at=datetime(2024, 3, 1, 10, tzinfo=timezone.utc),
            )
        ],
        news=[
            NewsItem(
                id="n1",
                title="Xiaomi представила новый хаб",
                slug="xiaomi-hub",
                excerpt="Хаб управляет освещением",
                content="Новый хаб.",
                tags=["xiaomi"],
                category="Новости",
                published_at=datetime(2024, 5, 10, 8, 30, tzinfo=timezone.utc),
            )
        ],
        ratings=[
            Rating(
                id="r1",
                title="Лучшие розетки 2024",
                slug="best-sockets",
                description="Рейтинг умных розеток",
                category="sockets",
                published_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
            )
        ],
    )


@pytest.fixture
def memory_storage():
    return MemoryStorage()
