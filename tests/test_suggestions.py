"""Tests for suggestions module."""
import pytest
from datetime import datetime, timedelta, timezone

from content_search.models import ContentSnapshot, Product, SearchHistoryEntry, SuggestionType
from content_search.suggestions import generate_suggestions


BASE_TIME = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)


def make_history(*queries):
    """Build history entries, later arguments being more recent."""
    return [
        SearchHistoryEntry(
            id=f"h{i}",
            query=query,
            timestamp=BASE_TIME + timedelta(minutes=i),
            results_count=i + 1,
        )
        for i, query in enumerate(queries)
    ]


class TestGenerateSuggestions:
    def test_short_query_returns_empty(self, snapshot):
        assert generate_suggestions("x", snapshot, []) == []
        assert generate_suggestions("  x  ", snapshot, []) == []
        assert generate_suggestions("", snapshot, []) == []

    def test_products_then_brands(self, snapshot):
        suggestions = generate_suggestions("xiaomi", snapshot, [])
        assert [s.text for s in suggestions] == ["Умная розетка Xiaomi", "Лампа Yeelight", "Xiaomi"]
        assert [s.type for s in suggestions] == [
            SuggestionType.PRODUCT, SuggestionType.PRODUCT, SuggestionType.BRAND,
        ]
        assert suggestions[0].id == "product_p1"
        assert suggestions[0].category == "sockets"
        assert suggestions[2].id == "brand_Xiaomi"

    def test_history_first_newest_first(self, snapshot):
        history = make_history("xiaomi розетка", "датчик", "Xiaomi")
        suggestions = generate_suggestions("xiaomi", snapshot, history)
        assert [s.text for s in suggestions] == [
            "Xiaomi", "xiaomi розетка", "Умная розетка Xiaomi", "Лампа Yeelight",
        ]
        assert suggestions[0].type is SuggestionType.QUERY
        assert suggestions[0].id == "history_h2"
        assert suggestions[0].count == 3

    def test_history_capped_at_three(self):
        history = make_history(*[f"розетка {i}" for i in range(5)])
        suggestions = generate_suggestions("розетка", ContentSnapshot(), history)
        assert [s.text for s in suggestions] == ["розетка 4", "розетка 3", "розетка 2"]

    def test_products_capped_at_five(self):
        products = [Product(id=str(i), name=f"Розетка {i}", brand="Acme", category="sockets") for i in range(7)]
        suggestions = generate_suggestions("розетка", ContentSnapshot(products=products), [])
        assert len(suggestions) == 5
        assert all(s.type is SuggestionType.PRODUCT for s in suggestions)

    def test_category_matches(self, snapshot):
        suggestions = generate_suggestions("sens", snapshot, [])
        assert len(suggestions) == 1
        assert suggestions[0].type is SuggestionType.CATEGORY
        assert suggestions[0].text == "sensors"
        assert suggestions[0].id == "category_sensors"

    def test_distinct_brands(self):
        products = [Product(id=str(i), name=f"Model {i}", brand=f"Brand{i % 2}") for i in range(6)]
        suggestions = generate_suggestions("brand", ContentSnapshot(products=products), [])
        brands = [s.text for s in suggestions if s.type is SuggestionType.BRAND]
        assert brands == ["Brand0", "Brand1"]

    def test_letter_variants_match(self):
        products = [Product(id="1", name="Ёлочная гирлянда")]
        suggestions = generate_suggestions("елочная", ContentSnapshot(products=products), [])
        assert [s.text for s in suggestions] == ["Ёлочная гирлянда"]

    @pytest.mark.parametrize("max_suggestions", [1, 2, 8])
    def test_respects_max(self, snapshot, max_suggestions):
        history = make_history("xiaomi 1", "xiaomi 2", "xiaomi 3")
        suggestions = generate_suggestions("xiaomi", snapshot, history, max_suggestions=max_suggestions)
        assert len(suggestions) <= max_suggestions

    def test_texts_unique_case_insensitive(self):
        products = [
            Product(id="1", name="SMART plug", brand="smart plug", category="Smart Plug"),
            Product(id="2", name="Smart Plug", brand="Smart", category="smart"),
        ]
        history = make_history("smart plug")
        suggestions = generate_suggestions("smart", ContentSnapshot(products=products), history)
        texts = [s.text.lower() for s in suggestions]
        assert len(texts) == len(set(texts))
        assert len(suggestions) <= 8
        # history wins over the equal product names
        assert suggestions[0].type is SuggestionType.QUERY

    def test_naive_and_aware_timestamps_mix(self):
        history = make_history("розетка старая")
        history.append(SearchHistoryEntry(
            id="naive",
            query="розетка новая",
            timestamp=datetime(2024, 6, 2, 12),
            results_count=1,
        ))
        suggestions = generate_suggestions("розетка", ContentSnapshot(), history)
        assert [s.text for s in suggestions] == ["розетка новая", "розетка старая"]

    def test_to_dict(self, snapshot):
        data = generate_suggestions("xiaomi", snapshot, [])[0].to_dict()
        assert data == {
            "id": "product_p1",
            "text": "Умная розетка Xiaomi",
            "type": "product",
            "category": "sockets",
        }
