"""Tests for config module."""
import pytest
from pathlib import Path

import content_search.config as config_module
from content_search.config import Config, HistoryConfig, SearchConfig, get_config


class TestConfig:
    def test_default_values(self):
        search = SearchConfig()
        assert search.max_suggestions == 8
        assert search.use_field_weights is False
        assert search.highlight_tag == "mark"
        assert search.default_limit == 20

        history = HistoryConfig()
        assert history.capacity == 100
        assert history.storage_path is None
        assert history.storage_key == "searchHistory"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CONTENT_SEARCH_MAX_SUGGESTIONS", "5")
        monkeypatch.setenv("CONTENT_SEARCH_HISTORY_LIMIT", "50")
        monkeypatch.setenv("CONTENT_SEARCH_HISTORY_PATH", "/tmp/history.json")
        monkeypatch.setenv("CONTENT_SEARCH_CATALOG", "/tmp/catalog.json")

        config = Config.from_env()
        assert config.search.max_suggestions == 5
        assert config.history.capacity == 50
        assert str(config.history.storage_path) == "/tmp/history.json"
        assert config.catalog_path == Path("/tmp/catalog.json")

    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("true", True), ("YES", True), ("0", False), ("off", False),
    ])
    def test_field_weights_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("CONTENT_SEARCH_FIELD_WEIGHTS", value)
        assert SearchConfig.from_env().use_field_weights is expected

    def test_catalog_default(self, monkeypatch):
        monkeypatch.delenv("CONTENT_SEARCH_CATALOG", raising=False)
        assert Config.from_env().catalog_path is None

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("CONTENT_SEARCH_LOG_LEVEL", "debug")
        assert Config.from_env().log_level == "DEBUG"

    def test_get_config_is_cached(self, monkeypatch):
        monkeypatch.setattr(config_module, "_config", None)
        assert get_config() is get_config()
