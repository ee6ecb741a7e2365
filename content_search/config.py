"""Configuration for the content search MCP server."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SearchConfig:
    """Configuration for ranking and suggestions."""
    max_suggestions: int = 8
    use_field_weights: bool = False  # Multiply field scores by field weight
    highlight_tag: str = "mark"
    default_limit: int = 20  # Max results returned by the search tool

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Create config from environment variables."""
        return cls(
            max_suggestions=int(os.environ.get("CONTENT_SEARCH_MAX_SUGGESTIONS", "8")),
            use_field_weights=_env_flag("CONTENT_SEARCH_FIELD_WEIGHTS"),
            highlight_tag=os.environ.get("CONTENT_SEARCH_HIGHLIGHT_TAG", "mark"),
            default_limit=int(os.environ.get("CONTENT_SEARCH_LIMIT", "20")),
        )


@dataclass
class HistoryConfig:
    """Configuration for the persisted search history."""
    capacity: int = 100
    storage_path: Optional[Path] = None  # None = use default
    storage_key: str = "searchHistory"

    @classmethod
    def from_env(cls) -> "HistoryConfig":
        """Create config from environment variables."""
        path_str = os.environ.get("CONTENT_SEARCH_HISTORY_PATH")
        return cls(
            capacity=int(os.environ.get("CONTENT_SEARCH_HISTORY_LIMIT", "100")),
            storage_path=Path(path_str) if path_str else None,
        )


@dataclass
class Config:
    """Main configuration for the content search MCP server."""
    search: SearchConfig = field(default_factory=SearchConfig.from_env)
    history: HistoryConfig = field(default_factory=HistoryConfig.from_env)
    catalog_path: Optional[Path] = None  # None = use default
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        catalog_str = os.environ.get("CONTENT_SEARCH_CATALOG")

        return cls(
            search=SearchConfig.from_env(),
            history=HistoryConfig.from_env(),
            catalog_path=Path(catalog_str) if catalog_str else None,
            log_level=os.environ.get("CONTENT_SEARCH_LOG_LEVEL", "WARNING").upper(),
        )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global config instance.

    Returns:
        Config loaded from environment
    """
    global _config

    if _config is None:
        _config = Config.from_env()

    return _config
