"""MCP server for content search."""
import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from content_search.catalog import load_catalog
from content_search.config import get_config
from content_search.history import SearchHistoryStore
from content_search.models import ContentSnapshot, ResultType, SearchFilters
from content_search.search import KeywordSearchEngine, SearchEngine, count_by_type
from content_search.storage import JsonFileStorage
from content_search.suggestions import generate_suggestions

logger = logging.getLogger(__name__)

SERVER_NAME = "content-search-mcp"

# Global state
_snapshot_cache: Optional[ContentSnapshot] = None
_history_store: Optional[SearchHistoryStore] = None
_search_engine: Optional[SearchEngine] = None


def load_snapshot(catalog_path: Optional[Path] = None) -> ContentSnapshot:
    """Load the content snapshot, using cache if available.

    Args:
        catalog_path: Optional path to catalog file

    Returns:
        Content snapshot (empty if the catalog cannot be read)
    """
    global _snapshot_cache

    if _snapshot_cache is None:
        try:
            _snapshot_cache = load_catalog(catalog_path or get_config().catalog_path)
        except FileNotFoundError as e:
            logger.warning("Could not find catalog file: %s", e)
            _snapshot_cache = ContentSnapshot()
        except ValueError as e:
            logger.error("Error loading catalog: %s", e)
            _snapshot_cache = ContentSnapshot()

    return _snapshot_cache


def get_history_store() -> SearchHistoryStore:
    """Get or create the global history store backed by a JSON file."""
    global _history_store

    if _history_store is None:
        history_config = get_config().history
        _history_store = SearchHistoryStore(
            JsonFileStorage(history_config.storage_path),
            key=history_config.storage_key,
            capacity=history_config.capacity,
        )

    return _history_store


def get_search_engine() -> SearchEngine:
    global _search_engine

    if _search_engine is None:
        search_config = get_config().search
        _search_engine = KeywordSearchEngine(
            use_field_weights=search_config.use_field_weights,
            highlight_tag=search_config.highlight_tag,
        )

    return _search_engine


def _json_content(payload: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, ensure_ascii=False, indent=2))]


async def search_content_tool(
    query: str,
    content_type: str = "all",
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[TextContent]:
    """Tool handler for search_content.

    Runs a unified search and records it in the search history.

    Args:
        query: Search query string
        content_type: "all" or one of product, article, news, rating
        category: Optional exact category filter
        limit: Maximum number of results (defaults to config)

    Returns:
        List of TextContent with the JSON result payload
    """
    valid_types = ["all"] + [t.value for t in ResultType]
    if content_type not in valid_types:
        return [TextContent(
            type="text",
            text=f"Error: 'type' must be one of {', '.join(valid_types)}"
        )]

    snapshot = load_snapshot()
    filters = SearchFilters(type=content_type, category=category)
    results = get_search_engine().search(query, snapshot, filters=filters)

    entry = get_history_store().save(query, len(results))

    limit = limit or get_config().search.default_limit
    return _json_content({
        "query": query,
        "historyEntryId": entry.id,
        "total": len(results),
        "countsByType": count_by_type(results),
        "results": [r.to_dict() for r in results[:limit]],
    })


async def get_suggestions_tool(query: str, max_suggestions: Optional[int] = None) -> list[TextContent]:
    """Tool handler for get_suggestions."""
    suggestions = generate_suggestions(
        query,
        load_snapshot(),
        get_history_store().load(),
        max_suggestions or get_config().search.max_suggestions,
    )
    return _json_content([s.to_dict() for s in suggestions])


async def get_search_history_tool(limit: Optional[int] = None) -> list[TextContent]:
    """Tool handler for get_search_history."""
    entries = get_history_store().load()
    if limit is not None:
        entries = entries[:limit]
    return _json_content([e.to_dict() for e in entries])


async def get_popular_searches_tool(limit: int = 10) -> list[TextContent]:
    """Tool handler for get_popular_searches."""
    return _json_content(get_history_store().get_popular_searches(limit))


async def record_result_click_tool(entry_id: str, result_id: str) -> list[TextContent]:
    """Tool handler for record_result_click."""
    found = get_history_store().record_click(entry_id, result_id)
    return _json_content({"status": "recorded" if found else "not_found", "entryId": entry_id})


async def get_search_analytics_tool(top: int = 10) -> list[TextContent]:
    """Tool handler for get_search_analytics."""
    return _json_content(get_history_store().get_analytics(top).to_dict())


async def clear_search_history_tool() -> list[TextContent]:
    """Tool handler for clear_search_history."""
    get_history_store().clear()
    return _json_content({"status": "cleared"})


def _limit_schema(description: str) -> dict:
    return {"type": "integer", "minimum": 1, "description": description}


def create_server() -> Server:
    """Create and configure the MCP server.

    Returns:
        Configured Server instance
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name="search_content",
                description="Search products, articles, news and ratings. Returns results ranked by relevance with matched terms highlighted.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "Search query"},
                        "type": {
                            "type": "string",
                            "enum": ["all"] + [t.value for t in ResultType],
                            "description": "Restrict results to one content type",
                        },
                        "category": {"type": "string", "description": "Exact category filter"},
                        "limit": _limit_schema("Maximum number of results"),
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="get_suggestions",
                description="Autocomplete suggestions for a partially typed query, from search history, products, brands and categories.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "Text typed so far"},
                        "max_suggestions": _limit_schema("Maximum number of suggestions"),
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="get_search_history",
                description="Past searches, newest first.",
                inputSchema={
                    "type": "object",
                    "properties": {"limit": _limit_schema("Maximum number of entries")},
                },
            ),
            Tool(
                name="get_popular_searches",
                description="Most frequent past queries, most frequent first.",
                inputSchema={
                    "type": "object",
                    "properties": {"limit": _limit_schema("Maximum number of queries")},
                },
            ),
            Tool(
                name="record_result_click",
                description="Record that a result was opened after a search.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "entry_id": {"type": "string", "description": "historyEntryId returned by search_content"},
                        "result_id": {"type": "string", "description": "ID of the opened result"},
                    },
                    "required": ["entry_id", "result_id"],
                },
            ),
            Tool(
                name="get_search_analytics",
                description="Search statistics: totals, top queries with trend, zero-result queries, click-through rate.",
                inputSchema={
                    "type": "object",
                    "properties": {"top": _limit_schema("Number of top queries")},
                },
            ),
            Tool(
                name="clear_search_history",
                description="Delete all stored search history.",
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Handle tool calls."""
        arguments = arguments or {}

        if name == "search_content":
            query = arguments.get("query", "")
            if not query or not query.strip():
                return [TextContent(
                    type="text",
                    text="Error: 'query' parameter is required"
                )]
            return await search_content_tool(
                query,
                content_type=arguments.get("type", "all"),
                category=arguments.get("category"),
                limit=arguments.get("limit"),
            )
        elif name == "get_suggestions":
            return await get_suggestions_tool(
                arguments.get("query", ""), arguments.get("max_suggestions")
            )
        elif name == "get_search_history":
            return await get_search_history_tool(arguments.get("limit"))
        elif name == "get_popular_searches":
            return await get_popular_searches_tool(arguments.get("limit", 10))
        elif name == "record_result_click":
            entry_id = arguments.get("entry_id")
            result_id = arguments.get("result_id")
            if not entry_id or not result_id:
                return [TextContent(
                    type="text",
                    text="Error: 'entry_id' and 'result_id' parameters are required"
                )]
            return await record_result_click_tool(entry_id, result_id)
        elif name == "get_search_analytics":
            return await get_search_analytics_tool(arguments.get("top", 10))
        elif name == "clear_search_history":
            return await clear_search_history_tool()
        else:
            raise ValueError(f"Unknown tool: {name}")

    return server


async def main():
    """Main entry point for the MCP server."""
    server = create_server()

    async with stdio_server() as (read_stream, write_stream):
        initialization_options = server.create_initialization_options()
        await server.run(read_stream, write_stream, initialization_options)
