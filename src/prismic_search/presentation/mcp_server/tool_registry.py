"""
Tool Registry - central place for MCP tool registration.

Usage:
    from .tool_registry import register_all_mcp_tools, list_registered_tools

    register_all_mcp_tools(mcp, service, store)
    tools = list_registered_tools()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from prismic_search.application.saved_queries import SavedQueryStore
    from prismic_search.application.search import AdvancedSearchService

logger = logging.getLogger(__name__)


TOOL_CATEGORIES: dict[str, dict[str, Any]] = {
    "search": {
        "name": "Search",
        "description": "Field:value search across document types",
        "tools": [
            "advanced_search",
            "suggest_search_fields",
            "list_document_types",
            "explain_search",
        ],
    },
    "saved_searches": {
        "name": "Saved searches",
        "description": "Named, replayable search strings",
        "tools": [
            "save_search",
            "list_saved_searches",
            "rename_saved_search",
            "forget_saved_search",
            "run_saved_search",
        ],
    },
}


def register_all_mcp_tools(
    mcp: FastMCP,
    service: AdvancedSearchService,
    store: SavedQueryStore,
) -> dict[str, int]:
    """
    Register all MCP tools.

    Returns:
        Dict with category ids and tool counts
    """
    from .tools import register_saved_query_tools, register_search_tools

    logger.info("Registering search tools...")
    register_search_tools(mcp, service)

    logger.info("Registering saved search tools...")
    register_saved_query_tools(mcp, store, service)

    stats = {cat_id: len(cat["tools"]) for cat_id, cat in TOOL_CATEGORIES.items()}
    logger.info(f"Total registered: {sum(stats.values())} tools")
    return stats


def list_registered_tools() -> dict[str, list[str]]:
    """All defined tools, grouped by category."""
    return {cat_id: list(cat_info["tools"]) for cat_id, cat_info in TOOL_CATEGORIES.items()}


def get_tool_info(tool_name: str) -> dict[str, str] | None:
    """Category information for one tool, or None if unknown."""
    for cat_id, cat_info in TOOL_CATEGORIES.items():
        if tool_name in cat_info["tools"]:
            return {
                "name": tool_name,
                "category_id": cat_id,
                "category_name": cat_info["name"],
                "category_description": cat_info["description"],
            }
    return None
