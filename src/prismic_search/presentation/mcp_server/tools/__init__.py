"""
Prismic Search MCP Tools

Search (4):
- advanced_search, suggest_search_fields, list_document_types, explain_search

Saved searches (5):
- save_search, list_saved_searches, rename_saved_search, forget_saved_search, run_saved_search

Usage:
    from .tools import register_all_tools
    register_all_tools(mcp, service, store)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .saved_queries import register_saved_query_tools
from .search import register_search_tools

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from prismic_search.application.saved_queries import SavedQueryStore
    from prismic_search.application.search import AdvancedSearchService


def register_all_tools(mcp: FastMCP, service: AdvancedSearchService, store: SavedQueryStore) -> None:
    """Register every tool on ``mcp``."""
    register_search_tools(mcp, service)
    register_saved_query_tools(mcp, store, service)


__all__ = [
    "register_all_tools",
    "register_search_tools",
    "register_saved_query_tools",
]
