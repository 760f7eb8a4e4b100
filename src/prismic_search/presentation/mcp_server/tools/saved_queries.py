"""
Saved Search MCP Tools

Provides:
- save_search / list_saved_searches / rename_saved_search / forget_saved_search
- run_saved_search: replay a saved search through advanced search
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from prismic_search.domain.entities import DEFAULT_SAVED_QUERY_NAME
from prismic_search.shared.exceptions import PrismicSearchError

from .search import render_outcome

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from prismic_search.application.saved_queries import SavedQueryStore
    from prismic_search.application.search import AdvancedSearchService
    from prismic_search.domain.entities import SavedQuery

logger = logging.getLogger(__name__)


def saved_queries_json(queries: list[SavedQuery], last_queried: str | None = None) -> str:
    """JSON listing; ``selected`` marks entries matching the last search run."""
    return json.dumps(
        {
            "success": True,
            "count": len(queries),
            "saved_searches": [
                {"index": i, **q.to_dict(), "selected": q.value == last_queried} for i, q in enumerate(queries)
            ],
        },
        indent=2,
        ensure_ascii=False,
    )


def _error_json(error: PrismicSearchError) -> str:
    return json.dumps({"success": False, **error.to_dict()}, ensure_ascii=False)


def register_saved_query_tools(mcp: FastMCP, store: SavedQueryStore, service: AdvancedSearchService) -> None:
    """Register saved search tools (5 tools)."""

    @mcp.tool()
    def save_search(query: str, name: str = DEFAULT_SAVED_QUERY_NAME) -> str:
        """
        Save a search for later replay. Newest saved searches come first.

        Args:
            query: Search input to save, e.g. "category: news"
            name: Display name (default "New Search")
        """
        try:
            return saved_queries_json(store.save(query, name), service.last_queried)
        except PrismicSearchError as e:
            return _error_json(e)

    @mcp.tool()
    def list_saved_searches() -> str:
        """List saved searches with their index, name and query."""
        try:
            return saved_queries_json(store.list_queries(), service.last_queried)
        except PrismicSearchError as e:
            return _error_json(e)

    @mcp.tool()
    def rename_saved_search(index: int, name: str) -> str:
        """
        Rename a saved search.

        Args:
            index: Position from list_saved_searches
            name: New display name
        """
        try:
            return saved_queries_json(store.rename(index, name), service.last_queried)
        except PrismicSearchError as e:
            return _error_json(e)

    @mcp.tool()
    def forget_saved_search(index: int) -> str:
        """
        Delete a saved search.

        Args:
            index: Position from list_saved_searches
        """
        try:
            return saved_queries_json(store.forget(index), service.last_queried)
        except PrismicSearchError as e:
            return _error_json(e)

    @mcp.tool()
    async def run_saved_search(index: int) -> str:
        """
        Run a saved search.

        Args:
            index: Position from list_saved_searches
        """
        try:
            saved = store.get(index)
            outcome = await service.trigger(saved.value)
        except PrismicSearchError as e:
            logger.exception("Error running saved search")
            return e.to_agent_message()
        return f"**{saved.name}** (`{saved.value}`)\n\n{render_outcome(outcome)}"
