"""
Search MCP Tools - Ad-hoc field:value search across document types

Provides:
- advanced_search: run a search and render matching documents
- suggest_search_fields: autofill field names for the segment being typed
- list_document_types: discovered types, their fields and match capabilities
- explain_search: show the GraphQL query a search would send
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from prismic_search.application.search import apply_autofill
from prismic_search.domain.entities import SearchStatus
from prismic_search.shared.exceptions import PrismicSearchError

from .formatting import EMPTY_STATE, format_results_markdown

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from prismic_search.application.search import AdvancedSearchService
    from prismic_search.domain.entities import SearchOutcome

logger = logging.getLogger(__name__)

QUERY_EXAMPLE = "first_name: Mark, last_name: Lee"


def render_outcome(outcome: SearchOutcome) -> str:
    """Tool response for one search outcome."""
    match outcome.status:
        case SearchStatus.RESULTS:
            return format_results_markdown(outcome.records)
        case SearchStatus.NO_ELIGIBLE_TYPE:
            return EMPTY_STATE
        case SearchStatus.NOT_A_QUERY:
            return f"Not a search yet. Use comma-separated `field: value` pairs, e.g. `{QUERY_EXAMPLE}`."
        case SearchStatus.UNAVAILABLE:
            return "Search is unavailable: the content schema could not be loaded. Try again later."
        case SearchStatus.RESTORED:
            return "Search cleared, showing the original document list."
        case _:
            return "Search superseded by a newer one."


def register_search_tools(mcp: FastMCP, service: AdvancedSearchService) -> None:
    """Register search tools (4 tools)."""

    @mcp.tool()
    async def advanced_search(query: str) -> str:
        """
        Search documents of every type by field values.

        Input is a comma-separated list of `field: value` pairs, combined with
        AND. Only document types having every field are searched. Fields with
        a full-text variant match by contains, others by equality.

        Args:
            query: e.g. "first_name: Mark, last_name: Lee" or "category: news".
                   An empty query clears the search.

        Returns:
            Markdown table of matching documents (name, type, last update, link).
        """
        try:
            outcome = await service.trigger(query)
        except PrismicSearchError as e:
            logger.exception("Error running advanced search")
            return e.to_agent_message()
        return render_outcome(outcome)

    @mcp.tool()
    async def suggest_search_fields(query: str) -> str:
        """
        Autofill field names for the last `field: value` segment being typed.

        Args:
            query: Current search input, e.g. "category: news, auth"

        Returns:
            JSON list of {"field", "autofill"} where autofill is the completed input.
        """
        suggestions = await service.suggest(query)
        return json.dumps(
            [{"field": name, "autofill": apply_autofill(query, name)} for name in suggestions],
            ensure_ascii=False,
        )

    @mcp.tool()
    async def list_document_types() -> str:
        """
        List searchable document types and their string fields.

        Returns:
            JSON list of types with their preview field and, per field, whether
            exact and full-text matching are supported.
        """
        try:
            types = await service.document_types()
        except PrismicSearchError as e:
            return e.to_agent_message()
        return json.dumps(
            [
                {
                    "type": t.name,
                    "input_type": t.input_type,
                    "summary_field": t.summary_field,
                    "fields": [
                        {"name": f.name, "exact": f.supports_exact, "fulltext": f.supports_fulltext}
                        for f in t.fields.values()
                    ],
                }
                for t in types
            ],
            indent=2,
            ensure_ascii=False,
        )

    @mcp.tool()
    async def explain_search(query: str) -> str:
        """
        Show the GraphQL query `advanced_search` would send, without running it.

        Args:
            query: Search input, e.g. "category: news"

        Returns:
            The GraphQL document, or why no request would be made.
        """
        try:
            compiled = await service.compile(query)
        except PrismicSearchError as e:
            return e.to_agent_message()
        if compiled is None:
            return "No request would be made: the input is not a query or no document type has all its fields."
        return f"```graphql\n{compiled.render()}\n```"
