"""MCP Server Instructions - usage guide for AI agents."""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
Prismic Advanced Search - find documents of any custom type by field values.

## Writing a search
Comma-separated `field: value` pairs, combined with AND:

    advanced_search(query="first_name: Mark, last_name: Lee")
    advanced_search(query="category: news")

- Only document types having EVERY field are searched; others are skipped.
- A field with a full-text variant matches by contains, otherwise by equality.
- Input without ":" is not a search. An empty query clears the search.
- At most 50 documents per type are returned.

## Finding field names
- suggest_search_fields(query="category: news, auth") completes the last segment.
- list_document_types() shows every type, its fields and match capabilities.
- explain_search(query=...) shows the GraphQL query without running it.

## Saved searches
save_search(query, name) -> list_saved_searches() -> run_saved_search(index)
rename_saved_search(index, name) / forget_saved_search(index)
"""
