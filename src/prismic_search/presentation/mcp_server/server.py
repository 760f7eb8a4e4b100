"""
Prismic Search MCP Server

Model Context Protocol server exposing schema-driven advanced search over a
Prismic repository.

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tool_registry.py: Centralized tool registration
- tools/: Tool implementations (search, saved searches, formatting)
- container: DI container (dependency-injector) for service lifecycle

Configuration (environment):
- PRISMIC_GRAPHQL_ENDPOINT: GraphQL endpoint (or first CLI argument)
- PRISMIC_REPOSITORY: repository name, required for custom endpoints
- PRISMIC_ACCESS_TOKEN: access token for private repositories
- PRISMIC_SEARCH_DATA_DIR: saved searches directory (default ~/.prismic-search-mcp)
- PRISMIC_SEARCH_PAGE_SIZE: documents per type (default 50)
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from mcp.server.fastmcp import FastMCP

from prismic_search.application.search import DEFAULT_PAGE_SIZE
from prismic_search.container import ApplicationContainer
from prismic_search.shared.exceptions import ConfigurationError, InvalidParameterError

from .instructions import SERVER_INSTRUCTIONS
from .tool_registry import register_all_mcp_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from prismic_search.application.saved_queries import SavedQueryStore
    from prismic_search.application.search import AdvancedSearchService
    from prismic_search.infrastructure.prismic import PrismicGraphQLClient

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = str(Path.home() / ".prismic-search-mcp")

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """Create a FastMCP lifespan handler bound to *container*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        logger.info("Lifecycle: startup, resources ready")
        try:
            yield container
        finally:
            client = cast("PrismicGraphQLClient", container.graphql_client())
            await client.close()
            logger.info("Lifecycle: shutdown, GraphQL client closed")

    return _lifespan


def create_server(
    endpoint: str,
    repository_name: str | None = None,
    access_token: str | None = None,
    data_dir: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    name: str = "prismic-search",
) -> FastMCP:
    """
    Create and configure the Prismic Search MCP server.

    Args:
        endpoint: Prismic GraphQL endpoint.
        repository_name: Repository name (custom endpoints only).
        access_token: Optional access token.
        data_dir: Directory for saved searches. Default: ~/.prismic-search-mcp
        page_size: Maximum documents per type and search.
        name: Server name.

    Returns:
        Configured FastMCP server instance.

    Raises:
        ConfigurationError: Invalid endpoint configuration.
    """
    global _container
    logger.info("Initializing Prismic Search MCP Server...")

    _container = ApplicationContainer()
    _container.config.from_dict(
        {
            "endpoint": endpoint,
            "repository_name": repository_name,
            "access_token": access_token,
            "data_dir": data_dir or DEFAULT_DATA_DIR,
            "page_size": page_size,
        }
    )

    service = cast("AdvancedSearchService", _container.search_service())
    store = cast("SavedQueryStore", _container.saved_query_store())
    logger.info("Saved searches directory: %s", data_dir or DEFAULT_DATA_DIR)

    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(_container),
    )

    stats = register_all_mcp_tools(mcp=mcp, service=service, store=store)
    logger.info("Tool registration complete: %s", stats)
    logger.info("Prismic Search MCP Server initialized successfully")

    return mcp


def _page_size_from_env() -> int:
    raw = os.environ.get("PRISMIC_SEARCH_PAGE_SIZE", "").strip()
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidParameterError("PRISMIC_SEARCH_PAGE_SIZE", raw, "a positive integer") from e
    if value < 1:
        raise InvalidParameterError("PRISMIC_SEARCH_PAGE_SIZE", raw, "a positive integer")
    return value


def main():
    """Run the MCP server."""

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Endpoint: CLI arg → env var
    endpoint = sys.argv[1] if len(sys.argv) > 1 else os.environ.get("PRISMIC_GRAPHQL_ENDPOINT", "").strip()
    if not endpoint:
        logger.error("No GraphQL endpoint configured (set PRISMIC_GRAPHQL_ENDPOINT)")
        sys.exit(2)

    try:
        server = create_server(
            endpoint=endpoint,
            repository_name=os.environ.get("PRISMIC_REPOSITORY", "").strip() or None,
            access_token=os.environ.get("PRISMIC_ACCESS_TOKEN", "").strip() or None,
            data_dir=os.environ.get("PRISMIC_SEARCH_DATA_DIR", "").strip() or None,
            page_size=_page_size_from_env(),
        )
    except (ConfigurationError, InvalidParameterError) as e:
        logger.error(str(e))
        sys.exit(2)

    # Run stdio MCP server (blocks)
    server.run()


if __name__ == "__main__":
    main()
