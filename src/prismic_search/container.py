"""
Application DI Container (dependency-injector).

Centralizes service creation and lifecycle management.

Usage::

    from prismic_search.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "endpoint": "https://my-repo.prismic.io/graphql",
        "repository_name": None,
        "access_token": None,
        "data_dir": "~/.prismic-search-mcp",
        "page_size": 50,
    })

    service = container.search_service()
    store = container.saved_query_store()

    # In tests, override any provider:
    container.graphql_client.override(providers.Object(mock_client))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

logger = logging.getLogger(__name__)


def _create_graphql_client(endpoint: str, repository_name: str | None, access_token: str | None) -> object:
    """Lazy factory for PrismicGraphQLClient (avoids top-level httpx import)."""
    from prismic_search.infrastructure.prismic import PrismicGraphQLClient

    return PrismicGraphQLClient(
        endpoint=endpoint,
        repository_name=repository_name or None,
        access_token=access_token or None,
    )


def _create_introspector(executor: object) -> object:
    """Lazy factory for SchemaIntrospector."""
    from prismic_search.application.search import SchemaIntrospector

    return SchemaIntrospector(executor)  # type: ignore[arg-type]


def _create_search_service(introspector: object, executor: object, page_size: int | None) -> object:
    """Lazy factory for AdvancedSearchService."""
    from prismic_search.application.search import DEFAULT_PAGE_SIZE, AdvancedSearchService

    return AdvancedSearchService(
        introspector=introspector,  # type: ignore[arg-type]
        executor=executor,  # type: ignore[arg-type]
        page_size=int(page_size or DEFAULT_PAGE_SIZE),
    )


def _create_saved_query_store(data_dir: str) -> object:
    """Lazy factory for SavedQueryStore."""
    from prismic_search.application.saved_queries import SavedQueryStore

    return SavedQueryStore(data_dir=data_dir)


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the Prismic search application.

    Manages creation and lifecycle of all core services:
    - ``graphql_client``: Prismic GraphQL transport
    - ``introspector``: memoized schema discovery (one per session)
    - ``search_service``: sequence-numbered search trigger
    - ``saved_query_store``: saved search persistence
    """

    config = providers.Configuration()

    graphql_client = providers.Singleton(
        _create_graphql_client,
        endpoint=config.endpoint,
        repository_name=config.repository_name,
        access_token=config.access_token,
    )

    introspector = providers.Singleton(
        _create_introspector,
        executor=graphql_client,
    )

    search_service = providers.Singleton(
        _create_search_service,
        introspector=introspector,
        executor=graphql_client,
        page_size=config.page_size,
    )

    saved_query_store = providers.Singleton(
        _create_saved_query_store,
        data_dir=config.data_dir,
    )
