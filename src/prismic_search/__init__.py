"""
Prismic Search - Schema-driven advanced search for Prismic repositories

Lets an operator filter documents of every custom type by arbitrary
``field: value`` pairs. The schema is discovered at runtime by introspection,
so no type or field is known in advance.

Usage:
    from prismic_search import AdvancedSearchService, PrismicGraphQLClient, SchemaIntrospector

    client = PrismicGraphQLClient("https://my-repo.prismic.io/graphql")
    service = AdvancedSearchService(SchemaIntrospector(client), client)
    outcome = await service.trigger("category: news")

    for record in outcome.records:
        print(record.id, record.type, record.summary)
"""

from .application.saved_queries import SavedQueryStore
from .application.search import (
    AdvancedSearchService,
    ResultAggregator,
    SchemaIntrospector,
    compile_search,
    is_valid_query,
    parse_query,
    resolve_types,
)
from .domain.entities import DocumentType, ResultRecord, SavedQuery, SchemaField, SearchOutcome, SearchStatus
from .infrastructure.prismic import PrismicGraphQLClient

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "AdvancedSearchService",
    "PrismicGraphQLClient",
    "SavedQueryStore",
    # Pipeline stages
    "SchemaIntrospector",
    "parse_query",
    "is_valid_query",
    "resolve_types",
    "compile_search",
    "ResultAggregator",
    # Entities
    "DocumentType",
    "SchemaField",
    "ResultRecord",
    "SavedQuery",
    "SearchOutcome",
    "SearchStatus",
]
