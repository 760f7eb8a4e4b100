"""
Search Application Module

Schema-driven search query compiler:
- SchemaIntrospector: discover filterable types and their string fields
- query_parser: raw input -> ordered constraints, validity gate, autofill
- field_resolver: eligible types and exact/full-text field choice
- query_compiler: typed builder for the aggregate GraphQL query
- ResultAggregator: per-type response -> uniform records
- AdvancedSearchService: sequence-numbered trigger tying it all together
"""

from .executor import GraphQLExecutor
from .field_resolver import require_eligible, resolve_field, resolve_type, resolve_types
from .introspector import SchemaIntrospector, build_document_type, build_document_types, filter_type_names
from .query_compiler import (
    DEFAULT_PAGE_SIZE,
    TYPES_QUERY,
    SearchQuery,
    SearchSelection,
    build_input_fields_query,
    compile_search,
    to_graphql_literal,
)
from .query_parser import apply_autofill, is_valid_query, last_segment, parse_query, suggest_fields
from .result_aggregator import ResultAggregator, aggregate, record_from_node
from .service import AdvancedSearchService

__all__ = [
    # Transport port
    "GraphQLExecutor",
    # Introspection
    "SchemaIntrospector",
    "filter_type_names",
    "build_document_type",
    "build_document_types",
    # Parsing
    "parse_query",
    "is_valid_query",
    "last_segment",
    "suggest_fields",
    "apply_autofill",
    # Resolution
    "resolve_field",
    "resolve_type",
    "resolve_types",
    "require_eligible",
    # Compilation
    "DEFAULT_PAGE_SIZE",
    "TYPES_QUERY",
    "SearchQuery",
    "SearchSelection",
    "build_input_fields_query",
    "compile_search",
    "to_graphql_literal",
    # Aggregation
    "ResultAggregator",
    "aggregate",
    "record_from_node",
    # Service
    "AdvancedSearchService",
]
