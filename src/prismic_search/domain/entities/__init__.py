"""
Domain Entities

Core value objects for schema-driven document search.
"""

from __future__ import annotations

from .saved_query import DEFAULT_SAVED_QUERY_NAME, SavedQuery
from .schema import (
    FILTER_TYPE_PREFIX,
    FULLTEXT_SUFFIX,
    STRING_TYPE_NAME,
    DocumentType,
    SchemaField,
    external_type_name,
    fulltext_name,
    strip_fulltext_suffix,
)
from .search import (
    ResolvedType,
    ResultRecord,
    RichTextFragment,
    SearchOutcome,
    SearchStatus,
    SearchView,
    SummaryKind,
    ViewState,
)

__all__ = [
    # Schema entities
    "DocumentType",
    "SchemaField",
    "FILTER_TYPE_PREFIX",
    "FULLTEXT_SUFFIX",
    "STRING_TYPE_NAME",
    "external_type_name",
    "fulltext_name",
    "strip_fulltext_suffix",
    # Search entities
    "ResolvedType",
    "ResultRecord",
    "RichTextFragment",
    "SummaryKind",
    "SearchOutcome",
    "SearchStatus",
    "SearchView",
    "ViewState",
    # Saved queries
    "SavedQuery",
    "DEFAULT_SAVED_QUERY_NAME",
]
