"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from typing import Any

import pytest

from prismic_search.domain.entities import DocumentType, SchemaField

# ============================================================
# Mock Prismic Introspection Responses
# ============================================================


@pytest.fixture
def mock_types_response():
    """Mock ``__schema { types { name } }`` data."""
    return {
        "__schema": {
            "types": [
                {"name": "Query"},
                {"name": "Article"},
                {"name": "WhereArticle"},
                {"name": "Author"},
                {"name": "WhereAuthor"},
                {"name": "String"},
            ]
        }
    }


@pytest.fixture
def mock_inputs_response():
    """Mock aliased ``__type`` lookups for the Where* types."""
    return {
        "WhereArticle": {
            "inputFields": [
                {"name": "title", "type": {"name": "String"}},
                {"name": "title_fulltext", "type": {"name": "String"}},
                {"name": "category", "type": {"name": "String"}},
                {"name": "body_fulltext", "type": {"name": "String"}},
                {"name": "views", "type": {"name": "Int"}},
            ]
        },
        "WhereAuthor": {
            "inputFields": [
                {"name": "first_name", "type": {"name": "String"}},
                {"name": "last_name", "type": {"name": "String"}},
                {"name": "bio_fulltext", "type": {"name": "String"}},
            ]
        },
    }


@pytest.fixture
def mock_search_response():
    """Mock aggregate search data for ``category: news``."""
    return {
        "allArticles": {
            "edges": [
                {
                    "node": {
                        "summary": "Breaking news",
                        "_meta": {"id": "XA1", "type": "article", "lastPublicationDate": "2024-01-15T10:00:00+00:00"},
                    }
                },
                {
                    "node": {
                        "summary": None,
                        "_meta": {"id": "XA2", "type": "article", "lastPublicationDate": None},
                    }
                },
            ]
        }
    }


# ============================================================
# Domain Fixtures
# ============================================================


@pytest.fixture
def article_type():
    return DocumentType(
        name="allArticles",
        input_type="WhereArticle",
        summary_field="title",
        fields={
            "title": SchemaField("title", supports_exact=True, supports_fulltext=True),
            "category": SchemaField("category", supports_exact=True),
            "body": SchemaField("body", supports_fulltext=True),
        },
    )


@pytest.fixture
def author_type():
    return DocumentType(
        name="allAuthors",
        input_type="WhereAuthor",
        summary_field="bio",
        fields={
            "first_name": SchemaField("first_name", supports_exact=True),
            "last_name": SchemaField("last_name", supports_exact=True),
            "bio": SchemaField("bio", supports_fulltext=True),
        },
    )


@pytest.fixture
def document_types(article_type, author_type):
    return (article_type, author_type)


# ============================================================
# Fake Executor
# ============================================================


class FakeExecutor:
    """GraphQLExecutor double answering introspection and search documents."""

    def __init__(self, types_data=None, inputs_data=None, search_data=None, error: Exception | None = None):
        self.types_data = types_data
        self.inputs_data = inputs_data
        self.search_data = search_data if search_data is not None else {}
        self.error = error
        self.documents: list[str] = []

    async def query(self, document: str) -> dict[str, Any]:
        self.documents.append(document)
        if self.error is not None:
            raise self.error
        if document.startswith("query types"):
            return self.types_data
        if document.startswith("query inputs"):
            return self.inputs_data
        return self.search_data


@pytest.fixture
def fake_executor(mock_types_response, mock_inputs_response, mock_search_response):
    return FakeExecutor(mock_types_response, mock_inputs_response, mock_search_response)


@pytest.fixture
def make_executor():
    """Factory for FakeExecutor instances with custom responses."""
    return FakeExecutor
