"""Tests for schema discovery."""

from __future__ import annotations

import asyncio

import pytest

from prismic_search.application.search import (
    SchemaIntrospector,
    build_document_type,
    build_document_types,
    filter_type_names,
)
from prismic_search.shared.exceptions import BackendRequestFailure, SchemaUnavailableError


def _string(name):
    return {"name": name, "type": {"name": "String"}}


class TestFilterTypeNames:
    def test_keeps_where_types(self, mock_types_response):
        assert filter_type_names(mock_types_response) == ["WhereArticle", "WhereAuthor"]

    def test_bad_shape(self):
        with pytest.raises(SchemaUnavailableError):
            filter_type_names({"__schema": None})


class TestBuildDocumentType:
    def test_folds_exact_and_fulltext(self):
        doc_type = build_document_type("WhereArticle", [_string("title"), _string("title_fulltext")])
        field = doc_type.fields["title"]
        assert field.supports_exact
        assert field.supports_fulltext
        assert list(doc_type.fields) == ["title"]

    def test_fulltext_only_field(self):
        doc_type = build_document_type("WhereArticle", [_string("body_fulltext")])
        assert doc_type.has_fulltext("body")
        assert not doc_type.has_exact("body")

    def test_non_string_fields_ignored(self):
        doc_type = build_document_type("WhereArticle", [{"name": "views", "type": {"name": "Int"}}])
        assert doc_type.fields == {}
        assert doc_type.summary_field is None

    def test_external_name(self):
        assert build_document_type("WhereBlog_post", []).name == "allBlog_posts"

    def test_summary_prefers_first_fulltext_field(self):
        doc_type = build_document_type(
            "WhereArticle", [_string("uid"), _string("body_fulltext"), _string("title_fulltext")]
        )
        assert doc_type.summary_field == "body"

    def test_summary_falls_back_to_first_string(self):
        doc_type = build_document_type("WhereArticle", [_string("uid"), _string("slug")])
        assert doc_type.summary_field == "uid"

    def test_missing_input_fields(self):
        with pytest.raises(SchemaUnavailableError):
            build_document_types(["WhereArticle"], {})

    def test_fields_are_read_only(self):
        doc_type = build_document_type("WhereArticle", [_string("title")])
        with pytest.raises(TypeError):
            doc_type.fields["x"] = None  # type: ignore[index]


class TestSchemaIntrospector:
    async def test_discover(self, fake_executor):
        introspector = SchemaIntrospector(fake_executor)
        types = await introspector.discover()

        assert [t.name for t in types] == ["allArticles", "allAuthors"]
        article = types[0]
        assert article.summary_field == "title"
        assert article.has_exact("category")
        assert article.has_fulltext("body")
        assert "views" not in article.fields
        assert introspector.is_available

    async def test_memoized(self, fake_executor):
        introspector = SchemaIntrospector(fake_executor)
        first = await introspector.discover()
        second = await introspector.discover()
        assert first is second
        assert len(fake_executor.documents) == 2

    async def test_concurrent_callers_share_discovery(self, fake_executor):
        introspector = SchemaIntrospector(fake_executor)
        results = await asyncio.gather(introspector.discover(), introspector.discover(), introspector.discover())
        assert results[0] is results[1] is results[2]
        assert len(fake_executor.documents) == 2

    async def test_no_filter_types_skips_second_round_trip(self, make_executor):
        executor = make_executor({"__schema": {"types": [{"name": "Query"}]}})
        introspector = SchemaIntrospector(executor)
        assert await introspector.discover() == ()
        assert len(executor.documents) == 1

    async def test_failure_is_not_cached(self, make_executor, mock_types_response, mock_inputs_response):
        executor = make_executor(mock_types_response, mock_inputs_response, error=BackendRequestFailure("boom"))
        introspector = SchemaIntrospector(executor)

        with pytest.raises(SchemaUnavailableError):
            await introspector.discover()
        assert not introspector.is_available
        assert introspector.types is None

        executor.error = None
        types = await introspector.discover()
        assert len(types) == 2

    async def test_bad_shape_is_unavailable(self, make_executor):
        introspector = SchemaIntrospector(make_executor({"unexpected": True}))
        with pytest.raises(SchemaUnavailableError):
            await introspector.discover()
