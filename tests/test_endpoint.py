"""Tests for endpoint resolution and GraphQL URL compaction."""

from __future__ import annotations

import urllib.parse

import pytest

from prismic_search.infrastructure.prismic import compact_query, compact_query_url, resolve_endpoints
from prismic_search.infrastructure.prismic.endpoint import parse_prismic_endpoint
from prismic_search.shared.exceptions import ConfigurationError


class TestResolveEndpoints:
    def test_prismic_endpoint_forces_cdn(self):
        endpoints = resolve_endpoints("https://my-repo.prismic.io/graphql")
        assert endpoints.api_url == "https://my-repo.cdn.prismic.io/api"
        assert endpoints.graphql_url == "https://my-repo.cdn.prismic.io/graphql"

    def test_already_cdn(self):
        endpoints = resolve_endpoints("https://my-repo.cdn.prismic.io/graphql/")
        assert endpoints.graphql_url == "https://my-repo.cdn.prismic.io/graphql"

    def test_wroom_domain(self):
        assert parse_prismic_endpoint("http://repo.wroom.test/graphql") == "https://repo.cdn.wroom.test"

    def test_custom_endpoint_needs_repository(self):
        with pytest.raises(ConfigurationError):
            resolve_endpoints("https://example.com/graphql")

    def test_custom_endpoint(self):
        endpoints = resolve_endpoints("https://example.com/graphql", "my-repo")
        assert endpoints.api_url == "https://my-repo.cdn.prismic.io/api"
        assert endpoints.graphql_url == "https://example.com/graphql"

    def test_repository_ignored_for_prismic_endpoint(self):
        endpoints = resolve_endpoints("https://my-repo.prismic.io/graphql", "other")
        assert endpoints.api_url == "https://my-repo.cdn.prismic.io/api"


class TestCompactQuery:
    def test_collapses_whitespace(self):
        document = "query search {\n  allArticles(first: 50) {\n    edges {\n      node { id }\n    }\n  }\n}"
        assert compact_query(document) == "query search{allArticles(first: 50){edges{node{id}}}}"

    def test_strings_kept_verbatim(self):
        document = 'query { all(where: {title: "a   {  b  } # c"}) { id } }'
        assert '"a   {  b  } # c"' in compact_query(document)

    def test_escaped_quote_in_string(self):
        document = 'query { all(where: {title: "say \\"  hi  \\""}) { id } }'
        assert '"say \\"  hi  \\""' in compact_query(document)

    def test_block_string_kept(self):
        document = 'query { f(text: """  a\n  b  """) }'
        assert '"""  a\n  b  """' in compact_query(document)

    def test_comments_dropped(self):
        assert compact_query("query { # comment\n  id\n}") == "query{id}"

    def test_byte_order_mark_is_whitespace(self):
        assert compact_query("\ufeffquery { id }") == "query{id}"


class TestCompactQueryUrl:
    def test_only_query_param_touched(self):
        document = urllib.parse.quote("query {\n  id\n}", safe="")
        url = f"https://repo.cdn.prismic.io/graphql?ref=abc%20def&query={document}"
        compacted = compact_query_url(url)
        assert compacted.startswith("https://repo.cdn.prismic.io/graphql?ref=abc%20def&query=")
        assert urllib.parse.unquote(compacted.split("query=")[1]) == "query{id}"

    def test_url_without_params(self):
        assert compact_query_url("https://x/graphql") == "https://x/graphql"

    def test_plus_in_value_preserved(self):
        document = urllib.parse.quote('query { a(where: {t: "1+1"}) }', safe="")
        compacted = compact_query_url(f"https://x/graphql?query={document}")
        assert urllib.parse.unquote(compacted.split("query=")[1]) == 'query{a(where:{t: "1+1"})}'
