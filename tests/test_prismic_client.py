"""Tests for PrismicGraphQLClient over httpx.MockTransport."""

from __future__ import annotations

import urllib.parse

import httpx
import pytest

from prismic_search.infrastructure.prismic import INTEGRATION_REF_HEADER, REF_HEADER, PrismicGraphQLClient
from prismic_search.shared.exceptions import BackendRequestFailure, ConfigurationError

API_DESCRIPTOR = {
    "refs": [
        {"id": "release", "ref": "release-ref", "isMasterRef": False},
        {"id": "master", "ref": "master-ref", "isMasterRef": True},
    ],
    "integrationFieldRef": "integration-ref",
}


def _client(handler, **kwargs) -> PrismicGraphQLClient:
    return PrismicGraphQLClient(
        "https://my-repo.prismic.io/graphql",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _handler(requests, graphql_payload, api=API_DESCRIPTOR):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/api":
            return httpx.Response(200, json=api)
        return httpx.Response(200, json=graphql_payload)

    return handler


class TestPrismicGraphQLClient:
    def test_custom_endpoint_without_repository(self):
        with pytest.raises(ConfigurationError):
            PrismicGraphQLClient("https://example.com/graphql")

    def test_urls(self):
        client = PrismicGraphQLClient("https://my-repo.prismic.io/graphql")
        assert client.api_url == "https://my-repo.cdn.prismic.io/api"
        assert client.graphql_url == "https://my-repo.cdn.prismic.io/graphql"

    async def test_query_sends_get_with_ref_headers(self):
        requests = []
        client = _client(_handler(requests, {"data": {"allArticles": {"edges": []}}}))

        data = await client.query("query search {\n  allArticles { edges { node { id } } }\n}")

        assert data == {"allArticles": {"edges": []}}
        api_request, graphql_request = requests
        assert api_request.url.host == "my-repo.cdn.prismic.io"
        assert graphql_request.method == "GET"
        assert graphql_request.url.path == "/graphql"
        assert graphql_request.headers[REF_HEADER] == "master-ref"
        assert graphql_request.headers[INTEGRATION_REF_HEADER] == "integration-ref"
        assert "Authorization" not in graphql_request.headers
        sent = urllib.parse.parse_qs(graphql_request.url.query.decode())["query"][0]
        assert sent == "query search{allArticles{edges{node{id}}}}"
        await client.close()

    async def test_access_token(self):
        requests = []
        client = _client(_handler(requests, {"data": {}}), access_token="secret")

        await client.query("query { x }")

        api_request, graphql_request = requests
        assert api_request.url.params["access_token"] == "secret"
        assert graphql_request.headers["Authorization"] == "Token secret"
        await client.close()

    async def test_api_descriptor_fetched_once(self):
        requests = []
        client = _client(_handler(requests, {"data": {}}))

        await client.query("query { a }")
        await client.query("query { b }")

        assert [r.url.path for r in requests] == ["/api", "/graphql", "/graphql"]
        await client.close()

    async def test_no_master_ref(self):
        client = _client(_handler([], {"data": {}}, api={"refs": []}))
        with pytest.raises(BackendRequestFailure):
            await client.query("query { a }")
        await client.close()

    async def test_errors_without_data(self):
        client = _client(_handler([], {"errors": [{"message": "Unknown field"}]}))
        with pytest.raises(BackendRequestFailure) as exc_info:
            await client.query("query { a }")
        assert "Unknown field" in str(exc_info.value)
        assert exc_info.value.errors == [{"message": "Unknown field"}]
        await client.close()

    async def test_partial_errors_return_data(self):
        client = _client(_handler([], {"data": {"a": 1}, "errors": [{"message": "partial"}]}))
        assert await client.query("query { a }") == {"a": 1}
        await client.close()

    async def test_http_error_becomes_backend_failure(self):
        def handler(request):
            if request.url.path == "/api":
                return httpx.Response(200, json=API_DESCRIPTOR)
            return httpx.Response(400, json={"message": "bad"})

        client = _client(handler)
        with pytest.raises(BackendRequestFailure) as exc_info:
            await client.query("query { a }")
        assert exc_info.value.status_code == 400
        await client.close()

    async def test_server_error_wrapped(self):
        def handler(request):
            if request.url.path == "/api":
                return httpx.Response(200, json=API_DESCRIPTOR)
            return httpx.Response(503)

        client = _client(handler)
        with pytest.raises(BackendRequestFailure):
            await client.query("query { a }")
        await client.close()

    def test_build_query_url(self):
        client = PrismicGraphQLClient("https://my-repo.prismic.io/graphql")
        url = client.build_query_url('query { a(where: {t: "x y"}) }')
        assert url.startswith("https://my-repo.cdn.prismic.io/graphql?query=")
        assert urllib.parse.unquote(url.split("query=")[1]) == 'query{a(where:{t: "x y"})}'
