"""Tests for DI container and server wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from dependency_injector import providers

from prismic_search.application.saved_queries import SavedQueryStore
from prismic_search.application.search import AdvancedSearchService, SchemaIntrospector
from prismic_search.container import ApplicationContainer
from prismic_search.infrastructure.prismic import PrismicGraphQLClient
from prismic_search.shared.exceptions import ConfigurationError


def _config(tmp_path, **overrides):
    config = {
        "endpoint": "https://my-repo.prismic.io/graphql",
        "repository_name": None,
        "access_token": None,
        "data_dir": str(tmp_path),
        "page_size": 50,
    }
    config.update(overrides)
    return config


class TestApplicationContainer:
    def test_container_creation(self, tmp_path):
        container = ApplicationContainer()
        container.config.from_dict(_config(tmp_path))
        assert container.config.endpoint() == "https://my-repo.prismic.io/graphql"
        assert container.config.page_size() == 50

    def test_provider_types(self, tmp_path):
        container = ApplicationContainer()
        container.config.from_dict(_config(tmp_path))
        assert isinstance(container.graphql_client(), PrismicGraphQLClient)
        assert isinstance(container.introspector(), SchemaIntrospector)
        assert isinstance(container.search_service(), AdvancedSearchService)
        assert isinstance(container.saved_query_store(), SavedQueryStore)

    def test_singletons(self, tmp_path):
        container = ApplicationContainer()
        container.config.from_dict(_config(tmp_path))
        assert container.search_service() is container.search_service()
        assert container.graphql_client() is container.graphql_client()

    def test_override_provider(self, tmp_path):
        container = ApplicationContainer()
        container.config.from_dict(_config(tmp_path))

        mock_client = MagicMock()
        container.graphql_client.override(providers.Object(mock_client))
        assert container.graphql_client() is mock_client
        container.graphql_client.reset_override()

    def test_custom_endpoint_without_repository(self, tmp_path):
        container = ApplicationContainer()
        container.config.from_dict(_config(tmp_path, endpoint="https://example.com/graphql"))
        with pytest.raises(ConfigurationError):
            container.graphql_client()


class TestCreateServer:
    def test_create_server(self, tmp_path):
        from prismic_search.presentation.mcp_server import create_server, get_container

        server = create_server("https://my-repo.prismic.io/graphql", data_dir=str(tmp_path), page_size=10)

        assert server.name == "prismic-search"
        service = get_container().search_service()
        assert service._page_size == 10

    def test_create_server_bad_endpoint(self, tmp_path):
        from prismic_search.presentation.mcp_server import create_server

        with pytest.raises(ConfigurationError):
            create_server("https://example.com/graphql", data_dir=str(tmp_path))


class TestPageSizeFromEnv:
    def test_default(self, monkeypatch):
        from prismic_search.presentation.mcp_server.server import _page_size_from_env

        monkeypatch.delenv("PRISMIC_SEARCH_PAGE_SIZE", raising=False)
        assert _page_size_from_env() == 50

    def test_value(self, monkeypatch):
        from prismic_search.presentation.mcp_server.server import _page_size_from_env

        monkeypatch.setenv("PRISMIC_SEARCH_PAGE_SIZE", "20")
        assert _page_size_from_env() == 20

    @pytest.mark.parametrize("raw", ["zero", "0", "-3"])
    def test_invalid(self, monkeypatch, raw):
        from prismic_search.presentation.mcp_server.server import _page_size_from_env
        from prismic_search.shared.exceptions import InvalidParameterError

        monkeypatch.setenv("PRISMIC_SEARCH_PAGE_SIZE", raw)
        with pytest.raises(InvalidParameterError):
            _page_size_from_env()
