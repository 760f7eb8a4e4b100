"""
Prismic GraphQL Client

Runs GraphQL documents against a Prismic repository.

API Documentation: https://prismic.io/docs/graphql

Request shaping:
- Queries go out as GET requests (CDN cacheable), document in the ``query``
  URL parameter, compacted by ``compact_query_url``
- Every request carries the master ref from the API descriptor
  (``Prismic-ref``), the integration field ref when the repository has one,
  and ``Authorization: Token ...`` when an access token is configured
- The API descriptor is fetched once and shared by all requests
"""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from typing import Any

import httpx

from prismic_search.infrastructure.http.base_client import BaseAPIClient
from prismic_search.infrastructure.prismic.endpoint import compact_query_url, resolve_endpoints
from prismic_search.shared.exceptions import BackendRequestFailure, PrismicSearchError

logger = logging.getLogger(__name__)

USER_AGENT = "prismic-search-mcp/0.1"
REF_HEADER = "Prismic-ref"
INTEGRATION_REF_HEADER = "Prismic-integration-field-ref"


class PrismicGraphQLClient(BaseAPIClient):
    """
    Prismic GraphQL API client.

    Usage:
        async with PrismicGraphQLClient("https://my-repo.prismic.io/graphql") as client:
            data = await client.query("query types { __schema { types { name } } }")
    """

    _service_name = "Prismic"

    def __init__(
        self,
        endpoint: str,
        repository_name: str | None = None,
        access_token: str | None = None,
        timeout: float = 30.0,
        min_interval: float = 0.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            endpoint: GraphQL endpoint (Prismic-hosted or custom)
            repository_name: Repository name, required for custom endpoints
            access_token: Optional access token for private repositories
            timeout: Request timeout in seconds
            min_interval: Minimum seconds between requests
            transport: Optional httpx transport (tests)

        Raises:
            ConfigurationError: Custom endpoint without a repository name
        """
        self._endpoints = resolve_endpoints(endpoint, repository_name)
        self._access_token = access_token
        self._api_info: dict[str, Any] | None = None
        self._api_lock = asyncio.Lock()
        super().__init__(
            timeout=timeout,
            min_interval=min_interval,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            transport=transport,
        )

    @property
    def api_url(self) -> str:
        return self._endpoints.api_url

    @property
    def graphql_url(self) -> str:
        return self._endpoints.graphql_url

    # ── Request context ─────────────────────────────────────────────────

    async def api_descriptor(self) -> dict[str, Any]:
        """Fetch (once) the repository API descriptor holding the refs."""
        if self._api_info is not None:
            return self._api_info

        async with self._api_lock:
            if self._api_info is None:
                url = self.api_url
                if self._access_token:
                    url = f"{url}?{urllib.parse.urlencode({'access_token': self._access_token})}"
                info = await self._make_request(url)
                if not isinstance(info, dict):
                    msg = "Prismic API descriptor is not a JSON object"
                    raise BackendRequestFailure(msg)
                self._api_info = info
                logger.info(f"Loaded Prismic API descriptor from {self.api_url}")
        return self._api_info

    async def request_headers(self) -> dict[str, str]:
        """Ref and authorization headers for one GraphQL request."""
        api = await self.api_descriptor()
        master = next((r for r in api.get("refs") or [] if r.get("isMasterRef")), None)
        if master is None or not master.get("ref"):
            msg = "Prismic API descriptor has no master ref"
            raise BackendRequestFailure(msg)

        headers = {REF_HEADER: master["ref"]}
        if api.get("integrationFieldRef"):
            headers[INTEGRATION_REF_HEADER] = api["integrationFieldRef"]
        if self._access_token:
            headers["Authorization"] = f"Token {self._access_token}"
        return headers

    def build_query_url(self, document: str) -> str:
        """GET URL carrying ``document`` in its compacted ``query`` parameter."""
        url = f"{self.graphql_url}?query={urllib.parse.quote(document, safe='')}"
        return compact_query_url(url)

    # ── GraphQL ─────────────────────────────────────────────────────────

    async def query(self, document: str) -> dict[str, Any]:
        """
        Run a GraphQL document and return its ``data`` member.

        Raises:
            BackendRequestFailure: Transport failure, or errors without data
        """
        try:
            headers = await self.request_headers()
            payload = await self._make_request(self.build_query_url(document), headers=headers)
        except BackendRequestFailure:
            raise
        except PrismicSearchError as e:
            msg = f"Prismic request failed: {e}"
            raise BackendRequestFailure(msg) from e

        if not isinstance(payload, dict):
            msg = "GraphQL response is not a JSON object"
            raise BackendRequestFailure(msg)

        errors = payload.get("errors") or []
        data = payload.get("data")
        if errors:
            messages = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            if data is None:
                msg = f"GraphQL errors: {messages}"
                raise BackendRequestFailure(msg, errors=errors)
            logger.warning(f"GraphQL partial errors: {messages}")
        if not isinstance(data, dict):
            msg = "GraphQL response has no data"
            raise BackendRequestFailure(msg)
        return data
