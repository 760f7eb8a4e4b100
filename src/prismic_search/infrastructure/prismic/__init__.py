"""Prismic GraphQL integration."""

from .client import INTEGRATION_REF_HEADER, REF_HEADER, PrismicGraphQLClient
from .endpoint import (
    PrismicEndpoints,
    compact_query,
    compact_query_url,
    parse_prismic_endpoint,
    resolve_endpoints,
)

__all__ = [
    "PrismicGraphQLClient",
    "REF_HEADER",
    "INTEGRATION_REF_HEADER",
    "PrismicEndpoints",
    "parse_prismic_endpoint",
    "resolve_endpoints",
    "compact_query",
    "compact_query_url",
]
