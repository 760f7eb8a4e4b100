"""
Prismic endpoint resolution and query URL shaping.

- ``resolve_endpoints``: GraphQL endpoint -> (API descriptor URL, GraphQL URL),
  forcing the CDN host for Prismic-hosted repositories
- ``compact_query``: lossless GraphQL whitespace compaction
- ``compact_query_url``: apply ``compact_query`` to the ``query`` parameter of
  a GET URL (queries travel in the URL, so padding costs URL length)
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass

from prismic_search.shared.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PRISMIC_ENDPOINT_RE = re.compile(r"^https?://([^.]+)\.(?:cdn\.)?(wroom\.(?:test|io)|prismic\.io)/graphql/?")

CUSTOM_ENDPOINT_HELP = (
    "Since you are using a custom GraphQL endpoint, you need to provide your repository name:\n"
    "  PRISMIC_GRAPHQL_ENDPOINT=https://mycustomdomain.com/graphql\n"
    "  PRISMIC_REPOSITORY=my-prismic-repository"
)


@dataclass(frozen=True, slots=True)
class PrismicEndpoints:
    """Resolved URLs for one repository."""

    api_url: str
    graphql_url: str


def parse_prismic_endpoint(endpoint: str) -> str | None:
    """CDN base URL for a Prismic-hosted GraphQL endpoint, None for custom endpoints."""
    match = PRISMIC_ENDPOINT_RE.match(endpoint)
    if match is None:
        return None
    repository, domain = match.groups()
    return f"https://{repository}.cdn.{domain}"


def resolve_endpoints(endpoint: str, repository_name: str | None = None) -> PrismicEndpoints:
    """
    Resolve the API descriptor and GraphQL URLs.

    Raises:
        ConfigurationError: Custom endpoint without a repository name
    """
    prismic_base = parse_prismic_endpoint(endpoint)

    if prismic_base and repository_name:
        logger.warning("repository_name is ignored since the GraphQL endpoint is a Prismic endpoint")

    if prismic_base:
        return PrismicEndpoints(api_url=f"{prismic_base}/api", graphql_url=f"{prismic_base}/graphql")

    if not repository_name:
        raise ConfigurationError(CUSTOM_ENDPOINT_HELP)

    return PrismicEndpoints(api_url=f"https://{repository_name}.cdn.prismic.io/api", graphql_url=endpoint)


# =============================================================================
# Query compaction
# =============================================================================

_BRACES = "{}"
_BLOCK_QUOTE = '"""'


def compact_query(document: str) -> str:
    """
    Collapse insignificant whitespace in a GraphQL document.

    Whitespace runs become one space, whitespace next to ``{``/``}`` is
    removed and comments are dropped. String and block string literals are
    copied verbatim.
    """
    out: list[str] = []
    pending_space = False
    i = 0
    n = len(document)

    while i < n:
        ch = document[i]

        if ch.isspace() or ch == "\ufeff":
            pending_space = True
            i += 1
            continue

        if ch == "#":
            while i < n and document[i] not in "\r\n":
                i += 1
            pending_space = True
            continue

        if pending_space and out and out[-1][-1] not in _BRACES and ch not in _BRACES:
            out.append(" ")
        pending_space = False

        if document.startswith(_BLOCK_QUOTE, i):
            end = i + 3
            while end < n:
                if document.startswith('\\"""', end):
                    end += 4
                    continue
                if document.startswith(_BLOCK_QUOTE, end):
                    end += 3
                    break
                end += 1
            out.append(document[i:end])
            i = end
            continue

        if ch == '"':
            end = i + 1
            while end < n and document[end] != '"':
                end += 2 if document[end] == "\\" else 1
            end = min(end + 1, n)
            out.append(document[i:end])
            i = end
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def compact_query_url(url: str) -> str:
    """Compact the ``query`` parameter of a URL, leaving everything else untouched."""
    path, sep, query_string = url.partition("?")
    if not sep:
        return url

    params = []
    for param in query_string.split("&"):
        name, eq, value = param.partition("=")
        if name == "query" and eq:
            document = urllib.parse.unquote_plus(value)
            value = urllib.parse.quote(compact_query(document), safe="")
            params.append(f"{name}={value}")
        else:
            params.append(param)

    return f"{path}?{'&'.join(params)}"
