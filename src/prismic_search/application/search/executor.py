"""Port for running GraphQL documents against the content backend."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GraphQLExecutor(Protocol):
    """
    Anything that runs a GraphQL document and returns its ``data`` member.

    Implementations raise BackendRequestFailure (or another APIError) when
    the round trip fails or the response carries errors without data.
    """

    async def query(self, document: str) -> dict[str, Any]: ...
