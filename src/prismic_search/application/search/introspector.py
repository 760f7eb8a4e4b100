"""
SchemaIntrospector - Discover filterable document types once per session.

Discovery takes two sequential round trips:
1. ``__schema { types { name } }`` -> keep the ``Where*`` filter input types
2. one aliased ``__type(name: ...)`` lookup per filter type -> input fields

Only ``String`` fields are queryable. ``X`` and ``X_fulltext`` fold into one
SchemaField ``X``; a lone ``X_fulltext`` is a full-text-only field ``X``.

Guarantees:
- The schema is published whole or not at all (SchemaUnavailableError)
- The result is memoized; concurrent callers share one in-flight discovery
- A failed discovery is not cached, the next call tries again
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from prismic_search.application.search.query_compiler import TYPES_QUERY, build_input_fields_query
from prismic_search.domain.entities import (
    FILTER_TYPE_PREFIX,
    FULLTEXT_SUFFIX,
    STRING_TYPE_NAME,
    DocumentType,
    SchemaField,
    external_type_name,
    strip_fulltext_suffix,
)
from prismic_search.shared.exceptions import PrismicSearchError, SchemaUnavailableError

if TYPE_CHECKING:
    from prismic_search.application.search.executor import GraphQLExecutor

logger = logging.getLogger(__name__)


def filter_type_names(schema_data: Mapping[str, Any]) -> list[str]:
    """Names of the ``Where*`` filter input types from a ``__schema`` response."""
    try:
        types = schema_data["__schema"]["types"]
        names = [t["name"] for t in types]
    except (KeyError, TypeError) as e:
        msg = f"Unexpected __schema response shape: {e!r}"
        raise SchemaUnavailableError(msg) from e
    return [n for n in names if isinstance(n, str) and n.startswith(FILTER_TYPE_PREFIX)]


def build_document_type(input_type: str, input_fields: Sequence[Mapping[str, Any]]) -> DocumentType:
    """Fold the string input fields of one filter type into a DocumentType."""
    string_names = [
        f["name"] for f in input_fields if (f.get("type") or {}).get("name") == STRING_TYPE_NAME and f.get("name")
    ]

    fields: dict[str, SchemaField] = {}
    for name in string_names:
        base = strip_fulltext_suffix(name)
        current = fields.get(base, SchemaField(base))
        if name.endswith(FULLTEXT_SUFFIX):
            current = SchemaField(base, supports_exact=current.supports_exact, supports_fulltext=True)
        else:
            current = SchemaField(base, supports_exact=True, supports_fulltext=current.supports_fulltext)
        fields[base] = current

    # Preview: first full-text-capable field, else first string field
    fulltext_bases = [strip_fulltext_suffix(n) for n in string_names if n.endswith(FULLTEXT_SUFFIX)]
    summary = fulltext_bases[0] if fulltext_bases else (string_names[0] if string_names else None)

    return DocumentType(
        name=external_type_name(input_type),
        input_type=input_type,
        summary_field=summary,
        fields=fields,
    )


def build_document_types(type_names: Sequence[str], inputs_data: Mapping[str, Any]) -> tuple[DocumentType, ...]:
    """Build every DocumentType from the combined ``__type`` response."""
    document_types = []
    for name in type_names:
        try:
            input_fields = inputs_data[name]["inputFields"]
        except (KeyError, TypeError) as e:
            msg = f"Missing input fields for {name}"
            raise SchemaUnavailableError(msg) from e
        if not isinstance(input_fields, list):
            msg = f"Unexpected inputFields shape for {name}"
            raise SchemaUnavailableError(msg)
        try:
            document_types.append(build_document_type(name, input_fields))
        except (AttributeError, TypeError) as e:
            msg = f"Unexpected input field entry for {name}: {e!r}"
            raise SchemaUnavailableError(msg) from e
    return tuple(document_types)


class SchemaIntrospector:
    """
    Memoizing schema discovery over a GraphQLExecutor.

    Usage:
        introspector = SchemaIntrospector(client)
        types = await introspector.discover()
    """

    def __init__(self, executor: GraphQLExecutor) -> None:
        self._executor = executor
        self._types: tuple[DocumentType, ...] | None = None
        self._inflight: asyncio.Task[tuple[DocumentType, ...]] | None = None

    @property
    def types(self) -> tuple[DocumentType, ...] | None:
        """Discovered types, or None until a discovery has succeeded."""
        return self._types

    @property
    def is_available(self) -> bool:
        return self._types is not None

    async def discover(self) -> tuple[DocumentType, ...]:
        """
        Discover the filterable document types.

        Raises:
            SchemaUnavailableError: If either introspection round trip fails
        """
        if self._types is not None:
            return self._types

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._discover())
        task = self._inflight

        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._inflight is task and (task.cancelled() or task.exception() is not None):
                self._inflight = None

    async def _discover(self) -> tuple[DocumentType, ...]:
        try:
            schema_data = await self._executor.query(TYPES_QUERY)
            type_names = filter_type_names(schema_data)
            if type_names:
                inputs_data = await self._executor.query(build_input_fields_query(type_names))
                types = build_document_types(type_names, inputs_data)
            else:
                types = ()
        except SchemaUnavailableError:
            logger.warning("Schema discovery failed", exc_info=True)
            raise
        except PrismicSearchError as e:
            logger.warning(f"Schema discovery failed: {e}")
            msg = f"Introspection request failed: {e}"
            raise SchemaUnavailableError(msg) from e

        self._types = types
        logger.info(f"Discovered {len(types)} filterable document type(s)")
        return types
