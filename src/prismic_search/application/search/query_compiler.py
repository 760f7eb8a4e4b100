"""
QueryCompiler - Typed builder for the GraphQL documents sent to Prismic.

Builds three documents:
1. ``TYPES_QUERY``: list every type name of the schema
2. ``build_input_fields_query``: one aliased ``__type`` lookup per filter type
3. ``compile_search``: one aggregate search, one sub-selection per eligible type

Wire format:
    Prismic expects inline literal arguments (no variables payload) and the
    object keys of those literals unquoted: ``where: {title_fulltext: "news"}``.
    All literal serialization goes through ``to_graphql_literal``.

Example:
    >>> query = compile_search([resolved_article])
    >>> print(query.render())
    query search {
      allArticles(first: 50, where: {category: "news"}) {
        edges {
          node {
            summary: title
            _meta {
              id
              type
              lastPublicationDate
            }
          }
        }
      }
    }
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from prismic_search.domain.entities import ResolvedType

DEFAULT_PAGE_SIZE = 50
SUMMARY_ALIAS = "summary"
META_FIELD = "_meta"
META_SELECTION: tuple[str, ...] = ("id", "type", "lastPublicationDate")

TYPES_QUERY = """query types {
  __schema {
    types {
      name
    }
  }
}"""

_INDENT = "  "


# =============================================================================
# Literal serialization
# =============================================================================


def to_graphql_literal(value: Any) -> str:
    """
    Serialize a Python value as an inline GraphQL literal.

    Object keys are emitted unquoted; values keep their native literal form:
    strings quoted and escaped, numbers bare, ``True``/``False`` as
    ``true``/``false`` and ``None`` as ``null``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"Cannot serialize non-finite float {value!r} as a GraphQL literal"
            raise ValueError(msg)
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{key}: {to_graphql_literal(item)}" for key, item in value.items())
        return "{" + pairs + "}"
    if isinstance(value, Sequence):
        return "[" + ", ".join(to_graphql_literal(item) for item in value) + "]"
    msg = f"Cannot serialize {type(value).__name__} as a GraphQL literal"
    raise TypeError(msg)


def _render_block(lines: list[str], depth: int) -> str:
    pad = _INDENT * depth
    return "\n".join(pad + line for line in lines)


# =============================================================================
# Introspection
# =============================================================================


def build_input_fields_query(type_names: Sequence[str]) -> str:
    """
    One combined introspection query for the input fields of ``type_names``.

    Each lookup is aliased by its type name so the response is keyed the same
    way.
    """
    lookups = []
    for name in type_names:
        lookups.append(
            _render_block(
                [
                    f"{name}: __type(name: {json.dumps(name)}) {{",
                    f"{_INDENT}inputFields {{",
                    f"{_INDENT * 2}name",
                    f"{_INDENT * 2}type {{",
                    f"{_INDENT * 3}name",
                    f"{_INDENT * 2}}}",
                    f"{_INDENT}}}",
                    "}",
                ],
                1,
            )
        )
    return "query inputs {\n" + "\n".join(lookups) + "\n}"


# =============================================================================
# Search
# =============================================================================


@dataclass(frozen=True)
class SearchSelection:
    """One sub-selection of the aggregate search: a bounded listing of one type."""

    root_field: str
    where: Mapping[str, Any]
    summary_field: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_resolved(cls, resolved: ResolvedType, page_size: int = DEFAULT_PAGE_SIZE) -> SearchSelection:
        return cls(
            root_field=resolved.name,
            where=dict(resolved.where),
            summary_field=resolved.summary_field,
            page_size=page_size,
        )

    @property
    def arguments(self) -> dict[str, Any]:
        return {"first": self.page_size, "where": self.where}

    def render(self, depth: int = 1) -> str:
        args = ", ".join(f"{name}: {to_graphql_literal(value)}" for name, value in self.arguments.items())
        node: list[str] = []
        if self.summary_field:
            node.append(f"{SUMMARY_ALIAS}: {self.summary_field}")
        node.append(f"{META_FIELD} {{")
        node.extend(_INDENT + name for name in META_SELECTION)
        node.append("}")

        lines = [
            f"{self.root_field}({args}) {{",
            f"{_INDENT}edges {{",
            f"{_INDENT * 2}node {{",
            *(_INDENT * 3 + line for line in node),
            f"{_INDENT * 2}}}",
            f"{_INDENT}}}",
            "}",
        ]
        return _render_block(lines, depth)


@dataclass(frozen=True)
class SearchQuery:
    """The aggregate search document: every sub-selection under one root."""

    selections: tuple[SearchSelection, ...] = field(default_factory=tuple)
    operation_name: str = "search"

    @property
    def root_fields(self) -> list[str]:
        return [s.root_field for s in self.selections]

    def render(self) -> str:
        body = "\n".join(s.render(depth=1) for s in self.selections)
        return f"query {self.operation_name} {{\n{body}\n}}"

    def __str__(self) -> str:
        return self.render()


def compile_search(resolved_types: Sequence[ResolvedType], page_size: int = DEFAULT_PAGE_SIZE) -> SearchQuery:
    """Compile eligible types into one aggregate query, in resolution order."""
    if page_size < 1:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    return SearchQuery(selections=tuple(SearchSelection.from_resolved(r, page_size) for r in resolved_types))
