"""
Schema domain entities discovered from the backend type system.

A DocumentType is the filterable view of one Prismic custom type: the root
field used to list it, its queryable string fields and the field used for a
text preview. Instances are built once per session by the SchemaIntrospector
and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Naming conventions of the Prismic GraphQL API
FILTER_TYPE_PREFIX = "Where"
FULLTEXT_SUFFIX = "_fulltext"
STRING_TYPE_NAME = "String"


def fulltext_name(base_name: str) -> str:
    """Return the full-text variant name of a field (``title`` -> ``title_fulltext``)."""
    return base_name + FULLTEXT_SUFFIX


def strip_fulltext_suffix(name: str) -> str:
    """Return the base name of a field, with any full-text suffix removed."""
    if name.endswith(FULLTEXT_SUFFIX):
        return name[: -len(FULLTEXT_SUFFIX)]
    return name


def external_type_name(input_type_name: str) -> str:
    """
    Derive the listing root field from a filter input type name.

    ``WhereArticle`` -> ``allArticles``
    """
    return f"all{input_type_name.removeprefix(FILTER_TYPE_PREFIX)}s"


@dataclass(frozen=True, slots=True)
class SchemaField:
    """One queryable string field, keyed by its base name."""

    name: str
    supports_exact: bool = False
    supports_fulltext: bool = False

    @property
    def fulltext_name(self) -> str:
        return fulltext_name(self.name)


@dataclass(frozen=True)
class DocumentType:
    """A filterable content type and its field capabilities."""

    name: str
    input_type: str
    summary_field: str | None = None
    fields: Mapping[str, SchemaField] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the field mapping so the schema stays read-only once published
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash((self.name, self.input_type))

    def has_exact(self, field_name: str) -> bool:
        entry = self.fields.get(field_name)
        return bool(entry and entry.supports_exact)

    def has_fulltext(self, field_name: str) -> bool:
        entry = self.fields.get(field_name)
        return bool(entry and entry.supports_fulltext)

    def covers(self, field_name: str) -> bool:
        """Whether the type can filter on ``field_name`` (exact or full-text)."""
        return self.has_exact(field_name) or self.has_fulltext(field_name)

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)
