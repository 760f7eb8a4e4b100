"""
QueryParser - Operator input to search constraints.

Grammar:
    query   := segment ("," segment)*
    segment := key ":" value

Whitespace around keys and values is trimmed. A segment is split on its first
separator, so values may themselves contain colons ("url: https://...").
Segments without a separator, or with an empty key, are dropped.

Architecture Decision:
    Parsing is pure local processing. Whether the input is a query at all is a
    separate syntactic gate (``is_valid_query``): "hello" parses to ``{}`` but
    is "not yet a query" and must never reach the backend.

Example:
    >>> parse_query("first_name: Mark, last_name: Lee")
    {'first_name': 'Mark', 'last_name': 'Lee'}
    >>> is_valid_query("Mark")
    False
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prismic_search.domain.entities import strip_fulltext_suffix

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prismic_search.domain.entities import DocumentType

PAIR_SEPARATOR = ","
KEY_VALUE_SEPARATOR = ":"


def is_valid_query(raw: str) -> bool:
    """Syntactic validity gate: a query needs at least one ``:``."""
    return KEY_VALUE_SEPARATOR in raw


def parse_query(raw: str) -> dict[str, str]:
    """
    Parse raw operator input into an ordered ``field -> value`` mapping.

    A field given twice keeps its first position and takes the last value.
    """
    constraints: dict[str, str] = {}
    for segment in raw.split(PAIR_SEPARATOR):
        key, sep, value = segment.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        constraints[key] = value.strip()
    return constraints


# =============================================================================
# Autofill
# =============================================================================


def last_segment(raw: str) -> str:
    """The segment being typed: text after the last comma, trimmed."""
    return raw.split(PAIR_SEPARATOR)[-1].strip()


def suggest_fields(types: Iterable[DocumentType], raw: str) -> list[str]:
    """
    Field names containing the segment currently being typed.

    Names are de-duplicated across types and keep discovery order. An empty
    segment yields no suggestions.
    """
    fragment = last_segment(raw)
    if not fragment:
        return []

    seen: dict[str, None] = {}
    for document_type in types:
        for name in document_type.fields:
            base = strip_fulltext_suffix(name)
            if fragment in base:
                seen.setdefault(base, None)
    return list(seen)


def apply_autofill(raw: str, field_name: str) -> str:
    """Replace the segment being typed with ``field_name:``."""
    head = raw.split(PAIR_SEPARATOR)[:-1]
    return PAIR_SEPARATOR.join([*head, field_name + KEY_VALUE_SEPARATOR])
