"""
FieldResolver - Decide which document types can answer a search.

Rules:
1. A type is eligible iff every constraint field is available on it, either
   as an exact field ``k`` or as a full-text field ``k_fulltext``.
2. Per eligible type and constraint, the full-text variant is used only when
   the exact variant is missing (exact is preferred when both exist).
   A key already naming a full-text field (``title_fulltext``) is used as is,
   forcing a contains-match.
3. Ineligible types are silently excluded. An empty result is not an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prismic_search.domain.entities import FULLTEXT_SUFFIX, ResolvedType, fulltext_name, strip_fulltext_suffix
from prismic_search.shared.exceptions import NoEligibleTypeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from prismic_search.domain.entities import DocumentType

logger = logging.getLogger(__name__)


def resolve_field(document_type: DocumentType, field_name: str) -> str | None:
    """Concrete backend field for ``field_name`` on ``document_type`` (None if unavailable)."""
    if field_name.endswith(FULLTEXT_SUFFIX) and document_type.has_fulltext(strip_fulltext_suffix(field_name)):
        return field_name
    if document_type.has_exact(field_name):
        return field_name
    if document_type.has_fulltext(field_name):
        return fulltext_name(field_name)
    return None


def resolve_type(document_type: DocumentType, constraints: Mapping[str, str]) -> ResolvedType | None:
    """Bind one type to a constraint set, or None if it cannot satisfy every constraint."""
    where: dict[str, str] = {}
    for field_name, value in constraints.items():
        concrete = resolve_field(document_type, field_name)
        if concrete is None:
            return None
        where[concrete] = value
    return ResolvedType(document_type=document_type, where=where)


def resolve_types(types: Iterable[DocumentType], constraints: Mapping[str, str]) -> list[ResolvedType]:
    """Eligible types for ``constraints``, in discovery order."""
    resolved = [r for r in (resolve_type(t, constraints) for t in types) if r is not None]
    logger.debug(f"Resolved {len(resolved)} eligible type(s) for fields {list(constraints)}")
    return resolved


def require_eligible(types: Iterable[DocumentType], constraints: Mapping[str, str]) -> list[ResolvedType]:
    """Like ``resolve_types`` but raises NoEligibleTypeError on an empty result."""
    resolved = resolve_types(types, constraints)
    if not resolved:
        raise NoEligibleTypeError(list(constraints))
    return resolved
