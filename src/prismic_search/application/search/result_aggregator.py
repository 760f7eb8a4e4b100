"""
ResultAggregator - Flatten the aggregate search response.

The response ``data`` has one key per sub-selection, in emission order:

    {
      "allArticles": {"edges": [{"node": {"summary": ..., "_meta": {...}}}]},
      "allPages":    {"edges": [...]},
    }

Architecture Decision:
    ResultAggregator does NOT make API calls and does NOT rank. Records come
    out in type-emission order, then backend order within a type.

    ``summary`` keeps its shape: a plain string, the first block of a
    rich-text field (RichTextFragment) or None. Renderers pick the label.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from prismic_search.application.search.query_compiler import META_FIELD, SUMMARY_ALIAS
from prismic_search.domain.entities import ResultRecord, RichTextFragment
from prismic_search.shared.exceptions import ParseError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


def _summary_from(value: Any) -> str | RichTextFragment | None:
    """Normalize a summary projection to its discriminated form."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        if not value:
            return None
        first = value[0]
        if isinstance(first, dict):
            return RichTextFragment(text=str(first.get("text") or ""), block_type=first.get("type"))
        return RichTextFragment(text=str(first))
    if isinstance(value, (int, float)):
        return str(value)
    # Links, images and other objects have no preview text
    return None


def record_from_node(node: Mapping[str, Any]) -> ResultRecord:
    """Build one ResultRecord from a response node."""
    meta = node.get(META_FIELD)
    if not isinstance(meta, dict) or "id" not in meta:
        msg = f"node without {META_FIELD}.id"
        raise ParseError(msg, source="search")
    return ResultRecord(
        id=str(meta["id"]),
        type=str(meta.get("type") or ""),
        last_publication_date=meta.get("lastPublicationDate"),
        summary=_summary_from(node.get(SUMMARY_ALIAS)),
    )


class ResultAggregator:
    """Turns the per-type response of one aggregate search into one record list."""

    def aggregate(
        self,
        data: Mapping[str, Any],
        root_fields: Sequence[str] | None = None,
    ) -> list[ResultRecord]:
        """
        Flatten ``data`` into records.

        Args:
            data: The ``data`` member of the GraphQL response
            root_fields: Emission order of the sub-selections. When omitted the
                         response key order is used.

        Raises:
            ParseError: If a type's payload is not an ``edges``/``node`` listing
        """
        keys = list(root_fields) if root_fields is not None else list(data)
        records: list[ResultRecord] = []

        for key in keys:
            listing = data.get(key)
            if listing is None:
                logger.warning(f"Search response has no entry for {key}")
                continue
            edges = listing.get("edges") if isinstance(listing, dict) else None
            if not isinstance(edges, list):
                msg = f"{key} is not an edges listing"
                raise ParseError(msg, source="search")
            for edge in edges:
                node = edge.get("node") if isinstance(edge, dict) else None
                if not isinstance(node, dict):
                    msg = f"{key} has an edge without node"
                    raise ParseError(msg, source="search")
                records.append(record_from_node(node))

        return records


def aggregate(data: Mapping[str, Any], root_fields: Sequence[str] | None = None) -> list[ResultRecord]:
    """Module-level shortcut for ``ResultAggregator().aggregate``."""
    return ResultAggregator().aggregate(data, root_fields)
