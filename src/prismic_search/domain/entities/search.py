"""
Search domain entities.

- ResolvedType: a DocumentType bound to the concrete field names of one search
- ResultRecord / RichTextFragment: one matched document, uniform across types
- SearchStatus / SearchOutcome: the sequence-numbered result of a trigger
- ViewState / SearchView: the explicit view state machine
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import DocumentType


@dataclass(frozen=True)
class ResolvedType:
    """
    A document type annotated for one constraint set.

    ``where`` maps the concrete backend field (exact or full-text) to the
    literal value, in constraint order.
    """

    document_type: DocumentType
    where: Mapping[str, str]

    @property
    def name(self) -> str:
        return self.document_type.name

    @property
    def summary_field(self) -> str | None:
        return self.document_type.summary_field


class SummaryKind(Enum):
    """Shape of a record's preview text."""

    ABSENT = "absent"
    TEXT = "text"
    RICH_TEXT = "rich_text"


@dataclass(frozen=True, slots=True)
class RichTextFragment:
    """First block of a rich-text field."""

    text: str
    block_type: str | None = None


@dataclass(frozen=True)
class ResultRecord:
    """One matched document."""

    id: str
    type: str
    last_publication_date: str | None = None
    summary: str | RichTextFragment | None = None

    @property
    def summary_kind(self) -> SummaryKind:
        if self.summary is None:
            return SummaryKind.ABSENT
        if isinstance(self.summary, RichTextFragment):
            return SummaryKind.RICH_TEXT
        return SummaryKind.TEXT

    @property
    def published_at(self) -> datetime | None:
        """Parsed ``last_publication_date`` (``None`` if missing or malformed)."""
        if not self.last_publication_date:
            return None
        try:
            return datetime.fromisoformat(self.last_publication_date)
        except ValueError:
            return None


class SearchStatus(Enum):
    """What a trigger did."""

    RESULTS = "results"  # Search ran and its records were published
    NO_ELIGIBLE_TYPE = "no_eligible_type"  # Empty result, no network call
    NOT_A_QUERY = "not_a_query"  # Input has no separator, nothing issued
    UNAVAILABLE = "unavailable"  # Schema could not be discovered
    RESTORED = "restored"  # Empty input, original view restored
    STALE = "stale"  # Superseded by a newer trigger, discarded


@dataclass(frozen=True)
class SearchOutcome:
    """Sequence-numbered outcome of one trigger."""

    seq: int
    raw: str
    status: SearchStatus
    records: tuple[ResultRecord, ...] = ()

    @property
    def published(self) -> bool:
        return self.status in (SearchStatus.RESULTS, SearchStatus.NO_ELIGIBLE_TYPE, SearchStatus.RESTORED)


class ViewState(Enum):
    IDLE = "idle"
    SHOWING_RESULTS = "showing_results"
    CLEARED = "cleared"


@dataclass(frozen=True)
class SearchView:
    """Current view: the original listing, search results or a restored listing."""

    state: ViewState = ViewState.IDLE
    seq: int | None = None
    raw: str | None = None
    records: tuple[ResultRecord, ...] = field(default_factory=tuple)

    def show(self, seq: int, raw: str, records: tuple[ResultRecord, ...]) -> SearchView:
        return SearchView(ViewState.SHOWING_RESULTS, seq=seq, raw=raw, records=records)

    def clear(self) -> SearchView:
        return SearchView(ViewState.CLEARED)
