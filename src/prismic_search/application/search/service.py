"""
AdvancedSearchService - One trigger per operator input.

Flow of ``trigger(raw)``:
    empty input         -> RESTORED (view goes back to the original listing)
    no ":" in input     -> NOT_A_QUERY (nothing issued)
    schema unavailable  -> UNAVAILABLE (silent no-op, discovery retried later)
    no eligible type    -> NO_ELIGIBLE_TYPE (empty result, no network call)
    otherwise           -> one aggregate round trip -> RESULTS

Ordering:
    Every trigger takes a monotonically increasing sequence number. Searches
    are never cancelled; when one completes after a newer trigger was issued
    its outcome is STALE and nothing is published.

Errors:
    BackendRequestFailure from the search round trip propagates to the caller,
    unless a newer trigger was issued meanwhile (then the outcome is STALE).
    There is no retry at this layer.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from prismic_search.application.search.field_resolver import resolve_types
from prismic_search.application.search.query_compiler import DEFAULT_PAGE_SIZE, SearchQuery, compile_search
from prismic_search.application.search.query_parser import is_valid_query, parse_query, suggest_fields
from prismic_search.application.search.result_aggregator import ResultAggregator
from prismic_search.domain.entities import SearchOutcome, SearchStatus, SearchView, ViewState
from prismic_search.shared.exceptions import PrismicSearchError, SchemaUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from prismic_search.application.search.executor import GraphQLExecutor
    from prismic_search.application.search.introspector import SchemaIntrospector
    from prismic_search.domain.entities import DocumentType, ResultRecord

logger = logging.getLogger(__name__)


class AdvancedSearchService:
    """
    Schema-driven search over every filterable document type.

    Args:
        introspector: Memoizing schema discovery
        executor: GraphQL transport used for the search round trip
        page_size: Maximum documents per type
        on_publish: Optional rendering callback, called with each published outcome
    """

    def __init__(
        self,
        introspector: SchemaIntrospector,
        executor: GraphQLExecutor,
        page_size: int = DEFAULT_PAGE_SIZE,
        aggregator: ResultAggregator | None = None,
        on_publish: Callable[[SearchOutcome], None] | None = None,
    ) -> None:
        self._introspector = introspector
        self._executor = executor
        self._page_size = page_size
        self._aggregator = aggregator or ResultAggregator()
        self._on_publish = on_publish
        self._sequence = itertools.count(1)
        self._latest_seq = 0
        self._view = SearchView()
        self._last_queried: str | None = None

    # ── State ───────────────────────────────────────────────────────────

    @property
    def view(self) -> SearchView:
        return self._view

    @property
    def latest_seq(self) -> int:
        return self._latest_seq

    @property
    def last_queried(self) -> str | None:
        """Raw input of the last search that ran and was published."""
        return self._last_queried

    def is_latest(self, seq: int) -> bool:
        return seq == self._latest_seq

    # ── Schema ──────────────────────────────────────────────────────────

    async def document_types(self) -> tuple[DocumentType, ...]:
        """Discovered types (raises SchemaUnavailableError)."""
        return await self._introspector.discover()

    async def suggest(self, raw: str) -> list[str]:
        """Autofill suggestions for the segment being typed ([] if schema unavailable)."""
        try:
            types = await self._introspector.discover()
        except SchemaUnavailableError:
            return []
        return suggest_fields(types, raw)

    # ── Search ──────────────────────────────────────────────────────────

    async def compile(self, raw: str) -> SearchQuery | None:
        """
        Compile raw input into the aggregate query without running it.

        Returns None when the input is not a query or no type is eligible.
        """
        if not is_valid_query(raw):
            return None
        types = await self._introspector.discover()
        resolved = resolve_types(types, parse_query(raw))
        if not resolved:
            return None
        return compile_search(resolved, self._page_size)

    async def trigger(self, raw: str) -> SearchOutcome:
        """Run one search for ``raw`` and publish it unless superseded."""
        seq = next(self._sequence)
        self._latest_seq = seq

        if not raw.strip():
            self._view = self._view.clear()
            return self._publish(SearchOutcome(seq=seq, raw=raw, status=SearchStatus.RESTORED))

        if not is_valid_query(raw):
            return SearchOutcome(seq=seq, raw=raw, status=SearchStatus.NOT_A_QUERY)

        try:
            types = await self._introspector.discover()
        except SchemaUnavailableError as e:
            logger.info(f"Search #{seq} skipped, schema unavailable: {e}")
            return SearchOutcome(seq=seq, raw=raw, status=SearchStatus.UNAVAILABLE)

        constraints = parse_query(raw)
        resolved = resolve_types(types, constraints)

        if not resolved:
            if not self.is_latest(seq):
                return self._stale(seq, raw)
            self._view = self._view.show(seq, raw, ())
            self._last_queried = raw
            return self._publish(SearchOutcome(seq=seq, raw=raw, status=SearchStatus.NO_ELIGIBLE_TYPE))

        query = compile_search(resolved, self._page_size)
        logger.debug(f"Search #{seq} over {query.root_fields}")
        try:
            data = await self._executor.query(query.render())
        except PrismicSearchError:
            if not self.is_latest(seq):
                return self._stale(seq, raw)
            raise

        if not self.is_latest(seq):
            return self._stale(seq, raw)

        records: tuple[ResultRecord, ...] = tuple(self._aggregator.aggregate(data, query.root_fields))
        self._view = self._view.show(seq, raw, records)
        self._last_queried = raw
        logger.info(f"Search #{seq} found {len(records)} document(s) across {len(resolved)} type(s)")
        return self._publish(SearchOutcome(seq=seq, raw=raw, status=SearchStatus.RESULTS, records=records))

    def _stale(self, seq: int, raw: str) -> SearchOutcome:
        logger.debug(f"Search #{seq} superseded by #{self._latest_seq}, discarding")
        return SearchOutcome(seq=seq, raw=raw, status=SearchStatus.STALE)

    def _publish(self, outcome: SearchOutcome) -> SearchOutcome:
        if self._on_publish is not None:
            self._on_publish(outcome)
        return outcome

    @property
    def showing_results(self) -> bool:
        return self._view.state is ViewState.SHOWING_RESULTS
