"""
SavedQueryStore - CRUD for named search strings.

Storage model:
    {data_dir}/saved_queries.yaml

    savedQueries:
      - name: Mark's posts
        value: "author: Mark, category: blog"

Entries are ordered most recently saved first. Every mutating call writes the
whole list back and returns it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from prismic_search.application.search.query_parser import is_valid_query
from prismic_search.domain.entities import DEFAULT_SAVED_QUERY_NAME, SavedQuery
from prismic_search.shared.exceptions import InvalidQuerySyntaxError, NotFoundError, ParseError

logger = logging.getLogger(__name__)

STORAGE_KEY = "savedQueries"
STORE_FILENAME = "saved_queries.yaml"


class SavedQueryStore:
    """File-backed list of SavedQuery records.

    Args:
        data_dir: Directory holding the store file (created if missing)
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir).expanduser()
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._data_dir / STORE_FILENAME

    # ── Persistence ─────────────────────────────────────────────────────

    def _read(self) -> list[SavedQuery]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid saved query file {self.path}: {e}"
            raise ParseError(msg, source="saved_queries") from e

        entries = data.get(STORAGE_KEY, []) if isinstance(data, dict) else []
        return [SavedQuery.from_dict(entry) for entry in entries if isinstance(entry, dict)]

    def _write(self, queries: list[SavedQuery]) -> list[SavedQuery]:
        payload = {STORAGE_KEY: [q.to_dict() for q in queries]}
        tmp_path = self.path.with_suffix(".yaml.tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, allow_unicode=True, sort_keys=False)
        tmp_path.replace(self.path)
        return queries

    def _check_index(self, queries: list[SavedQuery], index: int) -> None:
        if not 0 <= index < len(queries):
            raise NotFoundError("Saved query", str(index))

    # ── CRUD ────────────────────────────────────────────────────────────

    def list_queries(self) -> list[SavedQuery]:
        """All saved queries, most recently saved first."""
        return self._read()

    def get(self, index: int) -> SavedQuery:
        queries = self._read()
        self._check_index(queries, index)
        return queries[index]

    def save(self, value: str, name: str = DEFAULT_SAVED_QUERY_NAME) -> list[SavedQuery]:
        """
        Save ``value`` at the top of the list.

        Raises:
            InvalidQuerySyntaxError: If ``value`` is not a query
        """
        if not is_valid_query(value):
            raise InvalidQuerySyntaxError(value)
        queries = [SavedQuery(value=value, name=name or DEFAULT_SAVED_QUERY_NAME), *self._read()]
        logger.info(f"Saved query {name!r}: {value!r}")
        return self._write(queries)

    def rename(self, index: int, name: str) -> list[SavedQuery]:
        queries = self._read()
        self._check_index(queries, index)
        queries[index] = queries[index].renamed(name)
        return self._write(queries)

    def forget(self, index: int) -> list[SavedQuery]:
        queries = self._read()
        self._check_index(queries, index)
        removed = queries.pop(index)
        logger.info(f"Forgot saved query {removed.name!r}")
        return self._write(queries)
