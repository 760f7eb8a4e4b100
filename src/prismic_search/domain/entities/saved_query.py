"""Saved search entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_SAVED_QUERY_NAME = "New Search"


@dataclass(frozen=True, slots=True)
class SavedQuery:
    """A named, persisted replay of a raw search string."""

    value: str
    name: str = DEFAULT_SAVED_QUERY_NAME

    def renamed(self, name: str) -> SavedQuery:
        return SavedQuery(value=self.value, name=name)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedQuery:
        return cls(value=str(data.get("value", "")), name=str(data.get("name") or DEFAULT_SAVED_QUERY_NAME))
