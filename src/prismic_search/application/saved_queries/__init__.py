"""Saved search persistence."""

from .store import STORAGE_KEY, SavedQueryStore

__all__ = ["STORAGE_KEY", "SavedQueryStore"]
