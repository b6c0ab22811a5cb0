"""Rows returned by a page repository."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageCandidate:
    """One page that may describe an event.

    ``title`` is in database-key form (underscores instead of spaces, no
    namespace). ``text`` is only attached when the query asked for it, and
    ``category`` holds at most one of the colored categories the page belongs to.
    """
    title: str
    revision_id: int
    namespace: int = 0
    text: str | None = None
    category: str | None = None
    cached_snippet: str | None = None

    @property
    def display_title(self) -> str:
        """Page name as humans read it (spaces, no namespace)."""
        return self.title.replace("_", " ")
