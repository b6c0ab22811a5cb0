"""Finding the pages a calendar is built from.

:class:`PageQuery` describes which pages are wanted and what must be
attached to each row; a :class:`PageRepository` answers it. The engine
never looks at how pages are stored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from event_calendar.config import DEFAULT_LIMIT, NS_MAIN, clamp_limit, to_db_key
from event_calendar.page_candidate import PageCandidate
from event_calendar.snippets.cache import SnippetCache, make_snippet_cache_key
from event_calendar.title_parsing.strategy import strip_prefix_and_suffix


logger = logging.getLogger(__name__)


@dataclass
class PageQuery:
    """Query for event pages.

    Attributes:
        namespace: Namespace index the pages live in
        prefix: Fixed start of the title (database-key form)
        suffix: Fixed end of the title (database-key form)
        title_regex: Pattern the title, minus prefix and suffix, must contain a match for
        limit: Maximum number of rows, clamped to MAX_LIMIT
        colored_categories: Categories to report membership of
        with_text: Attach the page text to each row
        with_cached_snippet: Attach the cached snippet of the latest revision
    """
    namespace: int = NS_MAIN
    prefix: str = ""
    suffix: str = ""
    title_regex: re.Pattern | None = None
    limit: int = DEFAULT_LIMIT
    colored_categories: list[str] = field(default_factory=list)
    with_text: bool = False
    with_cached_snippet: bool = False

    def __post_init__(self) -> None:
        self.limit = clamp_limit(self.limit)

    def matches_title(self, title: str) -> bool:
        """Title filter: ``LIKE 'prefix%suffix'``, then the regex searched in what lies between.

        The regex sees the same residual as the title pattern strategy.
        """
        residual = strip_prefix_and_suffix(title, self.prefix, self.suffix)
        if residual is None:
            return False
        if self.title_regex is not None and not self.title_regex.search(residual):
            return False
        return True


class PageRepository(Protocol):
    def find(self, query: PageQuery) -> list[PageCandidate]:
        ...


@dataclass
class WikiPage:
    """A stored page, as seen by :class:`InMemoryPageRepository`."""
    title: str
    text: str = ""
    namespace: int = NS_MAIN
    revision_id: int = 1
    categories: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.title = to_db_key(self.title)
        self.categories = [to_db_key(c) for c in self.categories]


class InMemoryPageRepository:
    """Repository over a list of pages held in memory.

    Rows come back ordered by title, with the limit applied last. A page in
    several colored categories is reported with the first of them in the
    page's own category order.
    """

    def __init__(self, pages: Iterable[WikiPage] = (), snippet_cache: SnippetCache | None = None):
        self.pages = list(pages)
        self.snippet_cache = snippet_cache

    def add(self, page: WikiPage) -> None:
        self.pages.append(page)

    def find(self, query: PageQuery) -> list[PageCandidate]:
        colored = set(to_db_key(c) for c in query.colored_categories)
        selected = [
            page for page in self.pages
            if page.namespace == query.namespace and query.matches_title(page.title)
        ]
        selected.sort(key=lambda page: page.title)

        rows = []
        for page in selected[:query.limit]:
            category = next((c for c in page.categories if c in colored), None)
            cached = None
            if query.with_cached_snippet and self.snippet_cache is not None:
                cached = self.snippet_cache.get(make_snippet_cache_key(page.revision_id))
            rows.append(
                PageCandidate(
                    title=page.title,
                    revision_id=page.revision_id,
                    namespace=page.namespace,
                    text=page.text if query.with_text else None,
                    category=category,
                    cached_snippet=cached,
                )
            )

        logger.debug("Page query matched %s of %s pages", len(rows), len(self.pages))
        return rows
