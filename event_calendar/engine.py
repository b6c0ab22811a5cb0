"""Event extraction: from page rows to the merged, colored event list.

Per page the pipeline is:
1. find the date substrings in the title (prefix/suffix or title pattern)
2. parse them strictly into a start date and exclusive end date
3. build the display name (title minus dates, or an HTML snippet)
4. resolve the color (category first, then keywords)

Pages that fail steps 1-2 are not events and are skipped silently. The
per-page results are then merged into multi-day events.
"""

from __future__ import annotations

import logging
from typing import Callable

from event_calendar.colors import ColorResolver
from event_calendar.config import ExtractionConfig
from event_calendar.date_parsing import DateParser
from event_calendar.event_record import EventRecord
from event_calendar.merging import IntervalMerger
from event_calendar.page_candidate import PageCandidate
from event_calendar.repository import PageQuery, PageRepository
from event_calendar.snippets.cache import SnippetCache
from event_calendar.snippets.producer import SnippetProducer
from event_calendar.title_parsing import TitleStrategyFactory, derive_display_name
from event_calendar.title_parsing.display_name import NAME_TRIM_CHARS
from event_calendar.urls import UrlResolver, WikiUrlResolver


logger = logging.getLogger(__name__)

HtmlRenderer = Callable[[str], str]


class EventCalendarEngine:
    """Builds the event list for one calendar.

    Collaborators:
        repository: answers the page query
        renderer: converts page text to HTML for snippets; without one the
            page text is assumed to be HTML already
        snippet_cache: receives freshly produced snippets
        url_resolver: builds each event's link
    """

    def __init__(
        self,
        config: ExtractionConfig,
        repository: PageRepository,
        *,
        renderer: HtmlRenderer | None = None,
        snippet_cache: SnippetCache | None = None,
        url_resolver: UrlResolver | None = None,
    ):
        self.config = config
        self.repository = repository
        self.renderer = renderer
        self.url_resolver = url_resolver or WikiUrlResolver()

        self.title_strategy = TitleStrategyFactory.for_config(config)
        self.date_parser = DateParser(config.date_format, today=config.today)
        self.color_resolver = ColorResolver.from_config(config)
        self.snippet_producer = (
            SnippetProducer(config.max_snippet_chars, cache=snippet_cache)
            if config.snippets_enabled
            else None
        )

    def build_query(self) -> PageQuery:
        """Translate the config into a page query."""
        return PageQuery(
            namespace=self.config.namespace_index,
            prefix=self.config.prefix,
            suffix=self.config.suffix,
            title_regex=self.config.title_pattern,
            limit=self.config.limit,
            colored_categories=list(self.config.category_colors),
            with_text=self.config.snippets_enabled or bool(self.config.keyword_colors),
            with_cached_snippet=self.config.snippets_enabled,
        )

    def extract_page(self, page: PageCandidate) -> tuple[str, EventRecord] | None:
        """Turn one page into ``(display_name, event)``, or None if it isn't an event.

        Args:
            page: Row returned by the repository

        Returns:
            The display name the event is grouped under, and the event itself
        """
        fields = self.title_strategy.extract(page.title)
        if fields is None:
            logger.debug("Skipping '%s': title doesn't match", page.title)
            return None

        interval = self.date_parser.parse_interval(fields.date_str, fields.end_date_str)
        if interval is None:
            logger.debug(
                "Skipping '%s': %r doesn't match date format %r",
                page.title,
                fields.date_str,
                self.config.date_format.pattern,
            )
            return None
        start_date, end_date = interval

        page_name = page.display_title
        if self.snippet_producer is not None:
            html = page.text
            if not page.cached_snippet and html is not None and self.renderer is not None:
                html = self.renderer(html)
            display_name = self.snippet_producer.produce(
                page.revision_id, html, page.cached_snippet
            ).strip(NAME_TRIM_CHARS)
        else:
            display_name = derive_display_name(page_name, fields)

        color = self.color_resolver.resolve(page.category, page.text, page_name)

        event = EventRecord(
            display_name=display_name,
            start_date=start_date,
            end_date=end_date,
            url=self.url_resolver(page.namespace, page.title),
            color=color,
        )
        return display_name, event

    def find_events(self) -> list[EventRecord]:
        """Query the repository and return the merged event list.

        Repository and cache errors propagate to the caller.
        """
        pages = self.repository.find(self.build_query())

        merger = IntervalMerger()
        extracted = 0
        for page in pages:
            result = self.extract_page(page)
            if result is None:
                continue
            extracted += 1
            merger.add(*result)

        events = merger.finish(self.config.order)
        logger.info(
            "Calendar built from %s pages: %s events extracted, %s after merging",
            len(pages),
            extracted,
            len(events),
        )
        return events


def serialize_events(events: list[EventRecord]) -> list[dict]:
    """Serialize events into the list of dicts the calendar front end expects."""
    return [event.to_dict() for event in events]


def find_events(
    config: ExtractionConfig,
    repository: PageRepository,
    **collaborators,
) -> list[EventRecord]:
    """Convenience wrapper around :class:`EventCalendarEngine`."""
    return EventCalendarEngine(config, repository, **collaborators).find_events()
