"""Event calendar extraction engine.

Turns wiki page titles such as ``Conferences/05_April_2010`` into a merged,
colored list of calendar events ready for a JavaScript calendar.

Typical use::

    options = parse_tag_options(tag_body)
    config = ExtractionConfig.from_options(options)
    events = EventCalendarEngine(config, repository).find_events()
    payload = serialize_events(events)
"""

from event_calendar.config import ExtractionConfig, parse_tag_options
from event_calendar.engine import EventCalendarEngine, find_events, serialize_events
from event_calendar.event_record import EventRecord
from event_calendar.exceptions import ConfigurationError
from event_calendar.merging import IntervalMerger, merge, merge_events
from event_calendar.page_candidate import PageCandidate
from event_calendar.repository import InMemoryPageRepository, PageQuery, PageRepository, WikiPage

__all__ = [
    "ConfigurationError",
    "EventCalendarEngine",
    "EventRecord",
    "ExtractionConfig",
    "InMemoryPageRepository",
    "IntervalMerger",
    "PageCandidate",
    "PageQuery",
    "PageRepository",
    "WikiPage",
    "find_events",
    "merge",
    "merge_events",
    "parse_tag_options",
    "serialize_events",
]
