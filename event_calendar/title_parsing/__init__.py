"""Title field extraction: find the date (and optional end date) inside a page title.

Two strategies are available, picked by the calendar options:
a fixed prefix/suffix around the date, or a regular expression with capture
groups applied after the prefix/suffix are removed.
"""

from event_calendar.title_parsing.title_fields import TitleFields
from event_calendar.title_parsing.strategy import TitleFieldStrategy
from event_calendar.title_parsing.factory import TitleStrategies, TitleStrategyFactory
from event_calendar.title_parsing.display_name import derive_display_name

__all__ = [
    "TitleFields",
    "TitleFieldStrategy",
    "TitleStrategies",
    "TitleStrategyFactory",
    "derive_display_name",
]
