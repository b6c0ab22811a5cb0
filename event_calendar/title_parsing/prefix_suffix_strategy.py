"""Strategy for titles that are a date wrapped in a fixed prefix/suffix."""

from event_calendar.title_parsing.strategy import TitleFieldStrategy
from event_calendar.title_parsing.title_fields import TitleFields


class PrefixSuffixStrategy(TitleFieldStrategy):
    """Everything between the prefix and the suffix is the date.

    Example: prefix "Conferences/" on "Conferences/05_April_2010" -> "05_April_2010"
    """

    def extract(self, title: str) -> TitleFields | None:
        residual = self.strip_prefix_and_suffix(title)
        if not residual:
            return None
        return TitleFields(
            date_str=residual,
            match_type="Date between fixed prefix and suffix",
        )
