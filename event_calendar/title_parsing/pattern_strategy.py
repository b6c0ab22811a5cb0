"""Strategy that locates dates inside a title with a regular expression."""

import re

from event_calendar.title_parsing.strategy import TitleFieldStrategy
from event_calendar.title_parsing.title_fields import TitleFields


class TitlePatternStrategy(TitleFieldStrategy):
    """Finds the start (and optional end) date with capture groups.

    Group priority:
        start date: named group ``start``, else the first group, else the whole match
        end date:   named group ``end``, else the second group (optional)
        name:       named group ``name`` (optional)

    Example: ``(?P<start>\\d{4}/\\d{2}/\\d{2}):(?P<end>\\d{4}/\\d{2}/\\d{2})``
    on "2022/04/28:2022/04/29_Test_Event_1"
    """

    _RESERVED_GROUPS = ("start", "end", "name")

    def __init__(self, pattern: re.Pattern, prefix: str = "", suffix: str = ""):
        super().__init__(prefix, suffix)
        self.pattern = pattern
        self._group_names = {index: name for name, index in pattern.groupindex.items()}

    def _group(self, m: re.Match, name: str, position: int) -> str | None:
        """Value of the named group, else of the positional group unless it is reserved for another role."""
        if name in self.pattern.groupindex:
            return m.group(name)
        if position > self.pattern.groups:
            return None
        if self._group_names.get(position) in self._RESERVED_GROUPS:
            return None
        return m.group(position)

    def extract(self, title: str) -> TitleFields | None:
        residual = self.strip_prefix_and_suffix(title)
        if residual is None:
            return None

        m = self.pattern.search(residual)
        if not m:
            return None

        if self.pattern.groups == 0:
            date_str = m.group(0)
        else:
            date_str = self._group(m, "start", 1)
        if not date_str:
            return None

        end_date_str = self._group(m, "end", 2)

        display_name = m.group("name") if "name" in self.pattern.groupindex else None
        if display_name is not None:
            display_name = display_name.replace("_", " ")

        return TitleFields(
            date_str=date_str,
            end_date_str=end_date_str or None,
            display_name=display_name,
            match_type="Date captured by title pattern",
        )
