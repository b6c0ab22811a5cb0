"""Pick a display color for an event from category and keyword rules."""

from __future__ import annotations

import logging
from typing import Mapping

from event_calendar.config import ExtractionConfig, to_db_key


logger = logging.getLogger(__name__)


class ColorResolver:
    """Resolves an optional color for a page.

    Priority, first match wins:
    1. the page's category has a configured color;
    2. the first configured keyword found (case-insensitively) in the page
       name or text;
    3. no color.

    A page belonging to several colored categories gets the color of whichever
    one the page repository reported; which one that is isn't specified.
    """

    def __init__(self, category_colors: Mapping[str, str], keyword_colors: Mapping[str, str]):
        self.category_colors = {to_db_key(name): color for name, color in category_colors.items()}
        self.keyword_colors = [(keyword.lower(), color) for keyword, color in keyword_colors.items()]

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> ColorResolver:
        return cls(config.category_colors, config.keyword_colors)

    def resolve(self, category: str | None, text: str | None, display_name: str) -> str | None:
        """Return the color for a page, or None when no rule applies.

        Args:
            category: Colored category the page belongs to, if any
            text: Page text, if it was loaded
            display_name: Page name as humans read it
        """
        if category:
            color = self.category_colors.get(to_db_key(category))
            if color:
                return color

        if not self.keyword_colors:
            return None

        haystack = f"{display_name}\n{text or ''}".lower()
        for keyword, color in self.keyword_colors:
            if keyword in haystack:
                logger.debug("Keyword %r colors '%s' %s", keyword, display_name[:80], color)
                return color
        return None
