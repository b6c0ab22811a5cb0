"""Abstract base class for title field extraction strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from event_calendar.title_parsing.title_fields import TitleFields


def strip_prefix_and_suffix(title: str, prefix: str, suffix: str) -> str | None:
    """Remove a fixed prefix and suffix from a title.

    Returns the residual text, or None if the title is too short or doesn't
    carry the prefix/suffix at all.
    """
    if not prefix and not suffix:
        return title
    if len(prefix) + len(suffix) > len(title):
        return None
    if not title.startswith(prefix) or not title.endswith(suffix):
        return None
    return title[len(prefix):len(title) - len(suffix)]


class TitleFieldStrategy(ABC):
    """Interface for title field extraction strategies.

    Every strategy first removes the fixed ``prefix`` and ``suffix`` that
    surround the interesting part of the title.
    """

    def __init__(self, prefix: str = "", suffix: str = ""):
        self.prefix = prefix
        self.suffix = suffix

    def strip_prefix_and_suffix(self, title: str) -> str | None:
        """Remove the fixed prefix and suffix from a title.

        Args:
            title: Page title in database-key form

        Returns:
            The residual text, or None if the title is too short or doesn't
            carry the prefix/suffix at all
        """
        return strip_prefix_and_suffix(title, self.prefix, self.suffix)

    @abstractmethod
    def extract(self, title: str) -> TitleFields | None:
        """Extract the date substring(s) from a title, or return None if this page isn't an event.

        Args:
            title: Page title in database-key form

        Returns:
            A TitleFields object if extraction succeeds, None otherwise
        """
        pass
