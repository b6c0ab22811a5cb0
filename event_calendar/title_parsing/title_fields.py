"""Dataclass representing the fields extracted from a page title."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TitleFields:
    """Date substrings (and optionally a display name) found in a title.

    Substrings are in the same form as the title they came from (database
    keys use underscores instead of spaces).
    """
    date_str: str
    match_type: str
    end_date_str: str | None = None
    display_name: str | None = None  # Only set when the title pattern names it explicitly
