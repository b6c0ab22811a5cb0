"""Derive the human-readable event name from a page title."""

from event_calendar.title_parsing.title_fields import TitleFields


# Whitespace plus ":" and "/", the usual separators between a name and its date.
NAME_TRIM_CHARS = " \n\r\t\v\x00:/"


def derive_display_name(display_title: str, fields: TitleFields) -> str:
    """Remove the date substrings from a title and tidy up what is left.

    Example: "Conferences/05 April 2010" with date "05_April_2010" -> "Conferences"

    Args:
        display_title: Page title as humans read it (spaces, no namespace)
        fields: Fields extracted from the database-key form of the same title

    Returns:
        The display name; the pattern's ``name`` group wins when present
    """
    if fields.display_name is not None:
        return fields.display_name.strip(NAME_TRIM_CHARS)

    name = display_title
    for part in (fields.date_str, fields.end_date_str):
        if part:
            name = name.replace(part.replace("_", " "), "")
    return name.strip(NAME_TRIM_CHARS)
