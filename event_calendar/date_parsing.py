"""Strict date parsing for dates embedded in page titles.

Wiki editors describe title dates with the PHP ``DateTime::createFromFormat``
letters (``Y/m/d``, ``d_F_Y``, ``F,_j`` ...), so the same mini-language is
accepted here. A format is compiled once into an anchored regular expression;
parsing never falls back to other formats and never accepts partial matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from event_calendar.exceptions import ConfigurationError


MONTH_NAMES = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

WEEKDAY_NAMES = {
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
}

ONE_DAY = timedelta(days=1)

# Fields reset by "!" and "|" take their value from the Unix epoch.
EPOCH = date(1970, 1, 1)


def month_name_to_number(month_name: str) -> int | None:
    """Convert a full or three-letter English month name to its number (case-insensitive)."""
    name = month_name.lower()
    if name in MONTH_NAMES:
        return MONTH_NAMES[name]
    if len(name) == 3:
        for full_name, number in MONTH_NAMES.items():
            if full_name.startswith(name):
                return number
    return None


def _is_weekday_name(text: str) -> bool:
    name = text.lower()
    if name in WEEKDAY_NAMES:
        return True
    return len(name) == 3 and any(w.startswith(name) for w in WEEKDAY_NAMES)


# token -> (field, regex)
_TOKENS: dict[str, tuple[str, str]] = {
    "d": ("day", r"\d{1,2}"),
    "j": ("day", r"\d{1,2}"),
    "m": ("month", r"\d{1,2}"),
    "n": ("month", r"\d{1,2}"),
    "F": ("month_name", r"[A-Za-z]+"),
    "M": ("month_name", r"[A-Za-z]+"),
    "Y": ("year", r"\d{1,4}"),
    "y": ("short_year", r"\d{2}"),
    "D": ("weekday", r"[A-Za-z]+"),
    "l": ("weekday", r"[A-Za-z]+"),
    "S": ("ordinal", r"(?:st|nd|rd|th)"),
}


@dataclass(frozen=True)
class DateFormat:
    """A compiled date format.

    Use :meth:`compile` rather than the constructor; it validates the tokens
    and raises :class:`ConfigurationError` for letters outside the supported set.

    ``resets`` is set by the ``!`` and ``|`` tokens: fields absent from the
    format then come from :data:`EPOCH` instead of the reference date.
    """
    pattern: str
    regex: re.Pattern
    fields: tuple[tuple[str, str], ...]  # (group name, field)
    resets: bool = False

    @classmethod
    def compile(cls, pattern: str) -> DateFormat:
        if not pattern:
            raise ConfigurationError("dateFormat", "date format cannot be empty")

        parts: list[str] = []
        fields: list[tuple[str, str]] = []
        resets = False
        i = 0
        while i < len(pattern):
            ch = pattern[i]
            if ch == "\\":
                if i + 1 >= len(pattern):
                    raise ConfigurationError("dateFormat", "format ends with a dangling escape")
                parts.append(re.escape(pattern[i + 1]))
                i += 2
                continue
            if ch == "!":
                # Everything parsed before "!" is reset too.
                fields = [(group, "reset") for group, _ in fields]
                resets = True
                i += 1
                continue
            if ch == "|":
                resets = True
                i += 1
                continue
            if ch in _TOKENS:
                field, token_re = _TOKENS[ch]
                group = f"{field}_{len(fields)}"
                fields.append((group, field))
                parts.append(f"(?P<{group}>{token_re})")
            elif ch.isalpha():
                raise ConfigurationError(
                    "dateFormat", f"unsupported token {ch!r} in format {pattern!r}"
                )
            else:
                parts.append(re.escape(ch))
            i += 1

        if not any(field in ("day", "month", "month_name", "year", "short_year") for _, field in fields):
            raise ConfigurationError("dateFormat", f"format {pattern!r} has no date fields")

        regex = re.compile("".join(parts), re.IGNORECASE)
        return cls(pattern=pattern, regex=regex, fields=tuple(fields), resets=resets)

    def parse(self, text: str, today: date | None = None) -> date | None:
        """Parse ``text`` strictly against this format.

        Fields missing from the format are taken from ``today`` (the current
        date by default), or from the epoch when the format resets them. Returns None when the text doesn't match or names an
        impossible calendar date.
        """
        if not text:
            return None
        m = self.regex.fullmatch(text)
        if not m:
            return None

        reference = EPOCH if self.resets else (today or date.today())
        year, month, day = reference.year, reference.month, reference.day
        day_given = False

        for group, field in self.fields:
            value = m.group(group)
            if field == "day":
                day = int(value)
                day_given = True
            elif field == "month":
                month = int(value)
            elif field == "month_name":
                number = month_name_to_number(value)
                if number is None:
                    return None
                month = number
            elif field == "year":
                year = int(value)
            elif field == "short_year":
                short = int(value)
                year = 2000 + short if short < 70 else 1900 + short
            elif field == "weekday":
                if not _is_weekday_name(value):
                    return None

        if not day_given and any(f in ("month", "month_name") for _, f in self.fields):
            # A month without a day means the first of that month.
            day = 1

        try:
            return date(year, month, day)
        except ValueError:
            return None


class DateParser:
    """Parses start/end date substrings of a title into an exclusive date interval."""

    def __init__(self, date_format: DateFormat | str, today: date | None = None):
        if isinstance(date_format, str):
            date_format = DateFormat.compile(date_format)
        self.date_format = date_format
        self.today = today

    def parse(self, date_str: str) -> date | None:
        return self.date_format.parse(date_str, self.today)

    def parse_interval(self, date_str: str, end_date_str: str | None = None) -> tuple[date, date] | None:
        """Parse a start date and optional end date.

        Returns ``(start, end)`` with ``end`` exclusive, or None when the start
        date doesn't parse. A missing, malformed or non-increasing end date
        falls back to a one-day event.
        """
        start = self.parse(date_str)
        if start is None:
            return None

        end = None
        if end_date_str:
            end = self.parse(end_date_str)
            if end is not None and end <= start:
                end = None

        if end is None:
            end = start + ONE_DAY
        return start, end
