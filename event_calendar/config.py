"""Calendar options and the immutable extraction configuration built from them.

Options arrive as free-form ``key = value`` lines (the body of an
``<eventcalendar>`` tag). They are parsed once per request into an
:class:`ExtractionConfig`; structural problems raise
:class:`~event_calendar.exceptions.ConfigurationError` before any page is read.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from event_calendar.date_parsing import DateFormat
from event_calendar.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "Y/m/d"
DEFAULT_LIMIT = 500
# 5000 rows keep the event payload around 300 KiB at ~60 bytes per entry.
MAX_LIMIT = 5000

ORDER_GROUPED = "grouped"
ORDER_START = "start"
ORDERS = (ORDER_GROUPED, ORDER_START)

NS_MAIN = 0

# Canonical MediaWiki namespace names (database-key form).
NAMESPACES = {
    "": 0,
    "Talk": 1,
    "User": 2,
    "User_talk": 3,
    "Project": 4,
    "Project_talk": 5,
    "File": 6,
    "File_talk": 7,
    "MediaWiki": 8,
    "MediaWiki_talk": 9,
    "Template": 10,
    "Template_talk": 11,
    "Help": 12,
    "Help_talk": 13,
    "Category": 14,
    "Category_talk": 15,
}
NAMESPACE_NAMES = {index: name for name, index in NAMESPACES.items()}

_CATEGORY_COLOR_RE = re.compile(r"^categorycolor\.(.+)$")
_KEYWORD_COLOR_RE = re.compile(r"^keywordcolor\.(.+)$")
# PCRE-style named groups, e.g. (?<start>...), which Python spells (?P<start>...).
_PCRE_NAMED_GROUP_RE = re.compile(r"\(\?<(?=[A-Za-z_])")


def to_db_key(text: str) -> str:
    """Convert a human-typed page name fragment to database-key form (spaces -> underscores)."""
    return text.replace(" ", "_")


def parse_tag_options(body: str) -> dict[str, str]:
    """Parse ``key = value`` lines into a dict.

    Lines without ``=`` are ignored, keys and values are stripped, and options
    with an empty value are dropped.
    """
    options: dict[str, str] = {}
    for line in (body or "").split("\n"):
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue
        options[key] = value
    return options


def resolve_namespace(value: str | int | None) -> int:
    """Resolve a namespace given either as an index or as a canonical name."""
    if value is None or value == "":
        return NS_MAIN
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if re.fullmatch(r"-?\d+", text):
        return int(text)

    name = to_db_key(text)
    for candidate, index in NAMESPACES.items():
        if candidate.lower() == name.lower():
            return index
    raise ConfigurationError("namespace", f"unknown namespace {text!r}")


def compile_title_pattern(pattern: str | None) -> re.Pattern | None:
    if not pattern:
        return None
    try:
        return re.compile(_PCRE_NAMED_GROUP_RE.sub("(?P<", pattern))
    except re.error as e:
        raise ConfigurationError("titleRegex", f"{pattern!r} is not a valid regular expression ({e})")


def _parse_int(options: Mapping[str, str], key: str, default: int) -> int:
    raw = options.get(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(key, f"expected an integer, got {raw!r}")


def clamp_limit(limit: int) -> int:
    if limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


@dataclass(frozen=True)
class ExtractionConfig:
    """Everything the engine needs to turn page titles into events.

    Built once per request (usually through :meth:`from_options`) and never
    modified afterwards.
    """
    namespace_index: int = NS_MAIN
    prefix: str = ""
    suffix: str = ""
    title_pattern: re.Pattern | None = None
    date_format: DateFormat = field(default_factory=lambda: DateFormat.compile(DEFAULT_DATE_FORMAT))
    max_snippet_chars: int = 0
    category_colors: dict[str, str] = field(default_factory=dict)
    keyword_colors: dict[str, str] = field(default_factory=dict)
    limit: int = DEFAULT_LIMIT
    order: str = ORDER_GROUPED
    height: str | None = None
    aspect_ratio: str | None = None
    today: date | None = None

    def __post_init__(self) -> None:
        if self.order not in ORDERS:
            raise ConfigurationError("order", f"expected one of {', '.join(ORDERS)}, got {self.order!r}")
        if self.max_snippet_chars < 0:
            raise ConfigurationError("symbols", "snippet length cannot be negative")

    @property
    def snippets_enabled(self) -> bool:
        return self.max_snippet_chars > 0

    @classmethod
    def from_options(cls, options: Mapping[str, str], *, today: date | None = None) -> ExtractionConfig:
        """Build a config from caller-supplied options.

        Args:
            options: Option mapping, e.g. the result of :func:`parse_tag_options`.
            today: Reference date for formats that omit the year. Defaults to the current date.

        Raises:
            ConfigurationError: If an option is structurally invalid.
        """
        category_colors: dict[str, str] = {}
        keyword_colors: dict[str, str] = {}
        for key, value in options.items():
            m = _CATEGORY_COLOR_RE.match(key)
            if m:
                category_colors[to_db_key(m.group(1))] = value
                continue
            m = _KEYWORD_COLOR_RE.match(key)
            if m:
                keyword_colors[m.group(1)] = value

        config = cls(
            namespace_index=resolve_namespace(options.get("namespace")),
            prefix=to_db_key(options.get("prefix") or ""),
            suffix=to_db_key(options.get("suffix") or ""),
            title_pattern=compile_title_pattern(options.get("titleRegex")),
            date_format=DateFormat.compile(options.get("dateFormat") or DEFAULT_DATE_FORMAT),
            max_snippet_chars=_parse_int(options, "symbols", 0),
            category_colors=category_colors,
            keyword_colors=keyword_colors,
            limit=clamp_limit(_parse_int(options, "limit", DEFAULT_LIMIT)),
            order=(options.get("order") or ORDER_GROUPED).strip().lower(),
            height=options.get("height") or None,
            aspect_ratio=options.get("aspectratio") or None,
            today=today,
        )
        logger.debug(
            "Calendar config: namespace=%s prefix=%r suffix=%r dateFormat=%r limit=%s",
            config.namespace_index,
            config.prefix,
            config.suffix,
            config.date_format.pattern,
            config.limit,
        )
        return config
