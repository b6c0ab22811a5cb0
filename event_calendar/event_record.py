from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any


@dataclass
class EventRecord:
    """A single calendar event produced from one (or, after merging, several) pages.

    ``end_date`` is exclusive: a one-day event on April 5 has
    ``start_date=2010-04-05`` and ``end_date=2010-04-06``. The interval merger
    may extend ``start_date``/``end_date`` in place; nothing else changes after
    construction.

    Required fields:
        display_name: Event label shown by the calendar (plain text or an HTML snippet)
        start_date: First day of the event
        end_date: Day after the last day of the event
        url: Link to the page describing the event

    Optional fields:
        color: Display color, None when no color rule matched
    """
    display_name: str
    start_date: date
    end_date: date
    url: str
    color: str | None = None

    def __post_init__(self) -> None:
        """Validate field values after initialization."""
        is_valid, error_message = self.validate()
        if not is_valid:
            raise ValueError(f"Invalid EventRecord: {error_message}")

    def validate(self) -> tuple[bool, str]:
        """Validate that this event is well formed.

        Returns:
            Tuple of (is_valid, error_message). error_message is empty string if valid.
        """
        if not isinstance(self.display_name, str):
            return False, f"Field 'display_name' must be str, got {type(self.display_name).__name__}"

        if not isinstance(self.url, str):
            return False, f"Field 'url' must be str, got {type(self.url).__name__}"

        for field_name in ["start_date", "end_date"]:
            value = getattr(self, field_name)
            if not isinstance(value, date):
                return False, f"Field '{field_name}' must be date, got {type(value).__name__}"

        if self.end_date <= self.start_date:
            return False, f"end_date {self.end_date} must be after start_date {self.start_date}"

        if self.color is not None and not isinstance(self.color, str):
            return False, f"Field 'color' must be str or None, got {type(self.color).__name__}"

        return True, ""

    def is_adjacent_to(self, other: EventRecord) -> bool:
        """True if ``other`` starts exactly where this event ends."""
        return self.end_date == other.start_date

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dictionary expected by the calendar front end.

        ``color`` is omitted entirely (not null) when unresolved.
        """
        data: dict[str, Any] = {
            "title": self.display_name,
            "start": self.start_date.isoformat(),
            "end": self.end_date.isoformat(),
            "url": self.url,
        }
        if self.color:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventRecord:
        """Create an EventRecord from its serialized form.

        Raises:
            ValueError: If the dictionary data is invalid.
        """
        return cls(
            display_name=data["title"],
            start_date=date.fromisoformat(data["start"]),
            end_date=date.fromisoformat(data["end"]),
            url=data["url"],
            color=data.get("color"),
        )
