"""Descriptor of the calendar container an event list is embedded in.

The front end finds its data through the container's id and data-attributes;
this module produces those values but no markup.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from event_calendar import settings
from event_calendar.config import ExtractionConfig
from event_calendar.event_record import EventRecord
from event_calendar.event_schema import validate_event_payload
from event_calendar.exceptions import ConfigurationError


# Front-end module for each supported major version of the calendar library.
RENDERER_MODULES = {
    2: "ext.yasec",
    5: "ext.yasec5",
}


@dataclass
class CalendarEmbed:
    element_id: str
    module: str
    events_json: str
    attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.element_id,
            "module": self.module,
            "attributes": dict(self.attributes),
            "events": json.loads(self.events_json),
        }


class CalendarEmbedBuilder:
    """Builds embeds for the calendars of one rendered page.

    Each page render gets its own builder, so element ids
    (``eventcalendar-1``, ``eventcalendar-2``, ...) are unique within the page
    and no counter survives between requests.
    """

    def __init__(self, renderer_version: int | None = None):
        version = settings.RENDERER_VERSION if renderer_version is None else renderer_version
        if version not in RENDERER_MODULES:
            supported = " or ".join(str(v) for v in sorted(RENDERER_MODULES))
            raise ConfigurationError(
                "rendererVersion", f"unsupported renderer version {version!r}, can only be {supported}"
            )
        self.renderer_version = version
        self.module = RENDERER_MODULES[version]
        self.counter = 0

    def build(self, config: ExtractionConfig, events: list[EventRecord]) -> CalendarEmbed:
        """Describe the container for one calendar.

        Raises:
            ValueError: If the serialized events don't match the event schema
        """
        payload = [event.to_dict() for event in events]
        is_valid, errors = validate_event_payload(payload)
        if not is_valid:
            raise ValueError(f"Event payload failed validation: {errors}")

        self.counter += 1
        attributes: dict[str, str] = {"class": "eventcalendar"}
        if config.height:
            # Explicit height in pixels wins over the aspect ratio.
            attributes["data-height"] = config.height
        elif config.aspect_ratio:
            attributes["data-aspectratio"] = config.aspect_ratio

        return CalendarEmbed(
            element_id=f"eventcalendar-{self.counter}",
            module=self.module,
            events_json=json.dumps(payload, ensure_ascii=False),
            attributes=attributes,
        )
