"""JSON schema of the event list handed to the calendar front end.

Each event is ``{title, start, end, url, color?}`` with ISO dates; ``color``
is left out rather than set to null when no color rule matched.
"""

from __future__ import annotations

from typing import Any

import jsonschema


EVENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["title", "start", "end", "url"],
    "additionalProperties": False,
    "properties": {
        "title": {"type": "string"},
        "start": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
        "end": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
        "url": {"type": "string"},
        "color": {"type": "string", "minLength": 1},
    },
}

EVENT_LIST_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Calendar events",
    "type": "array",
    "items": EVENT_SCHEMA,
}


def validate_event_payload(payload: Any) -> tuple[bool, list[str] | None]:
    """
    Validate a serialized event list against the schema.

    Args:
        payload: Serialized events

    Returns:
        Tuple of (is_valid, errors)
    """
    try:
        jsonschema.validate(instance=payload, schema=EVENT_LIST_SCHEMA)
        return (True, None)
    except jsonschema.ValidationError as e:
        return (False, [str(e.message)])
    except jsonschema.SchemaError as e:
        return (False, [f"Invalid schema: {str(e)}"])
