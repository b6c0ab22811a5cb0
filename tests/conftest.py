"""Pytest configuration for event calendar tests."""

from datetime import date

import pytest

from event_calendar.config import ExtractionConfig, parse_tag_options
from event_calendar.repository import InMemoryPageRepository, WikiPage


# Formats without a year ("F,_j") resolve against this date.
TODAY = date(2022, 6, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_config():
    """Build an ExtractionConfig from tag-body text, pinned to TODAY."""
    def _make(body: str = "") -> ExtractionConfig:
        return ExtractionConfig.from_options(parse_tag_options(body), today=TODAY)
    return _make


@pytest.fixture
def conference_pages():
    return [
        WikiPage("Conferences/05_April_2010", text="Opening day", revision_id=101),
        WikiPage("Conferences/06_April_2010", text="Closing day", revision_id=102),
        WikiPage("Conferences/Venue", text="Not an event", revision_id=103),
        WikiPage("Unrelated page", text="Text", revision_id=104),
    ]


@pytest.fixture
def conference_repository(conference_pages):
    return InMemoryPageRepository(conference_pages)
