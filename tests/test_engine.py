"""Tests for the extraction engine, end to end over an in-memory repository."""

import logging
from datetime import date
from unittest.mock import Mock

import pytest

from event_calendar.engine import EventCalendarEngine, find_events, serialize_events
from event_calendar.exceptions import ConfigurationError
from event_calendar.repository import InMemoryPageRepository, WikiPage
from event_calendar.snippets.cache import InMemorySnippetCache


CONFERENCE_OPTIONS = "prefix = Conferences/\ndateFormat = d_F_Y"


class TestPrefixSuffixCalendars:
    """Calendars built from titles with a fixed prefix."""

    def test_consecutive_days_become_one_event(self, make_config, conference_repository):
        events = find_events(make_config(CONFERENCE_OPTIONS), conference_repository)

        assert serialize_events(events) == [
            {
                "title": "Conferences",
                "start": "2010-04-05",
                "end": "2010-04-07",
                "url": "/wiki/Conferences/05_April_2010",
            }
        ]

    def test_pages_outside_the_format_are_skipped(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("Conferences/Venue"),
            WikiPage("Conferences/31_February_2010"),
            WikiPage("Conferences/05_April_2010_(draft)"),
        ])
        assert find_events(make_config(CONFERENCE_OPTIONS), repository) == []

    def test_year_less_format_in_template_namespace(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("Today_in_History/April,_12", namespace=10),
            WikiPage("Today_in_History/December,_31", namespace=10),
            WikiPage("Today_in_History/April,_13", namespace=0),
        ])
        config = make_config(
            "namespace = Template\nprefix = Today_in_History/\ndateFormat = F,_j"
        )
        events = find_events(config, repository)

        assert [(e.display_name, e.start_date, e.end_date, e.url) for e in events] == [
            ("Today in History", date(2022, 4, 12), date(2022, 4, 13),
             "/wiki/Template:Today_in_History/April,_12"),
            ("Today in History", date(2022, 12, 31), date(2023, 1, 1),
             "/wiki/Template:Today_in_History/December,_31"),
        ]

    def test_suffix(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("2022-05-21_Retreat"),
            WikiPage("2022-05-22_Retreat"),
            WikiPage("2022-05-22_Party"),
        ])
        config = make_config("suffix = _Retreat\ndateFormat = Y-m-d")
        events = find_events(config, repository)

        assert [(e.display_name, e.start_date, e.end_date) for e in events] == [
            ("Retreat", date(2022, 5, 21), date(2022, 5, 23)),
        ]

    def test_limit_applies_to_pages(self, make_config, conference_repository):
        config = make_config(CONFERENCE_OPTIONS + "\nlimit = 1")
        events = find_events(config, conference_repository)

        assert [(e.start_date, e.end_date) for e in events] == [
            (date(2010, 4, 5), date(2010, 4, 6)),
        ]


class TestTitlePatternCalendars:
    """Calendars whose dates are located with titleRegex."""

    def test_start_and_end_groups(self, make_config):
        repository = InMemoryPageRepository([WikiPage("2022/04/28:2022/04/29_Test_Event_1")])
        config = make_config(
            r"titleRegex = (?<start>\d{4}/\d{2}/\d{2}):(?<end>\d{4}/\d{2}/\d{2})"
        )
        events = find_events(config, repository)

        assert len(events) == 1
        assert events[0].display_name == "Test Event 1"
        assert events[0].start_date == date(2022, 4, 28)
        assert events[0].end_date == date(2022, 4, 29)

    def test_end_before_start_is_one_day(self, make_config):
        repository = InMemoryPageRepository([WikiPage("2022/04/28:2022/04/20_Oops")])
        config = make_config(
            r"titleRegex = (?<start>\d{4}/\d{2}/\d{2}):(?<end>\d{4}/\d{2}/\d{2})"
        )
        events = find_events(config, repository)

        assert [(e.start_date, e.end_date) for e in events] == [
            (date(2022, 4, 28), date(2022, 4, 29)),
        ]

    def test_pages_not_matching_the_pattern_are_filtered(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("Meetup_2022/05/01"),
            WikiPage("Meetup_notes"),
        ])
        config = make_config(r"titleRegex = (\d{4}/\d{2}/\d{2})")
        events = find_events(config, repository)

        assert [e.display_name for e in events] == ["Meetup"]

    def test_anchored_pattern_after_prefix(self, make_config):
        """Test the pattern is anchored at the end of the prefix, in the query and the strategy alike."""
        repository = InMemoryPageRepository([
            WikiPage("Events/2022/04/28_Party"),
            WikiPage("Events/Party_2022/04/29"),
        ])
        config = make_config("prefix = Events/\ntitleRegex = ^(\\d{4}/\\d{2}/\\d{2})")
        events = find_events(config, repository)

        assert [(e.start_date, e.end_date, e.url) for e in events] == [
            (date(2022, 4, 28), date(2022, 4, 29), "/wiki/Events/2022/04/28_Party"),
        ]


class TestColors:
    """Category and keyword coloring."""

    def setup_method(self):
        """Set up test fixtures."""
        self.repository = InMemoryPageRepository([
            WikiPage("Meetup/2022-05-01", text="Regular meetup", categories=["Public holidays"]),
            WikiPage("Meetup/2022-05-03", text="Meetup CANCELLED"),
            WikiPage("Meetup/2022-05-05", text="Cancelled too", categories=["Public holidays"]),
            WikiPage("Meetup/2022-05-07", text="Regular meetup"),
        ])
        self.options = (
            "prefix = Meetup/\ndateFormat = Y-m-d\n"
            "categorycolor.Public holidays = red\n"
            "keywordcolor.cancelled = gray"
        )

    def test_colors(self, make_config):
        events = find_events(make_config(self.options), self.repository)
        assert [e.color for e in events] == ["red", "gray", "red", None]

    def test_missing_color_is_omitted(self, make_config):
        events = find_events(make_config(self.options), self.repository)
        assert "color" not in events[-1].to_dict()

    def test_text_is_requested_only_for_keywords(self, make_config):
        engine = EventCalendarEngine(make_config(CONFERENCE_OPTIONS), Mock())
        assert engine.build_query().with_text is False
        engine = EventCalendarEngine(make_config(self.options), Mock())
        query = engine.build_query()
        assert query.with_text is True
        assert query.colored_categories == ["Public_holidays"]


class TestSnippets:
    """Calendars that show HTML snippets instead of names."""

    def setup_method(self):
        """Set up test fixtures."""
        self.renderer = Mock(side_effect=lambda text: f"<p>{text}</p>")
        self.options = CONFERENCE_OPTIONS + "\nsymbols = 20"

    def test_snippets_replace_names(self, make_config, conference_repository):
        cache = InMemorySnippetCache()
        events = find_events(
            make_config(self.options),
            conference_repository,
            renderer=self.renderer,
            snippet_cache=cache,
        )

        assert [e.display_name for e in events] == ["<p>Opening day</p>", "<p>Closing day</p>"]
        assert cache.get("eventcalendar-snippet-101") == "<p>Opening day</p>"
        assert cache.get("eventcalendar-snippet-102") == "<p>Closing day</p>"

    def test_snippets_are_truncated(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("Conferences/05_April_2010", text="A very long description"),
        ])
        events = find_events(make_config(self.options), repository, renderer=self.renderer)
        assert events[0].display_name == "<p>A very long descr</p>"

    def test_cached_snippet_skips_rendering(self, make_config, conference_pages):
        cache = InMemorySnippetCache()
        cache.set("eventcalendar-snippet-101", "<b>Cached</b>")
        repository = InMemoryPageRepository(conference_pages, snippet_cache=cache)

        events = find_events(make_config(self.options), repository, renderer=self.renderer)

        assert events[0].display_name == "<b>Cached</b>"
        self.renderer.assert_called_once_with("Closing day")

    def test_snippet_names_are_trimmed_like_titles(self, make_config):
        repository = InMemoryPageRepository([
            WikiPage("Conferences/05_April_2010", text=" Opening day: "),
            WikiPage("Conferences/07_April_2010", text="/Keynote/\n"),
        ])
        events = find_events(make_config(self.options), repository)
        assert [e.display_name for e in events] == ["Opening day", "Keynote"]

    def test_query_asks_for_text_and_cached_snippet(self, make_config):
        query = EventCalendarEngine(make_config(self.options), Mock()).build_query()
        assert query.with_text is True
        assert query.with_cached_snippet is True


class TestErrors:
    """Errors surface to the caller instead of yielding a partial calendar."""

    @pytest.mark.parametrize("body", [
        "dateFormat = Y/m/Q",
        "limit = many",
        "titleRegex = (",
        "namespace = Nowhere",
        "order = random",
    ])
    def test_invalid_options(self, make_config, body):
        with pytest.raises(ConfigurationError):
            make_config(body)

    def test_repository_failure_propagates(self, make_config):
        repository = Mock()
        repository.find.side_effect = RuntimeError("database unavailable")
        with pytest.raises(RuntimeError, match="database unavailable"):
            find_events(make_config(CONFERENCE_OPTIONS), repository)

    def test_cache_failure_propagates(self, make_config, conference_repository):
        cache = Mock()
        cache.set.side_effect = OSError("disk full")
        with pytest.raises(OSError):
            find_events(make_config(CONFERENCE_OPTIONS + "\nsymbols = 20"), conference_repository,
                        snippet_cache=cache)


def test_summary_is_logged(make_config, conference_repository, caplog):
    caplog.set_level(logging.INFO, logger="event_calendar.engine")
    find_events(make_config(CONFERENCE_OPTIONS), conference_repository)
    assert "3 pages: 2 events extracted, 1 after merging" in caplog.text
