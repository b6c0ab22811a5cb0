"""Merge same-named events that cover consecutive days into multi-day events.

Pages such as "Conference/05_April_2010" and "Conference/06_April_2010" each
yield a one-day event named "Conference"; the calendar should show a single
event from April 5 to April 7 (exclusive) instead.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from event_calendar.config import ORDER_GROUPED, ORDER_START, ORDERS
from event_calendar.event_record import EventRecord


logger = logging.getLogger(__name__)


class IntervalMerger:
    """Groups events by display name and conflates contiguous intervals.

    Records can be fed one at a time with :meth:`add` (cheap conflation
    against the last record of the group, which handles pages arriving in date
    order) and are then fully merged by :meth:`finish`. Records are copied on
    the way in, so the caller's objects are never modified.

    Different display names are independent timelines and never interact.
    """

    def __init__(self):
        # Insertion order of the dict is the first-appearance order of names.
        self.groups: dict[str, list[EventRecord]] = {}
        self.streaming_merges = 0

    def add(self, display_name: str, record: EventRecord) -> None:
        """Add one record, conflating it with the group's last record when they touch."""
        group = self.groups.setdefault(display_name, [])
        record = replace(record)

        if group:
            last = group[-1]
            if last.is_adjacent_to(record):
                last.end_date = record.end_date
                self.streaming_merges += 1
                return
            if record.is_adjacent_to(last):
                # Pages listed in descending date order; the earlier record
                # keeps its url and color.
                record.end_date = last.end_date
                group[-1] = record
                self.streaming_merges += 1
                return

        group.append(record)

    @staticmethod
    def conflate(entries: list[EventRecord]) -> list[EventRecord]:
        """Exhaustively merge one group's entries.

        Entries are sorted by start date (stable). Each entry then absorbs the
        entries after it for as long as they start no later than its current
        end; the first gap ends the run. Overlapping entries are absorbed too,
        so the result has no overlaps and doesn't depend on input order.

        The earliest entry of each run keeps its url and color.
        """
        ordered = sorted(entries, key=lambda e: e.start_date)
        merged: list[EventRecord] = []
        for entry in ordered:
            if merged and entry.start_date <= merged[-1].end_date:
                if entry.end_date > merged[-1].end_date:
                    merged[-1].end_date = entry.end_date
                continue
            merged.append(replace(entry))
        return merged

    def finish(self, order: str = ORDER_GROUPED) -> list[EventRecord]:
        """Run the exhaustive pass on every group and return all events.

        Args:
            order: ``"grouped"`` keeps groups in first-appearance order of their
                name (each group sorted by start date); ``"start"`` sorts all
                events by start date.

        Returns:
            Merged events
        """
        if order not in ORDERS:
            raise ValueError(f"Unknown event order: {order!r}")

        events: list[EventRecord] = []
        for entries in self.groups.values():
            events.extend(self.conflate(entries))

        if order == ORDER_START:
            events.sort(key=lambda e: e.start_date)

        logger.debug(
            "Merged %s groups into %s events (%s streaming merges)",
            len(self.groups),
            len(events),
            self.streaming_merges,
        )
        return events


def merge(records: Iterable[tuple[str, EventRecord]], order: str = ORDER_GROUPED) -> list[EventRecord]:
    """Merge ``(display_name, record)`` pairs into the final event list.

    Merging an already merged list returns an equal list.
    """
    merger = IntervalMerger()
    for display_name, record in records:
        merger.add(display_name, record)
    return merger.finish(order)


def merge_events(events: Iterable[EventRecord], order: str = ORDER_GROUPED) -> list[EventRecord]:
    """Merge events grouped by their own display name."""
    return merge(((event.display_name, event) for event in events), order)
