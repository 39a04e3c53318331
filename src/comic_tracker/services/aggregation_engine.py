"""Aggregation Engine - keeps comics, series and events consistent."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from comic_tracker.core import (
    ComicEvent,
    ComicFields,
    ComicItem,
    ComicSeries,
    EntityKind,
    IdAllocator,
    SortOption,
)

logger = logging.getLogger(__name__)

Aggregate = Union[ComicSeries, ComicEvent]


def _decrement(current: int, amount: int, label: str) -> int:
    """Subtract without going below zero, warning when the data disagrees."""
    result = current - amount
    if result < 0:
        logger.warning("%s would drop below zero (%d - %d), clamping to 0", label, current, amount)
        return 0
    return result


class AggregationEngine:
    """Owns the in-memory comic, series and event collections.

    Every change to a comic goes through this class so the series and event
    read counters always match the comics that are still recorded. Only
    ``issues_read`` and ``pages_read`` are derived; ``total_issues`` is left
    to the user.

    Also owns the series name usage index: how many series of different
    vintages share a display name. A count above one tells the UI to append
    the year when showing that name.
    """

    def __init__(self, allocator: Optional[IdAllocator] = None) -> None:
        self._allocator = allocator or IdAllocator()
        self._items: List[ComicItem] = []
        self._series: List[ComicSeries] = []
        self._events: List[ComicEvent] = []
        self._series_name_usages: Dict[str, int] = {}

    @property
    def allocator(self) -> IdAllocator:
        return self._allocator

    @property
    def series_name_usages(self) -> Dict[str, int]:
        """Read-only copy of the series name usage index."""
        return dict(self._series_name_usages)

    def series_name_usage(self, series_name: str) -> int:
        return self._series_name_usages.get(series_name, 0)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def replace_contents(
        self,
        items: Iterable[ComicItem],
        series: Iterable[ComicSeries],
        events: Iterable[ComicEvent],
    ) -> None:
        """Install freshly loaded collections.

        Reseeds the id allocator from the loaded ids, compacts away gaps and
        rebuilds the usage index.
        """
        self._items = list(items)
        self._series = list(series)
        self._events = list(events)

        self._allocator.seed(EntityKind.ITEM, self._items)
        self._allocator.seed(EntityKind.SERIES, self._series)
        self._allocator.seed(EntityKind.EVENT, self._events)

        for kind in EntityKind:
            self.recalculate_ids(kind)
        self.rebuild_series_name_usages()

    def rebuild_series_name_usages(self) -> None:
        self._series_name_usages = {}
        for series in self._series:
            self._series_name_usages[series.series_name] = self._series_name_usages.get(series.series_name, 0) + 1

    def collections(self) -> Dict[EntityKind, List]:
        """Collections keyed by kind, in id order, for the backup store."""
        return {
            EntityKind.ITEM: sorted(self._items, key=lambda r: r.id),
            EntityKind.SERIES: sorted(self._series, key=lambda r: r.id),
            EntityKind.EVENT: sorted(self._events, key=lambda r: r.id),
        }

    # ------------------------------------------------------------------
    # Comics
    # ------------------------------------------------------------------

    def add_item(self, values: ComicFields) -> ComicItem:
        """Record a new comic and roll it into its series and event.

        Touches exactly one series and at most one event. Saving is left to
        the caller.

        Raises:
            ValueError: If a numeric field is negative.
        """
        for name in ("year_first_published", "issue_number", "total_pages"):
            if getattr(values, name) < 0:
                raise ValueError(f"{name} must not be negative")

        item = ComicItem.from_fields(self._allocator.next_id(EntityKind.ITEM), values)
        self._items.append(item)

        series = self.find_series(item.series_name, item.year_first_published)
        if series is not None:
            series.issues_read += 1
            series.pages_read += item.total_pages
            series.update_recent_stats(item)
        else:
            series = ComicSeries.started_by(self._allocator.next_id(EntityKind.SERIES), item)
            self._series.append(series)
            self._series_name_usages[series.series_name] = self._series_name_usages.get(series.series_name, 0) + 1

        if item.event_name:
            event = self.find_event(item.event_name)
            if event is not None:
                event.issues_read += 1
                event.pages_read += item.total_pages
            else:
                self._events.append(ComicEvent.started_by(self._allocator.next_id(EntityKind.EVENT), item))

        return item

    def remove_item(self, item: ComicItem) -> None:
        """Forget a comic and take it back out of its series and event.

        A series whose read count reaches zero is deleted; events are kept
        even when empty. A missing series or event is skipped with a warning.
        """
        self._items = [existing for existing in self._items if existing is not item]

        series = self.find_series(item.series_name, item.year_first_published)
        if series is None:
            logger.warning("No series '%s' (%d) found for comic %d", item.series_name, item.year_first_published, item.id)
        else:
            label = f"Series '{series.series_name}' ({series.year_first_published})"
            series.issues_read = _decrement(series.issues_read, 1, f"{label} issues read")
            series.pages_read = _decrement(series.pages_read, item.total_pages, f"{label} pages read")
            if series.issues_read == 0:
                self._delete_series(series)

        if item.event_name:
            event = self.find_event(item.event_name)
            if event is None:
                logger.warning("No event '%s' found for comic %d", item.event_name, item.id)
            else:
                label = f"Event '{event.event_name}'"
                event.issues_read = _decrement(event.issues_read, 1, f"{label} issues read")
                event.pages_read = _decrement(event.pages_read, item.total_pages, f"{label} pages read")

    def delete_item(self, item_id: int) -> ComicItem:
        """Remove the comic with the given id.

        Raises:
            ValueError: If no comic has that id.
        """
        item = self.get_item(item_id)
        if item is None:
            raise ValueError(f"Comic not found: {item_id}")
        self.remove_item(item)
        return item

    def get_item(self, item_id: int) -> Optional[ComicItem]:
        return next((item for item in self._items if item.id == item_id), None)

    # ------------------------------------------------------------------
    # Series and events
    # ------------------------------------------------------------------

    def find_series(self, series_name: str, year_first_published: int) -> Optional[ComicSeries]:
        key = (series_name, year_first_published)
        return next((series for series in self._series if series.key == key), None)

    def find_event(self, event_name: str) -> Optional[ComicEvent]:
        return next((event for event in self._events if event.event_name == event_name), None)

    def set_series_total_issues(self, series_name: str, year_first_published: int, total_issues: int) -> ComicSeries:
        """Set the user-owned issue total of a series (0 means unknown).

        Raises:
            ValueError: If the series does not exist or the total is negative.
        """
        if total_issues < 0:
            raise ValueError("total_issues must not be negative")
        series = self.find_series(series_name, year_first_published)
        if series is None:
            raise ValueError(f"Series not found: {series_name} ({year_first_published})")
        series.total_issues = total_issues
        return series

    def set_event_total_issues(self, event_name: str, total_issues: int) -> ComicEvent:
        """Set the user-owned issue total of an event (0 means unknown).

        Raises:
            ValueError: If the event does not exist or the total is negative.
        """
        if total_issues < 0:
            raise ValueError("total_issues must not be negative")
        event = self._require_event(event_name)
        event.total_issues = total_issues
        return event

    def toggle_series_short_brand(self, series_name: str, year_first_published: int) -> ComicSeries:
        """Flip whether the series shows its short brand name.

        Raises:
            ValueError: If the series does not exist or has no short brand.
        """
        series = self.find_series(series_name, year_first_published)
        if series is None:
            raise ValueError(f"Series not found: {series_name} ({year_first_published})")
        if not series.short_brand_name:
            raise ValueError(f"Series has no short brand name: {series_name}")
        series.prioritize_short_brand = not series.prioritize_short_brand
        return series

    def toggle_event_short_brand(self, event_name: str) -> ComicEvent:
        """Flip whether the event shows its short brand name.

        Raises:
            ValueError: If the event does not exist or has no short brand.
        """
        event = self._require_event(event_name)
        if not event.short_brand_name:
            raise ValueError(f"Event has no short brand name: {event_name}")
        event.prioritize_short_brand = not event.prioritize_short_brand
        return event

    def delete_event(self, event_name: str) -> ComicEvent:
        """Delete an event on the user's request. Its comics are untouched.

        Raises:
            ValueError: If the event does not exist.
        """
        event = self._require_event(event_name)
        self._events = [existing for existing in self._events if existing is not event]
        return event

    def recalculate_ids(self, kind: EntityKind) -> None:
        """Renumber one collection 1..N, keeping its current id order."""
        collection = {
            EntityKind.ITEM: self._items,
            EntityKind.SERIES: self._series,
            EntityKind.EVENT: self._events,
        }[kind]
        collection.sort(key=lambda record: record.id)
        self._allocator.recompact(kind, collection)

    def rebuild_aggregates(self) -> None:
        """Recompute series and event read counters from the comics.

        Repair only: normal operation keeps the counters incrementally.
        Series without comics are dropped and missing ones created; events
        are never dropped and keep their user-owned totals.
        """
        tallies: Dict[Tuple[str, int], Tuple[int, int]] = {}
        event_tallies: Dict[str, Tuple[int, int]] = {}
        for item in sorted(self._items, key=lambda i: i.id):
            issues, pages = tallies.get(item.series_key, (0, 0))
            tallies[item.series_key] = (issues + 1, pages + item.total_pages)
            if item.event_name:
                issues, pages = event_tallies.get(item.event_name, (0, 0))
                event_tallies[item.event_name] = (issues + 1, pages + item.total_pages)

        kept_series = []
        for series in self._series:
            if series.key in tallies:
                series.issues_read, series.pages_read = tallies.pop(series.key)
                kept_series.append(series)
        self._series = kept_series

        for item in sorted(self._items, key=lambda i: i.id):
            if item.series_key in tallies:
                series = ComicSeries.started_by(self._allocator.next_id(EntityKind.SERIES), item)
                series.issues_read, series.pages_read = tallies.pop(item.series_key)
                self._series.append(series)
            else:
                existing = self.find_series(item.series_name, item.year_first_published)
                existing.update_recent_stats(item)

        for event in self._events:
            event.issues_read, event.pages_read = event_tallies.pop(event.event_name, (0, 0))
        for item in sorted(self._items, key=lambda i: i.id):
            if item.event_name in event_tallies:
                event = ComicEvent.started_by(self._allocator.next_id(EntityKind.EVENT), item)
                event.issues_read, event.pages_read = event_tallies.pop(item.event_name)
                self._events.append(event)

        self.rebuild_series_name_usages()

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_items(self, sort: SortOption = SortOption.ID) -> List[ComicItem]:
        """Comics, most recently read first unless sorted by pages."""
        if sort is SortOption.PAGES_READ:
            return sorted(self._items, key=lambda item: (item.total_pages, item.id), reverse=True)
        return sorted(self._items, key=lambda item: item.id, reverse=True)

    def list_series(self, sort: SortOption = SortOption.ID) -> List[ComicSeries]:
        return sorted(self._series, key=_aggregate_sort_key(sort), reverse=True)

    def list_events(self, sort: SortOption = SortOption.ID) -> List[ComicEvent]:
        return sorted(self._events, key=_aggregate_sort_key(sort), reverse=True)

    def _require_event(self, event_name: str) -> ComicEvent:
        event = self.find_event(event_name)
        if event is None:
            raise ValueError(f"Event not found: {event_name}")
        return event

    def _delete_series(self, series: ComicSeries) -> None:
        self._series = [existing for existing in self._series if existing is not series]
        remaining = self._series_name_usages.get(series.series_name, 0) - 1
        if remaining <= 0:
            self._series_name_usages.pop(series.series_name, None)
        else:
            self._series_name_usages[series.series_name] = remaining


def _aggregate_sort_key(sort: SortOption) -> Callable[[Aggregate], Tuple[int, ...]]:
    if sort is SortOption.PAGES_READ:
        return lambda record: (record.pages_read, record.id)
    if sort is SortOption.ISSUES_READ:
        return lambda record: (record.issues_read, record.id)
    return lambda record: (record.id,)


def issues_left(aggregate: Aggregate) -> int:
    """Issues still to read, 0 while the total is unknown.

    Computed signed: reading more issues than the recorded total gives a
    negative number rather than wrapping.
    """
    if aggregate.total_issues == 0:
        return 0
    return aggregate.total_issues - aggregate.issues_read
