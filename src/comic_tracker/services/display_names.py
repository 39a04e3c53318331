"""Display strings for comics, series and events."""

from typing import Mapping

from comic_tracker.core import ComicEvent, ComicItem, ComicSeries


def preferred_name(full: str, short: str, prioritize_short: bool) -> str:
    """The short form when it is prioritized and set, else the full name."""
    if prioritize_short and short:
        return short
    return full


def _numbering(comic: ComicItem, series_name_usages: Mapping[str, int]) -> str:
    suffix = ""
    if series_name_usages.get(comic.series_name, 0) > 1:
        suffix += f" ({comic.year_first_published})"
    return f"{suffix} #{comic.issue_number}"


def comic_series_label(comic: ComicItem, series_name_usages: Mapping[str, int]) -> str:
    """Series name, vintage when the name is ambiguous, then the issue number.

    Example: ``Daredevil (1964) #12``.
    """
    label = preferred_name(comic.series_name, comic.short_series_name, comic.prioritize_short_series)
    return label + _numbering(comic, series_name_usages)


def comic_label(comic: ComicItem, series_name_usages: Mapping[str, int]) -> str:
    """Multi-line label for the recent comics list.

    The brand line is dropped when it repeats the series name, and the item
    name gets its own line when set.
    """
    brand = preferred_name(comic.brand_name, comic.short_brand_name, comic.prioritize_short_brand)
    if comic.brand_name == comic.series_name:
        label = brand + _numbering(comic, series_name_usages)
    else:
        label = f"{brand}:\n{comic_series_label(comic, series_name_usages)}"
    item_name = preferred_name(comic.item_name, comic.short_item_name, comic.prioritize_short_item_name)
    if item_name:
        label += f"\n{item_name}"
    return label


def series_label(series: ComicSeries, max_length: int) -> str:
    """Full series name if it fits, else the shortest name available."""
    if len(series.series_name) < max_length:
        return series.series_name
    shortest = series.series_name
    if series.short_series_name:
        if len(series.short_series_name) < max_length:
            return series.short_series_name
        if len(series.short_series_name) < len(shortest):
            shortest = series.short_series_name
    return shortest


def series_brand_label(series: ComicSeries, max_length: int) -> str:
    if len(series.brand_name) > max_length and series.short_brand_name:
        return series.short_brand_name
    return series.brand_name


def event_label(event: ComicEvent) -> str:
    brand = preferred_name(event.brand_name, event.short_brand_name, event.prioritize_short_brand)
    return f"{brand}: {event.event_name}"
