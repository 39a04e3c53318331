"""Checks run on a new comic before it is recorded."""

from typing import List

from comic_tracker.core import ComicFields


def _check_name(label: str, full: str, short: str, prioritize_short: bool, max_length: int) -> List[str]:
    if len(full) <= max_length:
        return []
    if prioritize_short and short and len(short) < max_length:
        return []
    return [f"{label} is longer than {max_length} characters and needs a prioritized short form"]


def validate_comic_fields(values: ComicFields, max_length: int) -> List[str]:
    """Return the problems with a new comic, an empty list when it is valid.

    Brand and series are required. Any name longer than ``max_length`` must
    come with a prioritized short form that fits. Numbers must not be
    negative.
    """
    values = values.normalized()
    problems: List[str] = []

    if not values.brand_name:
        problems.append("Brand is required")
    else:
        problems += _check_name(
            "Brand", values.brand_name, values.short_brand_name, values.prioritize_short_brand, max_length
        )

    if not values.series_name:
        problems.append("Series is required")
    else:
        problems += _check_name(
            "Series", values.series_name, values.short_series_name, values.prioritize_short_series, max_length
        )

    if values.item_name:
        problems += _check_name(
            "Comic name", values.item_name, values.short_item_name, values.prioritize_short_item_name, max_length
        )

    if values.issue_number < 0:
        problems.append("Issue number must not be negative")
    if values.total_pages < 0:
        problems.append("Total pages must not be negative")
    if values.year_first_published < 0:
        problems.append("Year first published must not be negative")

    return problems
