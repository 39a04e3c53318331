"""Tests for the display name helpers."""

from comic_tracker.core import ComicEvent, ComicItem, ComicSeries
from comic_tracker.services import (
    comic_label,
    comic_series_label,
    event_label,
    preferred_name,
    series_brand_label,
    series_label,
)


def test_preferred_name():
    assert preferred_name("The Amazing Spider-Man", "ASM", True) == "ASM"
    assert preferred_name("The Amazing Spider-Man", "ASM", False) == "The Amazing Spider-Man"
    assert preferred_name("Saga", "", True) == "Saga"


def test_series_label_adds_year_only_when_name_is_shared():
    comic = ComicItem(id=1, series_name="Daredevil", year_first_published=1964, issue_number=12)

    assert comic_series_label(comic, {"Daredevil": 1}) == "Daredevil #12"
    assert comic_series_label(comic, {"Daredevil": 2}) == "Daredevil (1964) #12"


def test_comic_label_with_brand_and_item_name():
    comic = ComicItem(
        id=1,
        brand_name="Marvel",
        series_name="The Amazing Spider-Man",
        short_series_name="ASM",
        prioritize_short_series=True,
        item_name="Kraven's Last Hunt",
        issue_number=293,
    )

    assert comic_label(comic, {}) == "Marvel:\nASM #293\nKraven's Last Hunt"


def test_comic_label_drops_brand_that_repeats_series():
    comic = ComicItem(
        id=1,
        brand_name="The Walking Dead",
        short_brand_name="TWD",
        prioritize_short_brand=True,
        series_name="The Walking Dead",
        year_first_published=2003,
        issue_number=4,
    )

    assert comic_label(comic, {"The Walking Dead": 1}) == "TWD #4"
    assert comic_label(comic, {"The Walking Dead": 2}) == "TWD (2003) #4"


def test_series_label_uses_short_form_when_too_long():
    series = ComicSeries(id=1, series_name="Star Wars: Knights of the Old Republic", short_series_name="KOTOR")

    assert series_label(series, 30) == "KOTOR"
    assert series_label(series, 60) == "Star Wars: Knights of the Old Republic"


def test_series_brand_label():
    series = ComicSeries(id=1, brand_name="Teenage Mutant Ninja Turtles", short_brand_name="TMNT")

    assert series_brand_label(series, 10) == "TMNT"
    assert series_brand_label(series, 40) == "Teenage Mutant Ninja Turtles"


def test_event_label():
    event = ComicEvent(id=1, brand_name="Marvel", short_brand_name="M", prioritize_short_brand=True, event_name="Civil War")
    assert event_label(event) == "M: Civil War"
