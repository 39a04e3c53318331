#!/usr/bin/env python3
"""
Tests for the backup record codec - tolerant decode, compact encode.
"""

from datetime import date

import pytest

from comic_tracker.core import ComicEvent, ComicItem, ComicSeries, ReadStatus, RecordDecodeError


def make_item(**overrides):
    values = dict(
        id=7,
        brand_name="Marvel",
        short_brand_name="MCU",
        prioritize_short_brand=True,
        series_name="The Amazing Spider-Man",
        short_series_name="ASM",
        prioritize_short_series=False,
        item_name="Kraven's Last Hunt",
        short_item_name="KLH",
        prioritize_short_item_name=True,
        year_first_published=1963,
        issue_number=293,
        total_pages=32,
        event_name="Kraven's Last Hunt",
        purpose="Kraven",
        date_read=date(2024, 8, 9),
        external_link="https://example.com/asm-293",
        read_status=ReadStatus.READ,
    )
    values.update(overrides)
    return ComicItem(**values)


class TestComicItemDecode:
    """Decoding must tolerate anything older backups may hold."""

    def test_missing_link_and_read_fall_back_to_defaults(self):
        data = {"id": 1, "brand": "Marvel", "series": "X-Men", "year": 1991, "issue": 1, "pages": 40}

        item = ComicItem.from_dict(data)

        assert item.external_link == ""
        assert item.read_status is ReadStatus.NOT_READ

    def test_empty_object_decodes_to_all_defaults(self):
        item = ComicItem.from_dict({})

        assert item.id == 0
        assert item.brand_name == ""
        assert item.prioritize_short_brand is False
        assert item.total_pages == 0
        assert item.date_read is None
        assert item.read_status is ReadStatus.NOT_READ

    def test_flags_accept_integers_and_booleans(self):
        as_ints = ComicItem.from_dict({"psBrand": 1, "psSeries": 0, "psComic": 1})
        as_bools = ComicItem.from_dict({"psBrand": True, "psSeries": False, "psComic": True})

        assert (as_ints.prioritize_short_brand, as_ints.prioritize_short_series) == (True, False)
        assert (as_bools.prioritize_short_brand, as_bools.prioritize_short_series) == (True, False)
        assert as_ints.prioritize_short_item_name is True

    def test_legacy_long_keys_are_accepted(self):
        data = {
            "readId": 3,
            "brand": "Five Nights At Freddy's",
            "seriesName": "Fazbear Frights",
            "individualComicName": "Into The Pit",
            "yearFirstPublished": 2019,
            "issueNumber": 1,
            "totalPages": 240,
            "eventName": "",
            "marvelUltimateLink": "https://example.com/pit",
            "comicRead": "Skipped",
        }

        item = ComicItem.from_dict(data)

        assert item.id == 3
        assert item.series_name == "Fazbear Frights"
        assert item.item_name == "Into The Pit"
        assert item.total_pages == 240
        assert item.external_link == "https://example.com/pit"
        assert item.read_status is ReadStatus.SKIPPED

    def test_unknown_keys_are_ignored(self):
        item = ComicItem.from_dict({"id": 2, "rating": 5, "notes": "great"})
        assert item.id == 2

    def test_null_counts_as_missing(self):
        item = ComicItem.from_dict({"id": 2, "event": None, "date": None})
        assert item.event_name == ""
        assert item.date_read is None

    def test_legacy_reference_seconds_date(self):
        item = ComicItem.from_dict({"date": 86400 * 365 + 3600.5})
        assert item.date_read == date(2002, 1, 1)

    def test_iso_datetime_date(self):
        item = ComicItem.from_dict({"date": "2024-08-09T21:15:00Z"})
        assert item.date_read == date(2024, 8, 9)

    def test_read_status_member_name_is_accepted(self):
        assert ComicItem.from_dict({"read": "NotRead"}).read_status is ReadStatus.NOT_READ
        assert ComicItem.from_dict({"read": "Not Read"}).read_status is ReadStatus.NOT_READ

    @pytest.mark.parametrize(
        "data",
        [
            {"id": "1"},
            {"pages": -3},
            {"issue": 1.5},
            {"year": True},
            {"brand": 12},
            {"psBrand": 2},
            {"date": "yesterday"},
            {"read": "Maybe"},
        ],
    )
    def test_wrong_shapes_raise(self, data):
        with pytest.raises(RecordDecodeError):
            ComicItem.from_dict(data)

    def test_non_object_record_raises(self):
        with pytest.raises(RecordDecodeError, match="JSON object"):
            ComicItem.from_dict(["id", 1])

    def test_decode_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ComicItem.from_dict({"id": -1})


class TestComicItemEncode:
    """Encoding keeps files compact by dropping defaults."""

    def test_defaults_are_omitted(self):
        item = ComicItem(id=1, brand_name="Image", series_name="Invincible", year_first_published=2003, issue_number=1, total_pages=28)

        data = item.to_dict()

        assert data == {
            "id": 1,
            "brand": "Image",
            "series": "Invincible",
            "year": 2003,
            "issue": 1,
            "pages": 28,
            "read": "Not Read",
        }

    def test_flags_are_written_as_integers(self):
        data = make_item().to_dict()

        assert data["psBrand"] == 1
        assert data["psComic"] == 1
        assert "psSeries" not in data

    def test_date_is_written_as_iso_day(self):
        assert make_item().to_dict()["date"] == "2024-08-09"

    def test_round_trip_keeps_every_field(self):
        item = make_item()
        assert ComicItem.from_dict(item.to_dict()) == item

    def test_round_trip_of_defaults(self):
        item = ComicItem(id=4)
        assert ComicItem.from_dict(item.to_dict()) == item


class TestAggregateCodec:
    def test_series_round_trip(self):
        series = ComicSeries(
            id=2,
            brand_name="The Walking Dead",
            short_brand_name="TWD",
            prioritize_short_brand=True,
            series_name="The Walking Dead",
            year_first_published=2003,
            issues_read=3,
            total_issues=193,
            pages_read=90,
            recent_issue_number=3,
            recent_total_pages=30,
            recent_event_name="",
            recent_purpose="Catch up",
        )

        assert ComicSeries.from_dict(series.to_dict()) == series

    def test_series_unset_total_is_omitted(self):
        data = ComicSeries(id=1, series_name="Saga", year_first_published=2012, issues_read=1).to_dict()

        assert "totalIssues" not in data
        assert data["rEvent"] == ""
        assert data["rIssue"] == 0

    def test_series_legacy_keys(self):
        data = {"seriesId": 5, "seriesBrand": "Image", "seriesTitle": "Saga", "year": 2012, "issuesRead": 2, "pagesRead": 44}

        series = ComicSeries.from_dict(data)

        assert series.id == 5
        assert series.brand_name == "Image"
        assert series.series_name == "Saga"
        assert series.pages_read == 44
        assert series.total_issues == 0

    def test_event_round_trip_and_omission(self):
        event = ComicEvent(id=1, brand_name="Marvel", event_name="Secret Wars", issues_read=2, pages_read=60)

        data = event.to_dict()

        assert data == {"id": 1, "brand": "Marvel", "event": "Secret Wars", "issuesRead": 2, "pages": 60}
        assert ComicEvent.from_dict(data) == event

    def test_event_total_issues_written_when_set(self):
        event = ComicEvent(id=1, event_name="Civil War", total_issues=98)
        assert event.to_dict()["totalIssues"] == 98
