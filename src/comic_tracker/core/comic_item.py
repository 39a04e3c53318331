"""Domain entities for a single read comic."""

from dataclasses import dataclass, fields as dataclass_fields
from datetime import date
from typing import Any, Dict, Optional, Tuple

from .read_status import ReadStatus
from .record_codec import COUNT, DATE, FLAG, STATUS, TEXT, decode_fields, encode_fields, optional_date, wire_field


@dataclass
class ComicFields:
    """User-supplied values for a new comic, everything except the id.

    Attributes:
        brand_name: Brand the comic is from (Marvel, Star Wars, ...).
        series_name: Main name of the series the comic belongs to.
        item_name: Distinct title within the series, empty when issues are unnamed.
        year_first_published: Year the *series* first appeared, part of series identity.
        issue_number: Position within the series.
        total_pages: Page count of this comic.
        event_name: Crossover event the comic belongs to, empty for none.
        purpose: Why the comic was read.
        date_read: Day the comic was read, None when unknown.
        external_link: Reference link for finding the comic again.
        read_status: Read, skipped, or still to read.
    """

    brand_name: str = ""
    short_brand_name: str = ""
    prioritize_short_brand: bool = False

    series_name: str = ""
    short_series_name: str = ""
    prioritize_short_series: bool = False

    item_name: str = ""
    short_item_name: str = ""
    prioritize_short_item_name: bool = False

    year_first_published: int = 0
    issue_number: int = 0
    total_pages: int = 0
    event_name: str = ""
    purpose: str = ""
    date_read: Optional[date] = None
    external_link: str = ""
    read_status: ReadStatus = ReadStatus.NOT_READ

    def normalized(self) -> "ComicFields":
        """Return a copy with surrounding whitespace trimmed from every string."""
        values: Dict[str, Any] = {}
        for f in dataclass_fields(self):
            value = getattr(self, f.name)
            values[f.name] = value.strip() if isinstance(value, str) else value
        values["date_read"] = optional_date(values["date_read"])
        return ComicFields(**values)


@dataclass
class ComicItem:
    """One read comic book.

    The id is assigned at creation and also records read order: a higher id
    was read later.
    """

    id: int
    brand_name: str = ""
    short_brand_name: str = ""
    prioritize_short_brand: bool = False

    series_name: str = ""
    short_series_name: str = ""
    prioritize_short_series: bool = False

    item_name: str = ""
    short_item_name: str = ""
    prioritize_short_item_name: bool = False

    year_first_published: int = 0
    issue_number: int = 0
    total_pages: int = 0
    event_name: str = ""
    purpose: str = ""
    date_read: Optional[date] = None
    external_link: str = ""
    read_status: ReadStatus = ReadStatus.NOT_READ

    @classmethod
    def from_fields(cls, item_id: int, values: ComicFields) -> "ComicItem":
        return cls(id=item_id, **{f.name: getattr(values, f.name) for f in dataclass_fields(values)})

    @property
    def series_key(self) -> Tuple[str, int]:
        """Identity of the series this comic belongs to."""
        return (self.series_name, self.year_first_published)

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self, ITEM_WIRE_FIELDS)

    @classmethod
    def from_dict(cls, data: Any) -> "ComicItem":
        return cls(**decode_fields(data, ITEM_WIRE_FIELDS))


ITEM_WIRE_FIELDS = (
    wire_field("id", "id", COUNT, "comicId", "readId", always=True),
    wire_field("brand_name", "brand", TEXT, "brandName", always=True),
    wire_field("short_brand_name", "sBrand", TEXT, "shortBrandName"),
    wire_field("prioritize_short_brand", "psBrand", FLAG, "prioritizeShortBrandName"),
    wire_field("series_name", "series", TEXT, "seriesName", always=True),
    wire_field("short_series_name", "sSeries", TEXT, "shortSeriesName"),
    wire_field("prioritize_short_series", "psSeries", FLAG, "prioritizeShortSeriesName"),
    wire_field("item_name", "comic", TEXT, "comicName", "individualComicName"),
    wire_field("short_item_name", "sComic", TEXT, "shortComicName"),
    wire_field("prioritize_short_item_name", "psComic", FLAG, "prioritizeShortComicName"),
    wire_field("year_first_published", "year", COUNT, "yearFirstPublished", always=True),
    wire_field("issue_number", "issue", COUNT, "issueNumber", always=True),
    wire_field("total_pages", "pages", COUNT, "totalPages", always=True),
    wire_field("event_name", "event", TEXT, "eventName"),
    wire_field("purpose", "purpose", TEXT),
    wire_field("date_read", "date", DATE, "dateRead"),
    wire_field("external_link", "link", TEXT, "marvelUltimateLink"),
    wire_field("read_status", "read", STATUS, "comicRead", always=True),
)
