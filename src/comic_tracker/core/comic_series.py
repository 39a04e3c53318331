"""Series aggregate entity."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .comic_item import ComicItem
from .record_codec import COUNT, FLAG, TEXT, decode_fields, encode_fields, wire_field


@dataclass
class ComicSeries:
    """Rolled-up reading stats for one series of one vintage.

    Two series that share a name but started in different years are
    separate entities; ``key`` is the (name, year) pair.

    Attributes:
        id: Unique identifier, also the order series were first read.
        issues_read: Number of live comics matching this series' key.
        total_issues: Issues in the series as entered by the user, 0 if unknown.
        pages_read: Summed page count of the matching comics.
        recent_issue_number: Issue of the comic most recently added to this series.
        recent_total_pages: Page count of that comic.
        recent_event_name: Event of that comic.
        recent_purpose: Purpose of that comic.
    """

    id: int
    brand_name: str = ""
    short_brand_name: str = ""
    prioritize_short_brand: bool = False

    series_name: str = ""
    short_series_name: str = ""
    prioritize_short_series: bool = False

    year_first_published: int = 0
    issues_read: int = 0
    total_issues: int = 0
    pages_read: int = 0

    recent_issue_number: int = 0
    recent_total_pages: int = 0
    recent_event_name: str = ""
    recent_purpose: str = ""

    @property
    def key(self) -> Tuple[str, int]:
        return (self.series_name, self.year_first_published)

    @classmethod
    def started_by(cls, series_id: int, comic: ComicItem) -> "ComicSeries":
        """Create a series seeded from the first comic read in it."""
        series = cls(
            id=series_id,
            brand_name=comic.brand_name,
            short_brand_name=comic.short_brand_name,
            prioritize_short_brand=comic.prioritize_short_brand,
            series_name=comic.series_name,
            short_series_name=comic.short_series_name,
            prioritize_short_series=comic.prioritize_short_series,
            year_first_published=comic.year_first_published,
            issues_read=1,
            total_issues=0,
            pages_read=comic.total_pages,
        )
        series.update_recent_stats(comic)
        return series

    def update_recent_stats(self, comic: ComicItem) -> None:
        """Remember the latest comic so a follow-on entry can be pre-filled."""
        self.recent_issue_number = comic.issue_number
        self.recent_total_pages = comic.total_pages
        self.recent_event_name = comic.event_name
        self.recent_purpose = comic.purpose

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self, SERIES_WIRE_FIELDS)

    @classmethod
    def from_dict(cls, data: Any) -> "ComicSeries":
        return cls(**decode_fields(data, SERIES_WIRE_FIELDS))


SERIES_WIRE_FIELDS = (
    wire_field("id", "id", COUNT, "seriesId", always=True),
    wire_field("brand_name", "brand", TEXT, "seriesBrand", "brandName", always=True),
    wire_field("short_brand_name", "sBrand", TEXT, "shortBrandName"),
    wire_field("prioritize_short_brand", "psBrand", FLAG, "prioritizeShortBrandName"),
    wire_field("series_name", "series", TEXT, "seriesTitle", "seriesName", always=True),
    wire_field("short_series_name", "sSeries", TEXT, "shortSeriesName"),
    wire_field("prioritize_short_series", "psSeries", FLAG, "prioritizeShortSeriesName"),
    wire_field("year_first_published", "year", COUNT, "yearFirstPublished", always=True),
    wire_field("issues_read", "issuesRead", COUNT, always=True),
    wire_field("total_issues", "totalIssues", COUNT),
    wire_field("pages_read", "pages", COUNT, "pagesRead", always=True),
    wire_field("recent_issue_number", "rIssue", COUNT, "recentComicIssueNumber", always=True),
    wire_field("recent_total_pages", "rTotalPages", COUNT, "recentComicTotalPages", always=True),
    wire_field("recent_event_name", "rEvent", TEXT, "recentComicEventName", always=True),
    wire_field("recent_purpose", "rPurpose", TEXT, "recentComicPurpose", always=True),
)
