"""Event aggregate entity."""

from dataclasses import dataclass
from typing import Any, Dict

from .comic_item import ComicItem
from .record_codec import COUNT, FLAG, TEXT, decode_fields, encode_fields, wire_field


@dataclass
class ComicEvent:
    """Rolled-up reading stats for a crossover event.

    An event is identified by its name alone; the brand is display metadata.
    ``issues_read`` and ``pages_read`` follow the comics added and removed,
    ``total_issues`` belongs to the user.
    """

    id: int
    brand_name: str = ""
    short_brand_name: str = ""
    prioritize_short_brand: bool = False

    event_name: str = ""
    issues_read: int = 0
    total_issues: int = 0
    pages_read: int = 0

    @classmethod
    def started_by(cls, event_id: int, comic: ComicItem) -> "ComicEvent":
        return cls(
            id=event_id,
            brand_name=comic.brand_name,
            short_brand_name=comic.short_brand_name,
            prioritize_short_brand=comic.prioritize_short_brand,
            event_name=comic.event_name,
            issues_read=1,
            total_issues=0,
            pages_read=comic.total_pages,
        )

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self, EVENT_WIRE_FIELDS)

    @classmethod
    def from_dict(cls, data: Any) -> "ComicEvent":
        return cls(**decode_fields(data, EVENT_WIRE_FIELDS))


EVENT_WIRE_FIELDS = (
    wire_field("id", "id", COUNT, "eventId", always=True),
    wire_field("brand_name", "brand", TEXT, "brandName", always=True),
    wire_field("short_brand_name", "sBrand", TEXT, "shortBrandName"),
    wire_field("prioritize_short_brand", "psBrand", FLAG, "prioritizeShortBrandName"),
    wire_field("event_name", "event", TEXT, "eventName", always=True),
    wire_field("issues_read", "issuesRead", COUNT, always=True),
    wire_field("total_issues", "totalIssues", COUNT),
    wire_field("pages_read", "pages", COUNT, "pagesRead", always=True),
)
