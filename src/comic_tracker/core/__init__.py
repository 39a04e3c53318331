"""Domain layer - Pure entities for comics, series and events."""

from .comic_event import EVENT_WIRE_FIELDS, ComicEvent
from .comic_item import ITEM_WIRE_FIELDS, ComicFields, ComicItem
from .comic_series import SERIES_WIRE_FIELDS, ComicSeries
from .id_allocator import EntityKind, IdAllocator
from .read_status import ReadStatus
from .record_codec import RecordDecodeError, WireField
from .sort_option import SortOption

__all__ = [
    "ComicItem",
    "ComicFields",
    "ComicSeries",
    "ComicEvent",
    "ReadStatus",
    "SortOption",
    "EntityKind",
    "IdAllocator",
    "WireField",
    "RecordDecodeError",
    "ITEM_WIRE_FIELDS",
    "SERIES_WIRE_FIELDS",
    "EVENT_WIRE_FIELDS",
]
