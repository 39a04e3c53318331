"""Services layer - business logic over the comic collections."""

from comic_tracker.services.aggregation_engine import AggregationEngine, issues_left
from comic_tracker.services.comic_validation import validate_comic_fields
from comic_tracker.services.display_names import (
	comic_label,
	comic_series_label,
	event_label,
	preferred_name,
	series_brand_label,
	series_label,
)
from comic_tracker.services.settings_manager import SettingsManager

__all__ = [
	"AggregationEngine",
	"SettingsManager",
	"issues_left",
	"validate_comic_fields",
	"preferred_name",
	"comic_label",
	"comic_series_label",
	"series_label",
	"series_brand_label",
	"event_label",
]
