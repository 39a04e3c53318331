"""Persistence Session - wires the aggregation engine to the backup store."""

import logging
from enum import Enum
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from comic_tracker.core import ComicEvent, ComicFields, ComicItem, ComicSeries, EntityKind, SortOption
from comic_tracker.io import BackupStatus, BackupStore, resolve_root
from comic_tracker.services import AggregationEngine, SettingsManager, validate_comic_fields

logger = logging.getLogger(__name__)


class SaveStatus(Enum):
    """What the save indicator shows."""

    SAVED = "saved"
    FAILED = "failed"
    PENDING = "pending"


class PersistenceSession(QObject):
    """Loads the catalogue at startup and saves it after changes.

    The UI supplies field values and triggers operations here; it never
    edits the records directly. With auto-save on, each change is written
    immediately. With it off, the save status becomes PENDING until
    ``save_all_data`` is called.
    """

    # Emitted with the new SaveStatus after every save or unsaved change
    save_status_changed = Signal(object)
    # Emitted after the collections change in memory
    data_changed = Signal()

    def __init__(
        self,
        engine: AggregationEngine,
        store: BackupStore,
        settings: SettingsManager,
    ) -> None:
        super().__init__()

        if engine is None:
            raise ValueError("AggregationEngine must not be None")
        if store is None:
            raise ValueError("BackupStore must not be None")
        if settings is None:
            raise ValueError("SettingsManager must not be None")

        self._engine = engine
        self._store = store
        self._settings = settings
        self._last_load_status: Optional[BackupStatus] = None
        self._save_status = SaveStatus.SAVED

    @classmethod
    def from_settings(cls, settings: SettingsManager) -> "PersistenceSession":
        """Build a session with a store rooted where the settings say."""
        store = BackupStore(
            root=resolve_root(settings.get_data_root()),
            keep_backups=settings.get_keep_backups(),
        )
        return cls(engine=AggregationEngine(), store=store, settings=settings)

    @property
    def engine(self) -> AggregationEngine:
        return self._engine

    @property
    def last_load_status(self) -> Optional[BackupStatus]:
        return self._last_load_status

    @property
    def save_status(self) -> SaveStatus:
        return self._save_status

    def start(self) -> BackupStatus:
        """Load the newest backup and make sure today's folder holds a copy.

        Returns:
            SUCCESS, or MISSING when some or all data did not exist yet.

        Raises:
            RuntimeError: If any backup file failed to load. Carrying on with
                empty data would overwrite the user's backups on next save.
        """
        self._store.prepare_folders()

        status = self.load_all_data()
        if status is BackupStatus.FAILURE:
            raise RuntimeError(f"Could not load all data files from {self._store.load_folder}")

        if self._store.save_folder_is_new:
            saved = self.save_all_data()
            logger.info("Saving data to new folder: %s", "successful" if saved else "failed")
        return status

    def load_all_data(self) -> BackupStatus:
        """Read all backups into the engine.

        The engine is only replaced when nothing failed, so a broken file
        never wipes what is already in memory. When some kinds are missing
        next to ones that loaded, the series and event counters are rebuilt
        from the comics.
        """
        result = self._store.load_all()
        self._last_load_status = result.status
        if result.status is BackupStatus.FAILURE:
            return result.status

        self._engine.replace_contents(
            items=result.collections.get(EntityKind.ITEM, []),
            series=result.collections.get(EntityKind.SERIES, []),
            events=result.collections.get(EntityKind.EVENT, []),
        )
        if result.status is BackupStatus.MISSING and any(result.collections.values()):
            logger.warning("Backup in %s is incomplete, rebuilding series and events", self._store.load_folder)
            self._engine.rebuild_aggregates()
        self.data_changed.emit()
        return result.status

    @Slot()
    def save_all_data(self) -> bool:
        """Write every collection to today's folder."""
        status = self._store.save_all(self._engine.collections())
        self._set_save_status(SaveStatus.SAVED if status is BackupStatus.SUCCESS else SaveStatus.FAILED)
        return status is BackupStatus.SUCCESS

    def list_items(self, sort: SortOption = SortOption.ID) -> List[ComicItem]:
        return self._engine.list_items(sort)

    def list_series(self, sort: SortOption = SortOption.ID) -> List[ComicSeries]:
        return self._engine.list_series(sort)

    def list_events(self, sort: SortOption = SortOption.ID) -> List[ComicEvent]:
        return self._engine.list_events(sort)

    def add_comic(self, values: ComicFields) -> ComicItem:
        """Validate and record a new comic.

        Raises:
            ValueError: If the fields fail validation.
        """
        problems = validate_comic_fields(values, self._settings.get_max_display_length())
        if problems:
            raise ValueError("; ".join(problems))
        item = self._engine.add_item(values.normalized())
        self._after_change()
        return item

    def delete_comic(self, item_id: int) -> ComicItem:
        """Delete a comic by id.

        Raises:
            ValueError: If no comic has that id.
        """
        item = self._engine.delete_item(item_id)
        self._after_change()
        return item

    def set_series_total_issues(self, series_name: str, year_first_published: int, total_issues: int) -> ComicSeries:
        series = self._engine.set_series_total_issues(series_name, year_first_published, total_issues)
        self._after_change()
        return series

    def set_event_total_issues(self, event_name: str, total_issues: int) -> ComicEvent:
        event = self._engine.set_event_total_issues(event_name, total_issues)
        self._after_change()
        return event

    def toggle_series_short_brand(self, series_name: str, year_first_published: int) -> ComicSeries:
        series = self._engine.toggle_series_short_brand(series_name, year_first_published)
        self._after_change()
        return series

    def toggle_event_short_brand(self, event_name: str) -> ComicEvent:
        event = self._engine.toggle_event_short_brand(event_name)
        self._after_change()
        return event

    def delete_event(self, event_name: str) -> ComicEvent:
        event = self._engine.delete_event(event_name)
        self._after_change()
        return event

    def _after_change(self) -> None:
        self.data_changed.emit()
        if self._settings.is_auto_save_enabled():
            self.save_all_data()
        else:
            self._set_save_status(SaveStatus.PENDING)

    def _set_save_status(self, status: SaveStatus) -> None:
        self._save_status = status
        self.save_status_changed.emit(status)
