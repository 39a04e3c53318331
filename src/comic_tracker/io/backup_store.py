"""JSON backup files for comics, series and events."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from comic_tracker.core import ComicEvent, ComicItem, ComicSeries, EntityKind

from .backup_folders import (
    DEFAULT_KEEP_BACKUPS,
    backup_filename,
    format_folder_date,
    resolve_load_folder,
    resolve_save_folder,
)

logger = logging.getLogger(__name__)


class BackupStatus(Enum):
    """Outcome of a backup read or write.

    MISSING means there was nothing to read yet, which is not an error.
    """

    SUCCESS = "success"
    FAILURE = "failure"
    MISSING = "missing"


@dataclass
class ReadResult:
    status: BackupStatus
    records: List[Any] = field(default_factory=list)


@dataclass
class LoadResult:
    status: BackupStatus
    collections: Dict[EntityKind, List[Any]] = field(default_factory=dict)


RECORD_TYPES = {
    EntityKind.ITEM: ComicItem,
    EntityKind.SERIES: ComicSeries,
    EntityKind.EVENT: ComicEvent,
}


def combine_statuses(statuses: Sequence[BackupStatus]) -> BackupStatus:
    """Any failure wins, then any missing, otherwise success."""
    if BackupStatus.FAILURE in statuses:
        return BackupStatus.FAILURE
    if BackupStatus.MISSING in statuses:
        return BackupStatus.MISSING
    return BackupStatus.SUCCESS


class BackupStore:
    """Reads and writes one JSON file per record kind inside dated folders.

    Every I/O or decode error is reported as ``BackupStatus.FAILURE``;
    nothing raised by the file system or the decoder escapes this class.
    Folders are resolved once by ``prepare_folders``: the load folder is the
    newest dated folder holding backups, the save folder is today's. Today's
    folder is only created when something is written to it, so a launch that
    fails to load leaves nothing behind that a later launch could load.
    """

    def __init__(
        self,
        root: Path,
        keep_backups: int = DEFAULT_KEEP_BACKUPS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.root = Path(root)
        self.keep_backups = keep_backups
        self._today = today
        self.load_folder: Optional[Path] = None
        self.save_folder: Optional[Path] = None
        self._save_day: Optional[date] = None

    def prepare_folders(self) -> None:
        """Resolve (and rotate) the load folder and pick today's save folder."""
        self.load_folder = resolve_load_folder(self.root, self.keep_backups)
        self._save_day = self._today()
        self.save_folder = self.root / format_folder_date(self._save_day)

    @property
    def save_folder_is_new(self) -> bool:
        """True when today's folder is not the folder data was loaded from."""
        if self.save_folder is None:
            return False
        return self.load_folder is None or self.load_folder.name != self.save_folder.name

    def write_collection(
        self, kind: EntityKind, records: Sequence[Any], folder: Optional[Path] = None
    ) -> BackupStatus:
        """Replace the backup file for one kind.

        The file is written to a temporary sibling first and renamed over the
        old one, so readers never see a half-written file.
        """
        folder = folder or self._ensure_save_folder()
        if folder is None:
            return BackupStatus.FAILURE

        target = Path(folder) / backup_filename(kind)
        try:
            payload = json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to encode %s: %s", kind.value, e)
            return BackupStatus.FAILURE

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as e:
            logger.warning("Failed to back up %s to %s: %s", kind.value, target, e)
            return BackupStatus.FAILURE
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.exception("Failed to clean up temporary file %s", tmp_path)

        return BackupStatus.SUCCESS

    def read_collection(self, kind: EntityKind, folder: Optional[Path] = None) -> ReadResult:
        """Read the backup file for one kind.

        Returns:
            MISSING when there is no folder or no file, FAILURE when the file
            cannot be read or decoded, otherwise SUCCESS with the records.
        """
        folder = folder or self.load_folder
        if folder is None:
            return ReadResult(BackupStatus.MISSING)

        source = Path(folder) / backup_filename(kind)
        if not source.exists():
            logger.info("No backup file for %s in %s", kind.value, folder)
            return ReadResult(BackupStatus.MISSING)

        record_type = RECORD_TYPES[kind]
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
            records = [record_type.from_dict(entry) for entry in data]
        except (OSError, RecursionError, TypeError, ValueError) as e:
            logger.warning("Failed to decode %s from %s: %s", kind.value, source, e)
            return ReadResult(BackupStatus.FAILURE)

        logger.info("Loaded %d records from %s", len(records), source.name)
        return ReadResult(BackupStatus.SUCCESS, records)

    def save_all(self, collections: Mapping[EntityKind, Sequence[Any]]) -> BackupStatus:
        """Write every kind; one failed kind does not stop the others."""
        statuses = [self.write_collection(kind, collections.get(kind, [])) for kind in EntityKind]
        status = BackupStatus.FAILURE if BackupStatus.FAILURE in statuses else BackupStatus.SUCCESS
        if status is BackupStatus.SUCCESS:
            logger.info("Backup successful: %s", self.save_folder)
        return status

    def _ensure_save_folder(self) -> Optional[Path]:
        """Create today's folder on first write, None when that is impossible."""
        if self._save_day is None:
            logger.warning("No save folder resolved, cannot back up")
            return None
        try:
            return resolve_save_folder(self.root, self._save_day)
        except RuntimeError as e:
            logger.warning("%s", e)
            return None

    def load_all(self) -> LoadResult:
        """Read every kind and combine the outcomes.

        Collections that read successfully are returned even when another
        kind was missing.
        """
        results = {kind: self.read_collection(kind) for kind in EntityKind}
        status = combine_statuses([result.status for result in results.values()])
        return LoadResult(status, {kind: result.records for kind, result in results.items()})
